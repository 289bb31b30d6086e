import logging
from datetime import datetime
from typing import Iterable
from pydantic import ValidationError
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from ..errors import PersistenceError
from ..schemas import CoinSnapshot, HistoryPoint, HistoryRecord

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 24
HISTORY_INDEX = [("coinId", ASCENDING), ("timestamp", DESCENDING)]
PROJECTION = {"_id": 0, "price": 1, "timestamp": 1, "change24h": 1}

class HistoryRepo:
    """Append-only store of per-coin snapshots, read back newest N at a time."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def ensure_indexes(self) -> str:
        return self.collection.create_index(HISTORY_INDEX)

    def append_snapshot(self, timestamp: datetime, coins: Iterable[CoinSnapshot]) -> int:
        """
        Write one record per coin, one at a time, all stamped with `timestamp`.
        The first failure aborts the rest; records already written stay.
        """
        written = 0
        for coin in coins:
            try:
                record = HistoryRecord.from_snapshot(coin, timestamp)
                self.collection.insert_one(record.model_dump())
            except (ValidationError, PyMongoError) as e:
                logger.error("Snapshot aborted after %d records at %s: %s", written, coin.id, e)
                raise PersistenceError(str(e)) from e
            written += 1
        return written

    def query_history(self, coin_id: str, limit: int = DEFAULT_LIMIT) -> list[HistoryPoint]:
        """Most recent `limit` records for a coin, returned oldest first. Empty list if none."""
        try:
            cursor = (
                self.collection.find({"coinId": coin_id}, PROJECTION)
                .sort("timestamp", DESCENDING)
                .limit(limit)
            )
            docs = list(cursor)
            docs.reverse()
            return [HistoryPoint.model_validate(d) for d in docs]
        except (ValidationError, PyMongoError) as e:
            raise PersistenceError(str(e)) from e
