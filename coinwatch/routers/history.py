import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..clients import coingecko
from ..db import get_history_collection
from ..errors import CoinwatchError, PersistenceError
from ..repos.history_repo import DEFAULT_LIMIT, HistoryRepo
from ..schemas import HistoryResponse, SnapshotResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/history", tags=["history"])

def get_history_repo() -> HistoryRepo:
    return HistoryRepo(get_history_collection())

@router.post("", status_code=201, response_model=SnapshotResponse)
def store_snapshot(repo: HistoryRepo = Depends(get_history_repo)):
    """
    Fetch the current top coins and persist one record per coin under a single timestamp.
    This is the only write path; nothing is retried.
    """
    try:
        coins = coingecko.fetch_top_coins()
        now = datetime.now(timezone.utc)
        # BSON dates keep milliseconds only; report what is stored
        timestamp = now.replace(microsecond=now.microsecond // 1000 * 1000)
        count = repo.append_snapshot(timestamp, coins)
    except CoinwatchError as e:
        logger.error("Error storing history: %s", e)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to store history snapshot", "details": str(e)},
        )

    logger.info("Saved %d records to history", count)
    return SnapshotResponse(recordsCount=count, timestamp=timestamp)

@router.get("/{coin_id}", response_model=HistoryResponse)
def get_history(
    coin_id: str,
    limit: int = Query(DEFAULT_LIMIT, ge=1, description="Most recent N snapshots to return"),
    repo: HistoryRepo = Depends(get_history_repo),
):
    """Chart data for one coin: the latest `limit` snapshots, oldest first."""
    logger.info("Fetching history for %s (limit=%d)", coin_id, limit)
    try:
        points = repo.query_history(coin_id, limit)
    except PersistenceError as e:
        logger.error("Error fetching history for %s: %s", coin_id, e)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch historical data", "details": str(e)},
        )

    if not points:
        return JSONResponse(
            status_code=404,
            content={
                "error": "No historical data found",
                "message": f"No history found for {coin_id}. Run POST /api/history first.",
                "coinId": coin_id,
            },
        )

    return HistoryResponse(coinId=coin_id, recordsCount=len(points), data=points)
