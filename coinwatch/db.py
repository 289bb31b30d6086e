import logging
from pymongo import MongoClient
from pymongo.collection import Collection
from .config import settings

logger = logging.getLogger(__name__)

_client: MongoClient | None = None

def connect() -> MongoClient:
    """Open the process-wide client once and ping it. Raises if the server is unreachable."""
    global _client
    if _client is None:
        client = MongoClient(
            settings.database_url,
            tz_aware=True,
            serverSelectionTimeoutMS=settings.db_connect_timeout_ms,
        )
        try:
            client.admin.command("ping")
        except Exception:
            client.close()
            raise
        _client = client
        logger.info("MongoDB connected")
    return _client

def close() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None

def is_connected() -> bool:
    # Reads the driver's last known topology, no round-trip
    if _client is None:
        return False
    return _client.topology_description.has_readable_server()

def get_history_collection() -> Collection:
    if _client is None:
        raise RuntimeError("MongoDB client is not initialised; call connect() at startup")
    db = _client.get_default_database(default=settings.database_name)
    return db[settings.history_collection]
