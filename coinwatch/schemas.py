from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class CoinSnapshot(BaseModel):
    """One row of /coins/markets, trimmed to the fields we expose."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str | None = None
    symbol: str | None = None
    current_price: float
    market_cap: float | None = None
    price_change_percentage_24h: float | None = None
    last_updated: str | None = None

class HistoryRecord(BaseModel):
    # Field names match the stored documents
    coinId: str
    name: str
    symbol: str
    price: float
    marketCap: float
    change24h: float
    timestamp: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_snapshot(cls, coin: CoinSnapshot, timestamp: datetime) -> "HistoryRecord":
        return cls(
            coinId=coin.id,
            name=coin.name,
            symbol=coin.symbol,
            price=coin.current_price,
            marketCap=coin.market_cap,
            change24h=coin.price_change_percentage_24h,
            timestamp=timestamp,
        )

class HistoryPoint(BaseModel):
    price: float
    timestamp: datetime
    change24h: float

class HistoryResponse(BaseModel):
    coinId: str
    recordsCount: int
    data: list[HistoryPoint]

class SnapshotResponse(BaseModel):
    success: bool = True
    message: str = "Snapshot stored successfully"
    recordsCount: int
    timestamp: datetime
