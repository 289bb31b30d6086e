import os

# Settings are validated at import time
os.environ.setdefault("DATABASE_URL", "mongodb://localhost:27017/coinwatch_test")

import mongomock
import pytest
from fastapi.testclient import TestClient

from coinwatch.main import app
from coinwatch.repos.history_repo import HistoryRepo
from coinwatch.routers.history import get_history_repo
from coinwatch.schemas import CoinSnapshot


def make_coin(coin_id="bitcoin", price=65000.0, **overrides):
    row = {
        "id": coin_id,
        "name": coin_id.title(),
        "symbol": coin_id[:3],
        "current_price": price,
        "market_cap": 1_280_000_000_000,
        "price_change_percentage_24h": -1.25,
        "last_updated": "2024-05-01T12:00:00.000Z",
    }
    row.update(overrides)
    return row


@pytest.fixture
def collection():
    return mongomock.MongoClient(tz_aware=True).db.histories


@pytest.fixture
def repo(collection):
    return HistoryRepo(collection)


@pytest.fixture
def upstream(monkeypatch):
    """Replace the CoinGecko call; set `.rows` or `.error` in the test."""
    class Upstream:
        rows = [make_coin()]
        error = None
        calls = 0

        def __call__(self):
            self.calls += 1
            if self.error is not None:
                raise self.error
            return [CoinSnapshot.model_validate(r) for r in self.rows]

    fake = Upstream()
    monkeypatch.setattr("coinwatch.clients.coingecko.fetch_top_coins", fake)
    return fake


@pytest.fixture
def client(repo):
    # No `with` block: lifespan (real MongoDB connect) is not run
    app.dependency_overrides[get_history_repo] = lambda: repo
    yield TestClient(app)
    app.dependency_overrides.clear()
