import httpx
import logging
from typing import Dict, List
from pydantic import ValidationError
from ..config import settings
from ..errors import UpstreamError
from ..schemas import CoinSnapshot

logger = logging.getLogger(__name__)

UA = {"User-Agent": "coinwatch/1.0"}

# Top 10 by market cap, priced in USD, first page only
MARKETS_PARAMS = {"vs_currency": "usd", "order": "market_cap_desc", "per_page": 10, "page": 1}

def _headers() -> Dict[str, str]:
    headers = dict(UA)
    if settings.coingecko_api_key:
        # CoinGecko v3 Pro header (if you have a key)
        headers["x-cg-pro-api-key"] = settings.coingecko_api_key
    return headers

def fetch_top_coins() -> List[CoinSnapshot]:
    """
    Single attempt against /coins/markets. No retries: callers decide.
    Raises UpstreamError with the upstream message on any failure.
    """
    url = f"{settings.coingecko_base_url}/coins/markets"
    try:
        r = httpx.get(url, params=MARKETS_PARAMS, headers=_headers(),
                      timeout=settings.coingecko_timeout_seconds)
        r.raise_for_status()
        rows = r.json()
    except httpx.HTTPStatusError as e:
        raise UpstreamError(f"CoinGecko returned {e.response.status_code}: {e.response.text[:200]}") from e
    except httpx.HTTPError as e:
        raise UpstreamError(f"CoinGecko request failed: {e}") from e
    except ValueError as e:
        raise UpstreamError(f"CoinGecko returned invalid JSON: {e}") from e

    if not isinstance(rows, list):
        raise UpstreamError(f"Unexpected CoinGecko payload: {type(rows).__name__}")
    try:
        coins = [CoinSnapshot.model_validate(row) for row in rows]
    except ValidationError as e:
        raise UpstreamError(f"Malformed coin in CoinGecko payload: {e}") from e

    logger.info("Fetched %d coins from CoinGecko", len(coins))
    return coins
