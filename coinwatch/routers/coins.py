import logging
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..clients import coingecko
from ..errors import UpstreamError
from ..schemas import CoinSnapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/coins", tags=["coins"])

@router.get("", response_model=list[CoinSnapshot])
def get_coins():
    """Live top-10 coins straight from CoinGecko. Nothing is stored."""
    try:
        coins = coingecko.fetch_top_coins()
    except UpstreamError as e:
        logger.error("Error fetching coins: %s", e)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch coins data from CoinGecko", "details": str(e)},
        )
    logger.info("Returned %d coins", len(coins))
    return coins
