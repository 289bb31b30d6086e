import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import db
from .config import settings
from .repos.history_repo import HistoryRepo
from .routers.coins import router as coins_router
from .routers.history import router as history_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "GET /api/coins": "Fetch live data from CoinGecko",
    "POST /api/history": "Store snapshot in database",
    "GET /api/history/:coinId": "Get historical data for chart",
}

@asynccontextmanager
async def lifespan(app: FastAPI):
    # No degraded mode: an unreachable database stops startup
    try:
        db.connect()
        HistoryRepo(db.get_history_collection()).ensure_indexes()
    except Exception as e:
        logger.critical("MongoDB connection failed: %s", e)
        db.close()
        raise
    logger.info("Available endpoints:")
    for route, description in ENDPOINTS.items():
        logger.info("  %-26s - %s", route, description)
    try:
        yield
    finally:
        db.close()

app = FastAPI(title="Coinwatch API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(_: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"error": "Invalid request parameters", "details": details})

@app.get("/api/health")
def health():
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "Connected" if db.is_connected() else "Disconnected",
        "endpoints": ENDPOINTS,
    }

app.include_router(coins_router)
app.include_router(history_router)

def main():
    logger.info("Starting Coinwatch API on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())

if __name__ == "__main__":
    main()
