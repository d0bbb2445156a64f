"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.dm_admin.api.router import router as admin_router
from src.dm_common.errors import AppError
from src.dm_common.id_generator import SnowflakeIdGenerator
from src.dm_common.response import error_response
from src.dm_gateway.middleware.request_log import RequestLogMiddleware
from src.dm_ledger.api.router import router as ledger_router
from src.dm_ledger.domain.ledger import ConfidentialLedger
from src.dm_market.api.router import router as market_router
from src.dm_market.domain.register import MarketRegister
from src.dm_market.infrastructure.indexer_client import IndexerClient

logging.getLogger("src").setLevel(settings.LOG_LEVEL)
logging.getLogger("dm").setLevel(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: build the in-memory stores and indexer client. Shutdown: close the client."""
    app.state.ledger = ConfidentialLedger(
        id_generator=SnowflakeIdGenerator(machine_id=settings.SNOWFLAKE_MACHINE_ID, prefix="pos_"),
        enforce_commitment_opening=settings.LEDGER_ENFORCE_COMMITMENT_OPENING,
    )
    app.state.register = MarketRegister()
    indexer = IndexerClient(
        settings.MARKET_INDEXER_URL, timeout=settings.MARKET_INDEXER_TIMEOUT_SECONDS
    )
    app.state.indexer = indexer
    yield
    await indexer.aclose()


app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(ledger_router, prefix="/api/v1")
app.include_router(market_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
