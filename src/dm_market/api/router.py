"""dm_market REST endpoints.

GET  /markets                : merged view: tracked first, then indexer
GET  /markets/tracked        : tracked markets with register stats
GET  /markets/{address}      : one market, tracked first, then indexer
POST /markets                : creation workflow hands over a new market (admin)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.dm_common.response import ApiResponse, success_response
from src.dm_gateway.auth.dependencies import require_admin
from src.dm_market.api.dependencies import get_catalog_service
from src.dm_market.application.schemas import CreateMarketRequest
from src.dm_market.application.service import MarketCatalogService

router = APIRouter(prefix="/markets", tags=["markets"])

ServiceDep = Annotated[MarketCatalogService, Depends(get_catalog_service)]


@router.get("")
async def list_markets(
    request: Request,
    service: ServiceDep,
    dark_only: bool = Query(False, description="Only markets collateralised by the dark mint"),
) -> ApiResponse:
    result = await service.list_markets(dark_only=dark_only)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))


@router.get("/tracked")
async def list_tracked_markets(
    request: Request,
    service: ServiceDep,
    creator: str | None = Query(None),
) -> ApiResponse:
    result = service.list_tracked(creator)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))


@router.get("/{market_address}")
async def get_market(
    market_address: str,
    request: Request,
    service: ServiceDep,
) -> ApiResponse:
    result = await service.get_market(market_address)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))


@router.post("", status_code=201)
async def track_market(
    body: CreateMarketRequest,
    request: Request,
    service: ServiceDep,
    admin: Annotated[str, Depends(require_admin)],
) -> ApiResponse:
    result = service.track_market(body)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))
