"""dm_ledger REST endpoints.

POST /ledger/positions                     : submit an encrypted position
GET  /ledger/markets/{address}/aggregate   : public market sentiment
GET  /ledger/aggregates                    : sentiment for every market
GET  /ledger/commitments/{hash}            : public commitment check
POST /ledger/wallet-positions              : own positions (signed proof)
GET  /ledger/activity                      : masked activity feed
GET  /ledger/stats                         : ledger-wide counters
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.dm_common.response import ApiResponse, success_response
from src.dm_ledger.api.dependencies import get_ledger_service, get_verified_wallet
from src.dm_ledger.application.schemas import SubmitPositionRequest
from src.dm_ledger.application.service import LedgerApplicationService

router = APIRouter(prefix="/ledger", tags=["ledger"])

ServiceDep = Annotated[LedgerApplicationService, Depends(get_ledger_service)]


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


@router.post("/positions", status_code=201)
async def submit_position(
    body: SubmitPositionRequest,
    request: Request,
    service: ServiceDep,
) -> ApiResponse:
    result = service.submit_position(body)
    return success_response(result.model_dump(mode="json"), _request_id(request))


@router.get("/markets/{market_address}/aggregate")
async def get_market_aggregate(
    market_address: str,
    request: Request,
    service: ServiceDep,
) -> ApiResponse:
    result = service.get_market_aggregate(market_address)
    return success_response(result.model_dump(mode="json"), _request_id(request))


@router.get("/aggregates")
async def list_aggregates(request: Request, service: ServiceDep) -> ApiResponse:
    result = service.get_all_aggregates()
    return success_response(
        [a.model_dump(mode="json") for a in result], _request_id(request)
    )


@router.get("/commitments/{commitment_hash}")
async def verify_commitment(
    commitment_hash: str,
    request: Request,
    service: ServiceDep,
) -> ApiResponse:
    result = service.verify_commitment(commitment_hash)
    return success_response(result.model_dump(mode="json"), _request_id(request))


@router.post("/wallet-positions")
async def get_wallet_positions(
    request: Request,
    service: ServiceDep,
    wallet: Annotated[str, Depends(get_verified_wallet)],
) -> ApiResponse:
    result = service.get_wallet_positions(wallet)
    return success_response(result.model_dump(mode="json"), _request_id(request))


@router.get("/activity")
async def get_activity(
    request: Request,
    service: ServiceDep,
    limit: int = Query(50, ge=1, le=100),
) -> ApiResponse:
    result = service.get_recent_activity(limit)
    return success_response(result.model_dump(mode="json"), _request_id(request))


@router.get("/stats")
async def get_stats(request: Request, service: ServiceDep) -> ApiResponse:
    result = service.get_stats()
    return success_response(result.model_dump(mode="json"), _request_id(request))
