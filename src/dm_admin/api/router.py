# src/dm_admin/api/router.py
"""Admin REST API.

POST /admin/markets/{address}/settle         : resolve a market's positions
POST /admin/positions/{hash}/settlement      : record decrypted amounts
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.dm_admin.application.service import AdminService
from src.dm_common.response import ApiResponse, success_response
from src.dm_gateway.auth.dependencies import require_admin
from src.dm_ledger.api.dependencies import get_ledger
from src.dm_ledger.application.schemas import RecordSettlementRequest, SettleMarketRequest
from src.dm_ledger.domain.ledger import ConfidentialLedger

router = APIRouter(prefix="/admin", tags=["admin"])


def get_admin_service(
    ledger: Annotated[ConfidentialLedger, Depends(get_ledger)],
) -> AdminService:
    return AdminService(ledger)


@router.post("/markets/{market_address}/settle")
async def settle_market(
    market_address: str,
    body: SettleMarketRequest,
    request: Request,
    admin: Annotated[str, Depends(require_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> ApiResponse:
    result = service.settle_market(market_address, body.outcome, admin)
    return success_response(
        result.model_dump(mode="json"), getattr(request.state, "request_id", None)
    )


@router.post("/positions/{commitment_hash}/settlement")
async def record_settlement(
    commitment_hash: str,
    body: RecordSettlementRequest,
    request: Request,
    admin: Annotated[str, Depends(require_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> ApiResponse:
    result = service.record_settlement(commitment_hash, body)
    return success_response(
        result.model_dump(mode="json"), getattr(request.state, "request_id", None)
    )
