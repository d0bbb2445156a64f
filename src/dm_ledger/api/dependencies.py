"""FastAPI dependencies for the ledger store and wallet ownership.

The ledger lives on app.state (built in the lifespan); tests wire a fresh
instance onto app.state per test.
"""

from typing import Annotated

from fastapi import Body, Depends, Request

from config.settings import settings
from src.dm_gateway.auth.wallet_proof import verify_wallet_proof
from src.dm_ledger.application.schemas import WalletProofRequest
from src.dm_ledger.application.service import LedgerApplicationService
from src.dm_ledger.domain.ledger import ConfidentialLedger


def get_ledger(request: Request) -> ConfidentialLedger:
    return request.app.state.ledger


def get_ledger_service(
    ledger: Annotated[ConfidentialLedger, Depends(get_ledger)],
) -> LedgerApplicationService:
    return LedgerApplicationService(ledger)


def get_verified_wallet(proof: Annotated[WalletProofRequest, Body()]) -> str:
    """Resolve the caller's wallet from a signed ownership proof.

    Raises WalletNotAuthorizedError (401) when the proof does not verify.
    """
    return verify_wallet_proof(
        proof.wallet_address,
        proof.issued_at,
        proof.signature,
        max_age_seconds=settings.WALLET_PROOF_MAX_AGE_SECONDS,
    )
