"""Admin application service: settlement and decryption fill-in."""

import logging

from src.dm_common.enums import Side
from src.dm_ledger.application.schemas import (
    RecordSettlementRequest,
    RecordSettlementResponse,
    SettleMarketResponse,
    SettlementOut,
)
from src.dm_ledger.domain.ledger import ConfidentialLedger

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, ledger: ConfidentialLedger) -> None:
        self._ledger = ledger

    def settle_market(
        self, market_address: str, outcome: Side, admin: str
    ) -> SettleMarketResponse:
        logger.info(
            "Settlement of %s... to %s requested by %s", market_address[:8], outcome.value, admin
        )
        result = self._ledger.settle_market(market_address, outcome)
        return SettleMarketResponse.from_domain(market_address, outcome, result)

    def record_settlement(
        self, commitment_hash: str, body: RecordSettlementRequest
    ) -> RecordSettlementResponse:
        position = self._ledger.record_settlement_amount(
            commitment_hash,
            decrypted_amount=body.decrypted_amount,
            payout=body.payout,
            attestation=body.attestation,
        )
        return RecordSettlementResponse(
            position_id=position.id,
            commitment_hash=position.commitment_hash,
            settlement=SettlementOut.from_domain(position.settlement),  # type: ignore[arg-type]
        )
