"""LedgerApplicationService: thin composition layer over ConfidentialLedger.

Maps request schemas to domain calls and domain results to response
schemas. All business rules live in the ledger itself.
"""

from src.dm_ledger.application.schemas import (
    ActivityEntryOut,
    ActivityResponse,
    CommitmentVerificationResponse,
    LedgerStatsResponse,
    MarketAggregateResponse,
    SubmitPositionRequest,
    SubmitPositionResponse,
    WalletPositionOut,
    WalletPositionsResponse,
)
from src.dm_ledger.domain.ledger import ConfidentialLedger


class LedgerApplicationService:
    def __init__(self, ledger: ConfidentialLedger) -> None:
        self._ledger = ledger

    def submit_position(self, body: SubmitPositionRequest) -> SubmitPositionResponse:
        position = self._ledger.submit_position(
            wallet_address=body.wallet_address,
            market_address=body.market_address,
            encrypted_amount=body.encrypted_amount.to_domain(),
            encrypted_side=body.encrypted_side.to_domain(),
            commitment_hash=body.commitment_hash,
            side_hint=body.side,
        )
        return SubmitPositionResponse.from_domain(position)

    def get_market_aggregate(self, market_address: str) -> MarketAggregateResponse:
        return MarketAggregateResponse.from_domain(
            self._ledger.get_market_aggregate(market_address)
        )

    def get_all_aggregates(self) -> list[MarketAggregateResponse]:
        return [
            MarketAggregateResponse.from_domain(a) for a in self._ledger.get_all_aggregates()
        ]

    def verify_commitment(self, commitment_hash: str) -> CommitmentVerificationResponse:
        return CommitmentVerificationResponse.from_domain(
            commitment_hash, self._ledger.verify_commitment(commitment_hash)
        )

    def get_wallet_positions(self, verified_wallet: str) -> WalletPositionsResponse:
        positions = self._ledger.get_wallet_positions(verified_wallet)
        return WalletPositionsResponse(
            wallet_address=verified_wallet,
            position_count=len(positions),
            positions=[WalletPositionOut.from_domain(p) for p in positions],
        )

    def get_recent_activity(self, limit: int) -> ActivityResponse:
        entries = self._ledger.get_recent_activity(limit)
        return ActivityResponse(
            count=len(entries),
            activity=[ActivityEntryOut.from_domain(e) for e in entries],
        )

    def get_stats(self) -> LedgerStatsResponse:
        return LedgerStatsResponse.build(
            self._ledger.get_stats(), self._ledger.get_all_aggregates()
        )
