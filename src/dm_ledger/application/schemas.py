"""Pydantic schemas for dm_ledger API requests and responses.

Encrypted values keep the encryption gateway's wire shape
({"handle", "timestamp", "type"}) in both directions.

Public responses (aggregate, verification, activity, stats) are built from
domain objects that carry no wallet or ciphertext fields, so they cannot
leak them. Only WalletPositionsResponse returns handles, and only behind a
wallet-ownership proof.
"""

from pydantic import BaseModel, Field

from src.dm_common.datetime_utils import iso_or_none
from src.dm_common.enums import EncryptedValueKind, PositionStatus, Side
from src.dm_ledger.domain.models import (
    ActivityEntry,
    CommitmentVerification,
    EncryptedPosition,
    EncryptedValue,
    LedgerStats,
    MarketAggregate,
    Settlement,
    SettlementResult,
)

PRIVACY_NOTE = "Individual positions are encrypted. Only aggregates are visible."

# ---------------------------------------------------------------------------
# Encrypted value
# ---------------------------------------------------------------------------


class EncryptedValueIn(BaseModel):
    handle: str = Field(min_length=1)
    timestamp: int = Field(ge=0)
    type: EncryptedValueKind

    def to_domain(self) -> EncryptedValue:
        return EncryptedValue(handle=self.handle, produced_at=self.timestamp, kind=self.type)


class EncryptedValueOut(BaseModel):
    handle: str
    timestamp: int
    type: str

    @classmethod
    def from_domain(cls, v: EncryptedValue) -> "EncryptedValueOut":
        return cls(handle=v.handle, timestamp=v.produced_at, type=v.kind.value)


# ---------------------------------------------------------------------------
# Submit
# ---------------------------------------------------------------------------


class SubmitPositionRequest(BaseModel):
    wallet_address: str = Field(min_length=1)
    market_address: str = Field(min_length=1)
    encrypted_amount: EncryptedValueIn
    encrypted_side: EncryptedValueIn
    commitment_hash: str
    side: Side = Field(description="Cleartext direction tag used only for aggregates")


class SubmitPositionResponse(BaseModel):
    position_id: str
    commitment_hash: str
    status: PositionStatus
    submitted_at: str

    @classmethod
    def from_domain(cls, p: EncryptedPosition) -> "SubmitPositionResponse":
        return cls(
            position_id=p.id,
            commitment_hash=p.commitment_hash,
            status=p.status,
            submitted_at=p.submitted_at.isoformat(),
        )


# ---------------------------------------------------------------------------
# Public reads
# ---------------------------------------------------------------------------


class MarketAggregateResponse(BaseModel):
    market_address: str
    total_positions: int
    yes_positions: int
    no_positions: int
    estimated_yes_probability: float
    estimated_no_probability: float
    last_updated: str | None
    privacy_note: str = PRIVACY_NOTE

    @classmethod
    def from_domain(cls, a: MarketAggregate) -> "MarketAggregateResponse":
        return cls(
            market_address=a.market_address,
            total_positions=a.total_positions,
            yes_positions=a.yes_positions,
            no_positions=a.no_positions,
            estimated_yes_probability=a.estimated_yes_probability,
            estimated_no_probability=a.estimated_no_probability,
            last_updated=iso_or_none(a.last_updated),
        )


class CommitmentVerificationResponse(BaseModel):
    commitment_hash: str
    exists: bool
    market_address: str | None
    submitted_at: str | None

    @classmethod
    def from_domain(
        cls, commitment_hash: str, v: CommitmentVerification
    ) -> "CommitmentVerificationResponse":
        return cls(
            commitment_hash=commitment_hash,
            exists=v.exists,
            market_address=v.market_address,
            submitted_at=iso_or_none(v.submitted_at),
        )


class ActivityEntryOut(BaseModel):
    market_address: str
    wallet: str
    status: PositionStatus
    submitted_at: str

    @classmethod
    def from_domain(cls, e: ActivityEntry) -> "ActivityEntryOut":
        return cls(
            market_address=e.market_address,
            wallet=e.masked_wallet,
            status=e.status,
            submitted_at=e.submitted_at.isoformat(),
        )


class ActivityResponse(BaseModel):
    count: int
    activity: list[ActivityEntryOut]


class MarketSentimentOut(BaseModel):
    market_address: str
    total_positions: int
    yes_probability_pct: int
    no_probability_pct: int


class LedgerStatsResponse(BaseModel):
    total_markets: int
    total_positions: int
    unique_wallets: int
    total_encrypted_volume: str
    markets: list[MarketSentimentOut]

    @classmethod
    def build(
        cls, stats: LedgerStats, aggregates: list[MarketAggregate]
    ) -> "LedgerStatsResponse":
        return cls(
            total_markets=stats.total_markets,
            total_positions=stats.total_positions,
            unique_wallets=stats.unique_wallets,
            total_encrypted_volume=stats.total_encrypted_volume,
            markets=[
                MarketSentimentOut(
                    market_address=a.market_address,
                    total_positions=a.total_positions,
                    yes_probability_pct=round(a.estimated_yes_probability * 100),
                    no_probability_pct=round(a.estimated_no_probability * 100),
                )
                for a in aggregates
            ],
        )


# ---------------------------------------------------------------------------
# Wallet-gated reads
# ---------------------------------------------------------------------------


class WalletProofRequest(BaseModel):
    wallet_address: str = Field(min_length=32, max_length=44)
    issued_at: int = Field(gt=0, description="Unix seconds the proof was signed at")
    signature: str = Field(min_length=1, description="Base58 ed25519 signature")


class SettlementOut(BaseModel):
    won: bool
    settled_at: str
    decrypted_amount: str | None
    payout: str | None
    attestation: str | None

    @classmethod
    def from_domain(cls, s: Settlement) -> "SettlementOut":
        return cls(
            won=s.won,
            settled_at=s.settled_at.isoformat(),
            decrypted_amount=s.decrypted_amount,
            payout=s.payout,
            attestation=s.attestation,
        )


class WalletPositionOut(BaseModel):
    id: str
    market_address: str
    commitment_hash: str
    status: PositionStatus
    submitted_at: str
    encrypted_amount: EncryptedValueOut
    encrypted_side: EncryptedValueOut
    settlement: SettlementOut | None

    @classmethod
    def from_domain(cls, p: EncryptedPosition) -> "WalletPositionOut":
        return cls(
            id=p.id,
            market_address=p.market_address,
            commitment_hash=p.commitment_hash,
            status=p.status,
            submitted_at=p.submitted_at.isoformat(),
            encrypted_amount=EncryptedValueOut.from_domain(p.encrypted_amount),
            encrypted_side=EncryptedValueOut.from_domain(p.encrypted_side),
            settlement=SettlementOut.from_domain(p.settlement) if p.settlement else None,
        )


class WalletPositionsResponse(BaseModel):
    wallet_address: str
    position_count: int
    positions: list[WalletPositionOut]


# ---------------------------------------------------------------------------
# Settlement (admin)
# ---------------------------------------------------------------------------


class SettleMarketRequest(BaseModel):
    outcome: Side


class SettleMarketResponse(BaseModel):
    market_address: str
    outcome: Side
    settled_count: int
    winning_count: int
    losing_count: int

    @classmethod
    def from_domain(
        cls, market_address: str, outcome: Side, r: SettlementResult
    ) -> "SettleMarketResponse":
        return cls(
            market_address=market_address,
            outcome=outcome,
            settled_count=r.settled_count,
            winning_count=r.winning_count,
            losing_count=r.losing_count,
        )


class RecordSettlementRequest(BaseModel):
    decrypted_amount: str = Field(pattern=r"^\d+$")
    payout: str = Field(pattern=r"^\d+$")
    attestation: str = Field(min_length=1, description="Decryption service signature")


class RecordSettlementResponse(BaseModel):
    position_id: str
    commitment_hash: str
    settlement: SettlementOut
