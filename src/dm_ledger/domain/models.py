"""Domain models for dm_ledger: frozen dataclasses, no business logic.

Records are immutable. A status change or settlement fill-in builds a new
record with dataclasses.replace and swaps it in, so a reader never sees a
position half way through a transition.
"""

from dataclasses import dataclass
from datetime import datetime

from src.dm_common.enums import EncryptedValueKind, PositionStatus, Side


@dataclass(frozen=True)
class EncryptedValue:
    """Opaque ciphertext reference produced by the encryption gateway."""

    handle: str
    produced_at: int  # gateway timestamp, ms
    kind: EncryptedValueKind


@dataclass(frozen=True)
class Settlement:
    won: bool
    settled_at: datetime
    # Filled only by the external decryption flow
    decrypted_amount: str | None = None
    payout: str | None = None
    attestation: str | None = None

    @property
    def is_recorded(self) -> bool:
        return self.decrypted_amount is not None


@dataclass(frozen=True)
class EncryptedPosition:
    id: str
    wallet_address: str
    market_address: str
    encrypted_amount: EncryptedValue
    encrypted_side: EncryptedValue
    commitment_hash: str
    submitted_at: datetime
    status: PositionStatus
    # Cleartext direction tag; one public bit per position, used for aggregates only
    side_hint: Side
    settlement: Settlement | None = None


@dataclass(frozen=True)
class MarketAggregate:
    market_address: str
    total_positions: int
    yes_positions: int
    no_positions: int
    estimated_yes_probability: float
    estimated_no_probability: float
    last_updated: datetime | None


@dataclass(frozen=True)
class CommitmentVerification:
    """Public answer to "does this commitment exist?".

    Deliberately has no slot for wallet or encrypted fields.
    """

    exists: bool
    market_address: str | None = None
    submitted_at: datetime | None = None


@dataclass(frozen=True)
class SettlementResult:
    settled_count: int
    winning_count: int
    losing_count: int


@dataclass(frozen=True)
class LedgerStats:
    total_markets: int
    total_positions: int
    unique_wallets: int
    total_encrypted_volume: str = "ENCRYPTED"


@dataclass(frozen=True)
class ActivityEntry:
    market_address: str
    masked_wallet: str
    status: PositionStatus
    submitted_at: datetime
