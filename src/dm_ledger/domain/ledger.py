"""ConfidentialLedger: in-memory store of encrypted positions.

One instance per process, created by the app lifespan and injected into
handlers. Tests build a fresh instance each.

Concurrency:
  - All mutations run under a single writer lock, so two submits of the
    same commitment cannot both succeed.
  - Per-market and per-wallet indexes are tuples replaced wholesale on
    write. Readers grab the current tuple without locking and always see a
    complete snapshot.
  - No method performs I/O or waits on anything but the writer lock.
"""

import dataclasses
import re
import logging
import threading

from src.dm_common.datetime_utils import utc_now
from src.dm_common.enums import EncryptedValueKind, PositionStatus, Side
from src.dm_common.errors import (
    CommitmentMismatchError,
    DuplicateCommitmentError,
    InvalidEncryptedValueKindError,
    InvalidSettlementPayoutError,
    PositionNotFoundError,
    PositionNotSettledError,
    SettlementAlreadyRecordedError,
)
from src.dm_common.id_generator import SnowflakeIdGenerator
from src.dm_ledger.domain.aggregation import compute_aggregate
from src.dm_ledger.domain.commitment import (
    commitment_matches,
    is_valid_commitment,
    normalize_commitment,
)
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

logger = logging.getLogger(__name__)

MAX_ACTIVITY_LIMIT = 100

_BASE_UNITS_RE = re.compile(r"\d+", re.ASCII)


def mask_wallet(wallet_address: str) -> str:
    """'7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU' -> '7xKX...gAsU'."""
    if len(wallet_address) <= 8:
        return "****"
    return f"{wallet_address[:4]}...{wallet_address[-4:]}"


def _check_kind(field: str, value: EncryptedValue, expected: EncryptedValueKind) -> None:
    if value.kind != expected:
        raise InvalidEncryptedValueKindError(field, expected.value, value.kind.value)


class ConfidentialLedger:
    def __init__(
        self,
        id_generator: SnowflakeIdGenerator | None = None,
        enforce_commitment_opening: bool = False,
    ) -> None:
        self._ids = id_generator or SnowflakeIdGenerator(prefix="pos_")
        self._enforce_opening = enforce_commitment_opening
        self._write_lock = threading.Lock()

        self._positions: dict[str, EncryptedPosition] = {}
        self._by_commitment: dict[str, str] = {}  # commitment -> position id, append-only
        self._by_market: dict[str, tuple[EncryptedPosition, ...]] = {}
        self._by_wallet: dict[str, tuple[str, ...]] = {}
        self._order: list[str] = []  # position ids, submission order

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def submit_position(
        self,
        wallet_address: str,
        market_address: str,
        encrypted_amount: EncryptedValue,
        encrypted_side: EncryptedValue,
        commitment_hash: str,
        side_hint: Side,
    ) -> EncryptedPosition:
        """Store an already-encrypted position.

        Raises:
            InvalidEncryptedValueKindError: amount/side carry the wrong kind tag.
            InvalidCommitmentError: hash is not 32 bytes of hex.
            CommitmentMismatchError: opening check enabled and hash does not
                commit to the submitted values.
            DuplicateCommitmentError: hash already stored.
        """
        _check_kind("encrypted_amount", encrypted_amount, EncryptedValueKind.AMOUNT)
        _check_kind("encrypted_side", encrypted_side, EncryptedValueKind.SIDE)
        commitment = normalize_commitment(commitment_hash)
        if self._enforce_opening and not commitment_matches(
            commitment, encrypted_amount, encrypted_side, market_address
        ):
            raise CommitmentMismatchError()

        with self._write_lock:
            if commitment in self._by_commitment:
                raise DuplicateCommitmentError()

            position = EncryptedPosition(
                id=self._ids.next_id(),
                wallet_address=wallet_address,
                market_address=market_address,
                encrypted_amount=encrypted_amount,
                encrypted_side=encrypted_side,
                commitment_hash=commitment,
                submitted_at=utc_now(),
                status=PositionStatus.CONFIRMED,
                side_hint=side_hint,
            )
            self._positions[position.id] = position
            self._by_commitment[commitment] = position.id
            self._by_market[market_address] = self._by_market.get(market_address, ()) + (position,)
            self._by_wallet[wallet_address] = self._by_wallet.get(wallet_address, ()) + (position.id,)
            self._order.append(position.id)

        logger.info(
            "Position %s... submitted for market %s...", position.id[:12], market_address[:8]
        )
        return position

    def settle_market(self, market_address: str, outcome: Side) -> SettlementResult:
        """Move every CONFIRMED position of the market to SETTLED.

        Already settled positions are skipped, so a repeated call returns
        zero counts. A market with no positions settles trivially.
        """
        winners = 0
        losers = 0
        with self._write_lock:
            current = self._by_market.get(market_address, ())
            if not current:
                return SettlementResult(settled_count=0, winning_count=0, losing_count=0)

            settled_at = utc_now()
            updated: list[EncryptedPosition] = []
            for p in current:
                if p.status != PositionStatus.CONFIRMED:
                    updated.append(p)
                    continue
                won = p.side_hint == outcome
                settled = dataclasses.replace(
                    p,
                    status=PositionStatus.SETTLED,
                    settlement=Settlement(won=won, settled_at=settled_at),
                )
                updated.append(settled)
                self._positions[p.id] = settled
                if won:
                    winners += 1
                else:
                    losers += 1
            self._by_market[market_address] = tuple(updated)

        logger.info(
            "Market %s... settled %s: %d winners, %d losers",
            market_address[:8], outcome.value, winners, losers,
        )
        return SettlementResult(
            settled_count=winners + losers, winning_count=winners, losing_count=losers
        )

    def record_settlement_amount(
        self,
        commitment_hash: str,
        decrypted_amount: str,
        payout: str,
        attestation: str,
    ) -> EncryptedPosition:
        """Attach amounts reported by the external decryption flow.

        The ledger never computes these; it only checks they are well-formed
        base-unit integers and that a losing position pays nothing.
        """
        if not all(_BASE_UNITS_RE.fullmatch(v) for v in (decrypted_amount, payout)):
            raise InvalidSettlementPayoutError("amounts must be non-negative integers")

        with self._write_lock:
            position = self._lookup_by_commitment(commitment_hash)
            if position is None:
                raise PositionNotFoundError()
            if position.status != PositionStatus.SETTLED or position.settlement is None:
                raise PositionNotSettledError()
            if position.settlement.is_recorded:
                raise SettlementAlreadyRecordedError()
            if not position.settlement.won and int(payout) != 0:
                raise InvalidSettlementPayoutError("losing position must pay 0")

            filled = dataclasses.replace(
                position,
                settlement=dataclasses.replace(
                    position.settlement,
                    decrypted_amount=decrypted_amount,
                    payout=payout,
                    attestation=attestation,
                ),
            )
            self._positions[filled.id] = filled
            self._by_market[filled.market_address] = tuple(
                filled if p.id == filled.id else p
                for p in self._by_market[filled.market_address]
            )

        logger.info("Settlement amounts recorded for position %s...", filled.id[:12])
        return filled

    # ------------------------------------------------------------------
    # Reads (lock-free snapshots)
    # ------------------------------------------------------------------

    def get_market_aggregate(self, market_address: str) -> MarketAggregate:
        return compute_aggregate(market_address, self._by_market.get(market_address, ()))

    def get_all_aggregates(self) -> list[MarketAggregate]:
        snapshot = dict(self._by_market)
        return [compute_aggregate(m, positions) for m, positions in snapshot.items()]

    def verify_commitment(self, commitment_hash: str) -> CommitmentVerification:
        position = self._lookup_by_commitment(commitment_hash)
        if position is None:
            return CommitmentVerification(exists=False)
        return CommitmentVerification(
            exists=True,
            market_address=position.market_address,
            submitted_at=position.submitted_at,
        )

    def get_wallet_positions(self, wallet_address: str) -> list[EncryptedPosition]:
        """Caller must have verified wallet ownership already."""
        ids = self._by_wallet.get(wallet_address, ())
        return [self._positions[pid] for pid in ids]

    def get_position(self, position_id: str) -> EncryptedPosition | None:
        return self._positions.get(position_id)

    def get_stats(self) -> LedgerStats:
        return LedgerStats(
            total_markets=len(self._by_market),
            total_positions=len(self._positions),
            unique_wallets=len(self._by_wallet),
        )

    def get_recent_activity(self, limit: int = 50) -> list[ActivityEntry]:
        limit = max(1, min(limit, MAX_ACTIVITY_LIMIT))
        recent_ids = self._order[-limit:]
        entries = []
        for pid in reversed(recent_ids):
            p = self._positions[pid]
            entries.append(
                ActivityEntry(
                    market_address=p.market_address,
                    masked_wallet=mask_wallet(p.wallet_address),
                    status=p.status,
                    submitted_at=p.submitted_at,
                )
            )
        return entries

    def _lookup_by_commitment(self, commitment_hash: str) -> EncryptedPosition | None:
        if not is_valid_commitment(commitment_hash):
            return None
        pid = self._by_commitment.get(normalize_commitment(commitment_hash))
        if pid is None:
            return None
        return self._positions[pid]
