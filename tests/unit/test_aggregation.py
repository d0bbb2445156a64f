"""Tests for dm_ledger.domain.aggregation.compute_aggregate."""

from datetime import UTC, datetime, timedelta

import pytest

from src.dm_common.enums import PositionStatus, Side
from src.dm_ledger.domain.aggregation import compute_aggregate
from src.dm_ledger.domain.models import EncryptedPosition
from tests.helpers import make_amount, make_commitment, make_side

_T0 = datetime(2026, 1, 1, tzinfo=UTC)


def _pos(n: int, side: Side, status: PositionStatus = PositionStatus.CONFIRMED) -> EncryptedPosition:
    return EncryptedPosition(
        id=f"pos_{n}",
        wallet_address=f"wallet-{n}",
        market_address="M1",
        encrypted_amount=make_amount(),
        encrypted_side=make_side(),
        commitment_hash=make_commitment(str(n)),
        submitted_at=_T0 + timedelta(seconds=n),
        status=status,
        side_hint=side,
    )


class TestComputeAggregate:
    def test_empty_defaults_to_even_odds(self) -> None:
        agg = compute_aggregate("M1", [])
        assert agg.total_positions == 0
        assert agg.yes_positions == 0
        assert agg.no_positions == 0
        assert agg.estimated_yes_probability == 0.5
        assert agg.estimated_no_probability == 0.5
        assert agg.last_updated is None

    def test_counts_and_probabilities(self) -> None:
        agg = compute_aggregate("M1", [_pos(1, Side.YES), _pos(2, Side.YES), _pos(3, Side.NO)])
        assert agg.total_positions == 3
        assert agg.yes_positions == 2
        assert agg.no_positions == 1
        assert agg.estimated_yes_probability == pytest.approx(2 / 3)
        assert agg.estimated_no_probability == pytest.approx(1 / 3)

    def test_probabilities_sum_to_one(self) -> None:
        positions = [_pos(i, Side.YES if i % 3 else Side.NO) for i in range(7)]
        agg = compute_aggregate("M1", positions)
        assert agg.estimated_yes_probability + agg.estimated_no_probability == pytest.approx(1.0)
        assert agg.yes_positions + agg.no_positions == agg.total_positions

    def test_settled_positions_excluded(self) -> None:
        agg = compute_aggregate(
            "M1",
            [_pos(1, Side.YES, PositionStatus.SETTLED), _pos(2, Side.NO)],
        )
        assert agg.total_positions == 1
        assert agg.no_positions == 1
        assert agg.estimated_no_probability == 1.0

    def test_pending_positions_counted(self) -> None:
        agg = compute_aggregate("M1", [_pos(1, Side.YES, PositionStatus.PENDING)])
        assert agg.total_positions == 1

    def test_last_updated_is_newest_counted_submission(self) -> None:
        agg = compute_aggregate(
            "M1", [_pos(5, Side.YES), _pos(2, Side.NO), _pos(9, Side.YES, PositionStatus.SETTLED)]
        )
        assert agg.last_updated == _T0 + timedelta(seconds=5)
