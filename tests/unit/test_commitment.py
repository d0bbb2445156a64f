"""Tests for dm_ledger.domain.commitment."""

import pytest

from src.dm_common.errors import InvalidCommitmentError
from src.dm_ledger.domain.commitment import (
    COMMITMENT_HEX_LENGTH,
    commitment_matches,
    compute_commitment,
    is_valid_commitment,
    normalize_commitment,
)
from tests.helpers import make_amount, make_side


class TestComputeCommitment:
    def test_fixed_size_lowercase_hex(self) -> None:
        h = compute_commitment(make_amount(), make_side(), "MKT1")
        assert len(h) == COMMITMENT_HEX_LENGTH
        assert h == h.lower()
        int(h, 16)  # parses as hex

    def test_deterministic(self) -> None:
        a = compute_commitment(make_amount(), make_side(), "MKT1")
        b = compute_commitment(make_amount(), make_side(), "MKT1")
        assert a == b

    def test_market_is_bound(self) -> None:
        assert compute_commitment(make_amount(), make_side(), "MKT1") != compute_commitment(
            make_amount(), make_side(), "MKT2"
        )

    def test_handles_are_bound(self) -> None:
        base = compute_commitment(make_amount("0xa"), make_side("0xs"), "MKT1")
        assert base != compute_commitment(make_amount("0xb"), make_side("0xs"), "MKT1")
        assert base != compute_commitment(make_amount("0xa"), make_side("0xt"), "MKT1")

    def test_gateway_timestamp_is_bound(self) -> None:
        assert compute_commitment(make_amount(ts=1), make_side(), "M") != compute_commitment(
            make_amount(ts=2), make_side(), "M"
        )

    def test_swapping_amount_and_side_handles_changes_hash(self) -> None:
        a = compute_commitment(make_amount("0x1"), make_side("0x2"), "M")
        b = compute_commitment(make_amount("0x2"), make_side("0x1"), "M")
        assert a != b


class TestNormalizeCommitment:
    def test_strips_prefix_and_lowercases(self) -> None:
        raw = "0x" + "AB" * 32
        assert normalize_commitment(raw) == "ab" * 32

    def test_plain_hex_unchanged(self) -> None:
        assert normalize_commitment("cd" * 32) == "cd" * 32

    @pytest.mark.parametrize("bad", ["", "0x", "ab" * 31, "ab" * 33, "zz" * 32, "0x" + "g" * 64])
    def test_rejects_malformed(self, bad: str) -> None:
        with pytest.raises(InvalidCommitmentError):
            normalize_commitment(bad)

    def test_is_valid(self) -> None:
        assert is_valid_commitment("ef" * 32)
        assert not is_valid_commitment("not-a-hash")


class TestCommitmentMatches:
    def test_matches_own_opening(self) -> None:
        h = compute_commitment(make_amount(), make_side(), "MKT1")
        assert commitment_matches(h, make_amount(), make_side(), "MKT1")
        assert commitment_matches("0x" + h.upper(), make_amount(), make_side(), "MKT1")

    def test_rejects_other_opening(self) -> None:
        h = compute_commitment(make_amount(), make_side(), "MKT1")
        assert not commitment_matches(h, make_amount("0xother"), make_side(), "MKT1")

    def test_malformed_hash_never_matches(self) -> None:
        assert not commitment_matches("xyz", make_amount(), make_side(), "MKT1")
