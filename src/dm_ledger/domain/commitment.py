"""Commitment scheme for encrypted trades.

commitment = sha256(canonical_json({market, amount, side}))

canonical_json uses sorted keys and compact separators so the same trade
always hashes to the same 32 bytes. The hash covers handles, kind tags and
gateway timestamps, never plaintext.
"""

import hashlib
import hmac
import json
import re

from src.dm_common.errors import InvalidCommitmentError
from src.dm_ledger.domain.models import EncryptedValue

COMMITMENT_HEX_LENGTH = 64

_HEX_RE = re.compile(r"^[0-9a-f]{64}$")


def _value_payload(value: EncryptedValue) -> dict[str, object]:
    return {"handle": value.handle, "timestamp": value.produced_at, "type": value.kind.value}


def compute_commitment(
    encrypted_amount: EncryptedValue,
    encrypted_side: EncryptedValue,
    market_address: str,
) -> str:
    """Return the 64-char lowercase hex commitment for an encrypted trade."""
    payload = {
        "market": market_address,
        "amount": _value_payload(encrypted_amount),
        "side": _value_payload(encrypted_side),
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()


def normalize_commitment(value: str) -> str:
    """Strip an optional 0x prefix and lowercase.

    Raises:
        InvalidCommitmentError: not exactly 32 bytes of hex.
    """
    candidate = value.strip().lower()
    if candidate.startswith("0x"):
        candidate = candidate[2:]
    if not _HEX_RE.match(candidate):
        raise InvalidCommitmentError()
    return candidate


def is_valid_commitment(value: str) -> bool:
    try:
        normalize_commitment(value)
    except InvalidCommitmentError:
        return False
    return True


def commitment_matches(
    commitment_hash: str,
    encrypted_amount: EncryptedValue,
    encrypted_side: EncryptedValue,
    market_address: str,
) -> bool:
    """Opening check: does the hash commit to exactly these values?"""
    if not is_valid_commitment(commitment_hash):
        return False
    expected = compute_commitment(encrypted_amount, encrypted_side, market_address)
    return hmac.compare_digest(normalize_commitment(commitment_hash), expected)
