"""Unit tests for the wallet ownership proof."""

import pytest
from solders.keypair import Keypair

from src.dm_common.errors import WalletNotAuthorizedError
from src.dm_gateway.auth.wallet_proof import ownership_message, verify_wallet_proof

NOW = 1_767_225_600
MAX_AGE = 300


def _signed(kp: Keypair, issued_at: int = NOW) -> tuple[str, str]:
    wallet = str(kp.pubkey())
    sig = kp.sign_message(ownership_message(wallet, issued_at))
    return wallet, str(sig)


def test_message_format() -> None:
    assert ownership_message("W", 12) == b"dark-ledger:positions:W:12"


def test_valid_proof_returns_wallet() -> None:
    kp = Keypair()
    wallet, sig = _signed(kp)
    assert verify_wallet_proof(wallet, NOW, sig, MAX_AGE, now=NOW + 10) == wallet


def test_signature_from_other_key_rejected() -> None:
    wallet, _ = _signed(Keypair())
    _, other_sig = _signed(Keypair())
    with pytest.raises(WalletNotAuthorizedError):
        verify_wallet_proof(wallet, NOW, other_sig, MAX_AGE, now=NOW)


def test_signature_over_other_timestamp_rejected() -> None:
    kp = Keypair()
    wallet, sig = _signed(kp, issued_at=NOW - 1)
    with pytest.raises(WalletNotAuthorizedError):
        verify_wallet_proof(wallet, NOW, sig, MAX_AGE, now=NOW)


def test_expired_proof_rejected() -> None:
    wallet, sig = _signed(Keypair())
    with pytest.raises(WalletNotAuthorizedError, match="expired"):
        verify_wallet_proof(wallet, NOW, sig, MAX_AGE, now=NOW + MAX_AGE + 1)


def test_future_proof_rejected() -> None:
    wallet, sig = _signed(Keypair())
    with pytest.raises(WalletNotAuthorizedError, match="future"):
        verify_wallet_proof(wallet, NOW, sig, MAX_AGE, now=NOW - 120)


def test_small_clock_skew_tolerated() -> None:
    wallet, sig = _signed(Keypair())
    assert verify_wallet_proof(wallet, NOW, sig, MAX_AGE, now=NOW - 5) == wallet


@pytest.mark.parametrize(
    "wallet,sig",
    [("not-base58-0OIl", "1" * 88), ("11111111111111111111111111111111", "garbage!")],
)
def test_malformed_inputs_rejected(wallet: str, sig: str) -> None:
    with pytest.raises(WalletNotAuthorizedError):
        verify_wallet_proof(wallet, NOW, sig, MAX_AGE, now=NOW)
