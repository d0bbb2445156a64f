"""Wallet ownership proof: an ed25519 signature over a timestamped message.

The client signs

    dark-ledger:positions:<wallet address>:<issued_at unix seconds>

with the wallet's key and sends the base58 signature. The ledger itself
trusts whatever wallet this check hands it.
"""

import time

from solders.pubkey import Pubkey
from solders.signature import Signature

from src.dm_common.errors import WalletNotAuthorizedError

MESSAGE_PREFIX = "dark-ledger:positions"
CLOCK_SKEW_SECONDS = 30


def ownership_message(wallet_address: str, issued_at: int) -> bytes:
    return f"{MESSAGE_PREFIX}:{wallet_address}:{issued_at}".encode()


def verify_wallet_proof(
    wallet_address: str,
    issued_at: int,
    signature: str,
    max_age_seconds: int,
    now: float | None = None,
) -> str:
    """Return the wallet address once the proof checks out.

    Raises:
        WalletNotAuthorizedError: malformed key/signature, stale or future
            timestamp, or a signature that does not verify.
    """
    now = time.time() if now is None else now
    if issued_at > now + CLOCK_SKEW_SECONDS:
        raise WalletNotAuthorizedError("Ownership proof is dated in the future")
    if now - issued_at > max_age_seconds:
        raise WalletNotAuthorizedError("Ownership proof expired")

    try:
        pubkey = Pubkey.from_string(wallet_address)
        sig = Signature.from_string(signature)
    except ValueError:
        raise WalletNotAuthorizedError() from None

    if not sig.verify(pubkey, ownership_message(wallet_address, issued_at)):
        raise WalletNotAuthorizedError()
    return wallet_address
