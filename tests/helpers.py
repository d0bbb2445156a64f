"""Builders shared by unit and integration tests."""

import hashlib
from datetime import UTC, datetime

from src.dm_common.enums import EncryptedValueKind
from src.dm_market.domain.models import (
    IndexedMarket,
    IndexedMarketAccount,
    TrackMarketParams,
    Unresolved,
)
from src.dm_ledger.domain.models import EncryptedValue

DARK_MINT = "JBxiN5BBM8ottNaUUpWw6EFtpMRd6iTnmLYrhZB5ArMo"
USDC_MINT = "Gh9ZwEmdLJ8DscKNTkTqPbNwLNNBjuSzaG9Vp2KGtKJr"


def make_commitment(seed: str) -> str:
    """Any 32-byte hex string is a well-formed commitment."""
    return hashlib.sha256(seed.encode()).hexdigest()


def make_amount(handle: str = "0xamount", ts: int = 1_738_000_000_000) -> EncryptedValue:
    return EncryptedValue(handle=handle, produced_at=ts, kind=EncryptedValueKind.AMOUNT)


def make_side(handle: str = "0xside", ts: int = 1_738_000_000_000) -> EncryptedValue:
    return EncryptedValue(handle=handle, produced_at=ts, kind=EncryptedValueKind.SIDE)


def make_track_params(public_key: str, **kwargs) -> TrackMarketParams:
    defaults = dict(
        public_key=public_key,
        question="Will BTC close above 150k this year?",
        creator="CreatorWa11et1111111111111111111111111111111",
        collateral_mint=USDC_MINT,
        initial_liquidity=5_000_000,
        end_time=int(datetime(2030, 1, 1, tzinfo=UTC).timestamp()),
        transaction_signature="5sig",
        is_custom_oracle=False,
        oracle_address=None,
    )
    defaults.update(kwargs)
    return TrackMarketParams(**defaults)


def make_indexed(public_key: str, collateral: str = USDC_MINT, **account_kwargs) -> IndexedMarket:
    account = dict(
        id=public_key[:8],
        question=f"Indexed market {public_key[:6]}",
        resolved=False,
        resolvable=True,
        creator="",
        end_time="0",
        creation_time="0",
        initial_liquidity="0",
        yes_token_mint="",
        no_token_mint="",
        yes_token_supply_minted="0",
        no_token_supply_minted="0",
        collateral_token=collateral,
        market_reserves="0",
        winning_token=Unresolved(),
    )
    account.update(account_kwargs)
    return IndexedMarket(public_key=public_key, account=IndexedMarketAccount(**account))


class StubIndexer:
    """In-memory stand-in for the HTTP indexer client."""

    def __init__(self, markets: list[IndexedMarket] | None = None) -> None:
        self.markets = list(markets or [])

    async def fetch_markets(self) -> list[IndexedMarket]:
        return list(self.markets)

    async def fetch_market(self, market_address: str) -> IndexedMarket | None:
        for m in self.markets:
            if m.public_key == market_address:
                return m
        return None
