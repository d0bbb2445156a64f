"""Domain models for dm_market.

Two shapes live here:
  - TrackedMarket: a market created through this service, known locally
    before the external indexer lists it.
  - IndexedMarket: the external indexer's record. Numeric fields are
    base-16 strings without prefix, exactly as the indexer serves them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Unresolved:
    pass


@dataclass(frozen=True)
class ResolvedTo:
    token_id: str


WinningToken = Unresolved | ResolvedTo


def parse_winning_token(raw: Any) -> WinningToken:
    """Indexer encodes the winner as {"None": {}} or {"Some": "<token id>"}."""
    if isinstance(raw, dict) and raw.get("Some") is not None:
        return ResolvedTo(token_id=str(raw["Some"]))
    return Unresolved()


def dump_winning_token(token: WinningToken) -> dict[str, Any]:
    if isinstance(token, ResolvedTo):
        return {"Some": token.token_id}
    return {"None": {}}


@dataclass(frozen=True)
class TrackedMarket:
    public_key: str
    question: str
    creator: str
    collateral_mint: str
    initial_liquidity: int  # collateral base units
    end_time: int  # unix seconds
    created_at: datetime
    transaction_signature: str
    is_custom_oracle: bool
    oracle_address: str | None = None
    yes_probability: float = 0.5
    no_probability: float = 0.5


@dataclass(frozen=True)
class TrackMarketParams:
    public_key: str
    question: str
    creator: str
    collateral_mint: str
    initial_liquidity: int
    end_time: int
    transaction_signature: str
    is_custom_oracle: bool = False
    oracle_address: str | None = None


@dataclass(frozen=True)
class IndexedMarketAccount:
    id: str
    question: str
    resolved: bool
    resolvable: bool
    creator: str
    end_time: str
    creation_time: str
    initial_liquidity: str
    yes_token_mint: str
    no_token_mint: str
    yes_token_supply_minted: str
    no_token_supply_minted: str
    collateral_token: str
    market_reserves: str
    winning_token: WinningToken = field(default_factory=Unresolved)


@dataclass(frozen=True)
class IndexedMarket:
    public_key: str
    account: IndexedMarketAccount


@dataclass(frozen=True)
class RegisterStats:
    total_markets: int
    active_markets: int
    custom_oracle_markets: int
    recent_markets: list[TrackedMarket]


@dataclass(frozen=True)
class ImpliedPrices:
    yes: float
    no: float
