"""Pydantic schemas for dm_market API requests and responses.

Account fields keep the indexer's own names so clients can treat tracked
and indexed markets identically; the market key is rendered as public_key
(the indexer's publicKey) and the winner union goes back out as
{"None": {}} / {"Some": "<token id>"}.
"""

from typing import Any

from pydantic import BaseModel, Field

from src.dm_common.datetime_utils import iso_or_none
from src.dm_market.domain.models import (
    ImpliedPrices,
    IndexedMarket,
    RegisterStats,
    TrackedMarket,
    TrackMarketParams,
    dump_winning_token,
)

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreateMarketRequest(BaseModel):
    """Issued by the creation workflow once the creation tx is accepted."""

    public_key: str = Field(min_length=32, max_length=44)
    question: str = Field(min_length=10)
    creator: str = Field(min_length=1)
    collateral_mint: str = Field(min_length=1)
    initial_liquidity: int = Field(ge=1_000_000, description="Base units; minimum 1 token")
    end_time: int = Field(gt=0, description="Unix seconds")
    transaction_signature: str = Field(min_length=1)
    is_custom_oracle: bool = False
    oracle_address: str | None = None

    def to_params(self) -> TrackMarketParams:
        return TrackMarketParams(
            public_key=self.public_key,
            question=self.question,
            creator=self.creator,
            collateral_mint=self.collateral_mint,
            initial_liquidity=self.initial_liquidity,
            end_time=self.end_time,
            transaction_signature=self.transaction_signature,
            is_custom_oracle=self.is_custom_oracle,
            oracle_address=self.oracle_address,
        )


# ---------------------------------------------------------------------------
# Indexed (merged) market view
# ---------------------------------------------------------------------------


class IndexedMarketAccountOut(BaseModel):
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
    winning_token_id: dict[str, Any]


class IndexedMarketOut(BaseModel):
    public_key: str
    account: IndexedMarketAccountOut

    @classmethod
    def from_domain(cls, m: IndexedMarket) -> "IndexedMarketOut":
        a = m.account
        return cls(
            public_key=m.public_key,
            account=IndexedMarketAccountOut(
                id=a.id,
                question=a.question,
                resolved=a.resolved,
                resolvable=a.resolvable,
                creator=a.creator,
                end_time=a.end_time,
                creation_time=a.creation_time,
                initial_liquidity=a.initial_liquidity,
                yes_token_mint=a.yes_token_mint,
                no_token_mint=a.no_token_mint,
                yes_token_supply_minted=a.yes_token_supply_minted,
                no_token_supply_minted=a.no_token_supply_minted,
                collateral_token=a.collateral_token,
                market_reserves=a.market_reserves,
                winning_token_id=dump_winning_token(a.winning_token),
            ),
        )


class MarketListResponse(BaseModel):
    count: int
    tracked_count: int
    items: list[IndexedMarketOut]


class PricesOut(BaseModel):
    yes: float
    no: float

    @classmethod
    def from_domain(cls, p: ImpliedPrices) -> "PricesOut":
        return cls(yes=p.yes, no=p.no)


class MarketDetail(BaseModel):
    market: IndexedMarketOut
    is_tracked: bool
    is_dark_market: bool
    prices: PricesOut


# ---------------------------------------------------------------------------
# Tracked markets
# ---------------------------------------------------------------------------


class TrackedMarketOut(BaseModel):
    public_key: str
    question: str
    creator: str
    collateral_mint: str
    initial_liquidity: int
    end_time: int
    created_at: str | None
    transaction_signature: str
    is_custom_oracle: bool
    oracle_address: str | None
    yes_probability: float
    no_probability: float

    @classmethod
    def from_domain(cls, m: TrackedMarket) -> "TrackedMarketOut":
        return cls(
            public_key=m.public_key,
            question=m.question,
            creator=m.creator,
            collateral_mint=m.collateral_mint,
            initial_liquidity=m.initial_liquidity,
            end_time=m.end_time,
            created_at=iso_or_none(m.created_at),
            transaction_signature=m.transaction_signature,
            is_custom_oracle=m.is_custom_oracle,
            oracle_address=m.oracle_address,
            yes_probability=m.yes_probability,
            no_probability=m.no_probability,
        )


class TrackedMarketsResponse(BaseModel):
    total_markets: int
    active_markets: int
    custom_oracle_markets: int
    recent_markets: list[TrackedMarketOut]
    markets: list[TrackedMarketOut]

    @classmethod
    def build(
        cls, stats: RegisterStats, markets: list[TrackedMarket]
    ) -> "TrackedMarketsResponse":
        return cls(
            total_markets=stats.total_markets,
            active_markets=stats.active_markets,
            custom_oracle_markets=stats.custom_oracle_markets,
            recent_markets=[TrackedMarketOut.from_domain(m) for m in stats.recent_markets],
            markets=[TrackedMarketOut.from_domain(m) for m in markets],
        )
