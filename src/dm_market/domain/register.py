"""MarketRegister: markets created here, before the indexer catches up.

Tracked markets are authoritative for "markets this service created": the
merge never lets an indexer entry shadow or duplicate one of them.
"""

import dataclasses
import logging
import math
import threading
import time

from src.dm_common.datetime_utils import to_unix_seconds, utc_now
from src.dm_common.errors import MarketAlreadyTrackedError
from src.dm_market.domain.models import (
    IndexedMarket,
    IndexedMarketAccount,
    RegisterStats,
    TrackedMarket,
    TrackMarketParams,
    Unresolved,
)

logger = logging.getLogger(__name__)

RECENT_MARKETS = 5


def to_hex(value: int) -> str:
    """Indexer numeric encoding: lowercase base-16, no prefix."""
    return format(value, "x")


def to_indexed_market(tracked: TrackedMarket) -> IndexedMarket:
    """Render a tracked market in the indexer's schema.

    Token mints are unknown until the indexer sees the market; supplies and
    reserves start at the initial liquidity.
    """
    liquidity_hex = to_hex(tracked.initial_liquidity)
    return IndexedMarket(
        public_key=tracked.public_key,
        account=IndexedMarketAccount(
            id=tracked.public_key[:8],
            question=tracked.question,
            resolved=False,
            resolvable=True,
            creator=tracked.creator,
            end_time=to_hex(tracked.end_time),
            creation_time=to_hex(to_unix_seconds(tracked.created_at)),
            initial_liquidity=liquidity_hex,
            yes_token_mint="",
            no_token_mint="",
            yes_token_supply_minted=liquidity_hex,
            no_token_supply_minted=liquidity_hex,
            collateral_token=tracked.collateral_mint,
            market_reserves=liquidity_hex,
            winning_token=Unresolved(),
        ),
    )


class MarketRegister:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._markets: dict[str, TrackedMarket] = {}

    def track_market(self, params: TrackMarketParams) -> TrackedMarket:
        market = TrackedMarket(
            public_key=params.public_key,
            question=params.question,
            creator=params.creator,
            collateral_mint=params.collateral_mint,
            initial_liquidity=params.initial_liquidity,
            end_time=params.end_time,
            created_at=utc_now(),
            transaction_signature=params.transaction_signature,
            is_custom_oracle=params.is_custom_oracle,
            oracle_address=params.oracle_address,
        )
        with self._lock:
            if params.public_key in self._markets:
                raise MarketAlreadyTrackedError(params.public_key)
            self._markets[params.public_key] = market

        logger.info(
            "Tracked new market %s... question=%r", params.public_key[:8], params.question[:50]
        )
        return market

    def get_market(self, public_key: str) -> TrackedMarket | None:
        return self._markets.get(public_key)

    def is_tracked(self, public_key: str) -> bool:
        return public_key in self._markets

    def get_all_markets(self) -> list[TrackedMarket]:
        """Newest first."""
        snapshot = list(self._markets.values())
        return sorted(snapshot, key=lambda m: m.created_at, reverse=True)

    def get_markets_by_creator(self, creator: str) -> list[TrackedMarket]:
        return [m for m in self.get_all_markets() if m.creator == creator]

    def update_probabilities(
        self, public_key: str, yes_probability: float, no_probability: float
    ) -> None:
        """No-op for markets this register does not track."""
        for p in (yes_probability, no_probability):
            if not 0.0 <= p <= 1.0:
                raise ValueError(f"probability out of range: {p}")
        if not math.isclose(yes_probability + no_probability, 1.0, abs_tol=1e-9):
            raise ValueError("probabilities must sum to 1")

        with self._lock:
            market = self._markets.get(public_key)
            if market is None:
                return
            self._markets[public_key] = dataclasses.replace(
                market, yes_probability=yes_probability, no_probability=no_probability
            )

    def get_stats(self) -> RegisterStats:
        now_s = time.time()
        markets = self.get_all_markets()
        return RegisterStats(
            total_markets=len(markets),
            active_markets=sum(1 for m in markets if m.end_time > now_s),
            custom_oracle_markets=sum(1 for m in markets if m.is_custom_oracle),
            recent_markets=markets[:RECENT_MARKETS],
        )

    def merge_with_external_markets(
        self, external_markets: list[IndexedMarket]
    ) -> list[IndexedMarket]:
        """Tracked markets first (newest first), then indexer markets.

        Indexer entries whose address is tracked are dropped, as are repeated
        addresses within the indexer list itself (first occurrence wins).
        """
        tracked = self.get_all_markets()
        seen = {m.public_key for m in tracked}
        merged = [to_indexed_market(m) for m in tracked]
        for market in external_markets:
            if market.public_key in seen:
                continue
            seen.add(market.public_key)
            merged.append(market)
        return merged
