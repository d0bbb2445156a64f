"""MarketCatalogService: the merged market view.

Reads from the local register and the external indexer, never writes to
either except for track_market, which is the register's own operation.
"""

from src.dm_common.errors import MarketNotFoundError
from src.dm_market.application.schemas import (
    CreateMarketRequest,
    IndexedMarketOut,
    MarketDetail,
    MarketListResponse,
    PricesOut,
    TrackedMarketOut,
    TrackedMarketsResponse,
)
from src.dm_market.domain.reconciliation import implied_prices, is_dark_market
from src.dm_market.domain.register import MarketRegister, to_indexed_market
from src.dm_market.domain.repository import MarketIndexerProtocol


class MarketCatalogService:
    def __init__(
        self,
        register: MarketRegister,
        indexer: MarketIndexerProtocol,
        dark_collateral_mint: str,
    ) -> None:
        self._register = register
        self._indexer = indexer
        self._dark_mint = dark_collateral_mint

    async def list_markets(self, dark_only: bool = False) -> MarketListResponse:
        external = await self._indexer.fetch_markets()
        merged = self._register.merge_with_external_markets(external)
        if dark_only:
            merged = [m for m in merged if is_dark_market(m, self._dark_mint)]
        return MarketListResponse(
            count=len(merged),
            tracked_count=len(self._register.get_all_markets()),
            items=[IndexedMarketOut.from_domain(m) for m in merged],
        )

    async def get_market(self, market_address: str) -> MarketDetail:
        tracked = self._register.get_market(market_address)
        if tracked is not None:
            market = to_indexed_market(tracked)
        else:
            found = await self._indexer.fetch_market(market_address)
            if found is None:
                raise MarketNotFoundError(market_address)
            market = found
        return MarketDetail(
            market=IndexedMarketOut.from_domain(market),
            is_tracked=tracked is not None,
            is_dark_market=is_dark_market(market, self._dark_mint),
            prices=PricesOut.from_domain(implied_prices(market)),
        )

    def list_tracked(self, creator: str | None = None) -> TrackedMarketsResponse:
        if creator:
            markets = self._register.get_markets_by_creator(creator)
        else:
            markets = self._register.get_all_markets()
        return TrackedMarketsResponse.build(self._register.get_stats(), markets)

    def track_market(self, body: CreateMarketRequest) -> TrackedMarketOut:
        return TrackedMarketOut.from_domain(self._register.track_market(body.to_params()))
