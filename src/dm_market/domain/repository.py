"""Indexer Protocol: dependency inversion for testability.

Unit tests inject a stub that conforms to this Protocol.
Infrastructure layer provides the HTTP implementation.
"""

from typing import Protocol

from src.dm_market.domain.models import IndexedMarket


class MarketIndexerProtocol(Protocol):
    async def fetch_markets(self) -> list[IndexedMarket]: ...

    async def fetch_market(self, market_address: str) -> IndexedMarket | None: ...
