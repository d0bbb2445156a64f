"""Async HTTP client for the external market indexer.

Read-only. The market listing must stay up when the indexer does not, so
transport and HTTP failures are logged and reported as "no markets".
"""

import logging

import httpx

from src.dm_market.domain.models import IndexedMarket
from src.dm_market.domain.reconciliation import (
    normalize_indexed_market,
    normalize_indexer_response,
)

logger = logging.getLogger(__name__)


class IndexerClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def fetch_markets(self) -> list[IndexedMarket]:
        try:
            resp = await self._client.get("/markets")
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Indexer market list unavailable: %s", exc)
            return []
        return normalize_indexer_response(payload)

    async def fetch_market(self, market_address: str) -> IndexedMarket | None:
        try:
            resp = await self._client.get(f"/markets/{market_address}")
            if resp.status_code == 404:
                return None
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Indexer lookup failed for %s...: %s", market_address[:8], exc)
            return None
        if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
            payload = payload["data"]
        if not isinstance(payload, dict) or not payload.get("publicKey"):
            return None
        return normalize_indexed_market(payload)

    async def aclose(self) -> None:
        await self._client.aclose()
