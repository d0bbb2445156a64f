"""Tests for IndexerClient against an httpx.MockTransport."""

import httpx
import pytest

from src.dm_market.infrastructure.indexer_client import IndexerClient

_MARKET = {
    "publicKey": "Be7CZRk3ecWpRGhApeMWHyiqZ5xcEzF5vZTsqXfeoYWp",
    "account": {"question": "Major AI regulation passed?", "winning_token_id": {"Some": "Yes"}},
}


def _client(handler) -> IndexerClient:
    return IndexerClient("http://indexer/api/", transport=httpx.MockTransport(handler))


class TestFetchMarkets:
    @pytest.mark.asyncio
    async def test_envelope_response(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json={"count": 1, "data": [_MARKET]})

        markets = await _client(handler).fetch_markets()

        assert seen == ["/api/markets"]
        assert [m.public_key for m in markets] == [_MARKET["publicKey"]]
        assert markets[0].account.winning_token.token_id == "Yes"

    @pytest.mark.asyncio
    async def test_server_error_yields_empty(self) -> None:
        markets = await _client(lambda r: httpx.Response(503)).fetch_markets()
        assert markets == []

    @pytest.mark.asyncio
    async def test_transport_error_yields_empty(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("down", request=request)

        assert await _client(handler).fetch_markets() == []

    @pytest.mark.asyncio
    async def test_invalid_json_yields_empty(self) -> None:
        markets = await _client(lambda r: httpx.Response(200, content=b"<html>")).fetch_markets()
        assert markets == []


class TestFetchMarket:
    @pytest.mark.asyncio
    async def test_found(self) -> None:
        client = _client(lambda r: httpx.Response(200, json=_MARKET))
        m = await client.fetch_market(_MARKET["publicKey"])
        assert m is not None
        assert m.account.question == "Major AI regulation passed?"

    @pytest.mark.asyncio
    async def test_found_in_envelope(self) -> None:
        client = _client(lambda r: httpx.Response(200, json={"data": _MARKET}))
        assert (await client.fetch_market(_MARKET["publicKey"])) is not None

    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        client = _client(lambda r: httpx.Response(404))
        assert await client.fetch_market("missing") is None

    @pytest.mark.asyncio
    async def test_error_is_none(self) -> None:
        client = _client(lambda r: httpx.Response(500))
        assert await client.fetch_market("x") is None


class TestMalformedRecords:
    @pytest.mark.asyncio
    async def test_non_dict_account_does_not_break_listing(self) -> None:
        payload = [{"publicKey": "AAA", "account": ["x"]}, _MARKET]
        markets = await _client(lambda r: httpx.Response(200, json=payload)).fetch_markets()
        assert [m.public_key for m in markets] == ["AAA", _MARKET["publicKey"]]

    @pytest.mark.asyncio
    async def test_single_lookup_with_string_account(self) -> None:
        client = _client(lambda r: httpx.Response(200, json={"publicKey": "AAA", "account": "x"}))
        m = await client.fetch_market("AAA")
        assert m is not None
        assert m.account.end_time == "0"
