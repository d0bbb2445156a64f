"""Shared test fixtures."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from src.dm_ledger.domain.ledger import ConfidentialLedger  # noqa: E402
from src.dm_market.domain.register import MarketRegister  # noqa: E402
from src.main import app  # noqa: E402
from tests.helpers import StubIndexer  # noqa: E402


@pytest.fixture
def ledger() -> ConfidentialLedger:
    return ConfidentialLedger()


@pytest.fixture
def register() -> MarketRegister:
    return MarketRegister()


@pytest.fixture
def indexer() -> StubIndexer:
    return StubIndexer()


@pytest_asyncio.fixture
async def client(indexer: StubIndexer) -> AsyncClient:
    """Async HTTP client with fresh in-memory stores per test.

    ASGITransport does not run the lifespan, so state is wired here.
    """
    app.state.ledger = ConfidentialLedger()
    app.state.register = MarketRegister()
    app.state.indexer = indexer
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
