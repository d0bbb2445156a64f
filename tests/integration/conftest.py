"""Fixtures for HTTP-level tests."""

import pytest

from src.dm_gateway.auth.jwt_handler import create_access_token


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('resolver')}"}
