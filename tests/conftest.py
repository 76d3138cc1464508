"""Shared test fixtures for oidcmock."""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from oidcmock.core.settings import ServerSettings
from oidcmock.mock import OidcMock

BASE_URL = "http://localhost:8000"
ISSUER = f"{BASE_URL}/auth/realms/master"


@pytest.fixture(autouse=True)
def _set_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin environment variables for test settings."""
    monkeypatch.setenv("OIDCMOCK_HOSTNAME", "localhost")
    monkeypatch.setenv("OIDCMOCK_PORT", "8000")
    monkeypatch.delenv("OIDCMOCK_REALM", raising=False)
    monkeypatch.delenv("OIDCMOCK_ALGORITHM", raising=False)
    monkeypatch.delenv("OIDCMOCK_TLS", raising=False)


@pytest.fixture
def mock() -> OidcMock:
    """Create a mock with default settings (RS256, realm master)."""
    return OidcMock(ServerSettings())


@pytest.fixture
async def client(mock: OidcMock) -> AsyncIterator[AsyncClient]:
    """Create an httpx test client bound to the mock's application."""
    transport = ASGITransport(app=mock.app)
    async with AsyncClient(transport=transport, base_url=BASE_URL) as ac:
        yield ac
