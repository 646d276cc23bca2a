"""Shared test fixtures for paramauth.

Provides a controllable clock, an in-memory secret store seeded with
secrets, a recording fake token endpoint built on
:class:`httpx.MockTransport`, and a manager wired to all three. Async code
is driven with :func:`asyncio.run` from plain test functions.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx
import pytest

from paramauth.auth.endpoint import TokenEndpointClient
from paramauth.auth.manager import CredentialManager
from paramauth.output import reset_output
from paramauth.store.memory import MemorySecretStore


T0 = 1_700_000_000_000
"""Fixed "now" in epoch milliseconds for deterministic expiry math."""

TOKEN_URL = "https://auth.example/token"
JWT_SECRET = "a-signing-secret-that-is-long-enough-for-hs256"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Callable clock returning :attr:`now` in epoch milliseconds."""

    def __init__(self, now: int = T0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


def cc_secrets_value(
    client_id: str = "a",
    client_secret: str = "b",
    endpoint: str = TOKEN_URL,
) -> str:
    return json.dumps(
        {"clientId": client_id, "clientSecret": client_secret, "endpoint": endpoint}
    )


def jwt_secrets_value(api_key: str = "api-key", api_secret: str = JWT_SECRET) -> str:
    return json.dumps({"apiKey": api_key, "apiSecret": api_secret})


@pytest.fixture
def store() -> MemorySecretStore:
    """Store holding client-credentials and JWT secrets for key ``acme``."""
    return MemorySecretStore(
        {
            "/oauth/acme/client_credentials/secrets": cc_secrets_value(),
            "/oauth/acme/jwt/secrets": jwt_secrets_value(),
        }
    )


# ---------------------------------------------------------------------------
# Token endpoint
# ---------------------------------------------------------------------------


class FakeTokenEndpoint:
    """Records token requests and answers them with a configurable response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {"access_token": "tok123", "expires_in": 3600, "token_type": "Bearer"}
        self.raw: Optional[bytes] = None
        self.error: Optional[Exception] = None
        self.on_request: Optional[Callable[[], Any]] = None

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request is not None:
            await self.on_request()
        if self.error is not None:
            raise self.error
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def token_endpoint() -> FakeTokenEndpoint:
    return FakeTokenEndpoint()


@pytest.fixture
def endpoint_client(token_endpoint: FakeTokenEndpoint) -> TokenEndpointClient:
    return TokenEndpointClient(transport=httpx.MockTransport(token_endpoint))


@pytest.fixture
def manager(
    store: MemorySecretStore,
    endpoint_client: TokenEndpointClient,
    clock: FakeClock,
) -> CredentialManager:
    return CredentialManager(store, endpoint_client=endpoint_client, clock=clock)
