"""Bearer-authenticated outbound HTTP helpers.

Two ways to attach a token to downstream calls:

- :func:`authorized_client` -- a :class:`httpx.AsyncClient` preconfigured
  with a fixed ``Authorization: Bearer <token>`` header, for a token you
  already hold.
- :class:`SupplierAuth` -- an :class:`httpx.Auth` that awaits a
  :class:`~paramauth.auth.base.TokenSupplier` before every request, so a
  long-lived client always sends a valid token.

Example::

    get_token = manager.client_credentials("blackboard")
    async with httpx.AsyncClient(auth=SupplierAuth(get_token)) as client:
        response = await client.get("https://api.example.com/announcements")
"""

from __future__ import annotations

from typing import Any, AsyncGenerator, Generator, Mapping

import httpx

from paramauth.auth.base import TokenSupplier
from paramauth.config import DEFAULT_REQUEST_TIMEOUT


def bearer_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def build_query_param_url(base: str, query_params: Mapping[str, Any]) -> str:
    """Replace the query string of *base* with *query_params*.

    Example::

        build_query_param_url("https://localhost:3000/announcements", {"limit": 5, "sort": "asc"})
        # "https://localhost:3000/announcements?limit=5&sort=asc"
    """
    return str(httpx.URL(base).copy_with(params=dict(query_params)))


def authorized_client(token: str, **kwargs: Any) -> httpx.AsyncClient:
    """Return an async client that sends ``Authorization: Bearer <token>``.

    Args:
        token: Bearer token, e.g. from ``await supplier()``.
        **kwargs: Forwarded to :class:`httpx.AsyncClient`. Extra ``headers``
            are merged with the authorization header. The timeout defaults
            to two seconds.
    """
    headers = dict(kwargs.pop("headers", None) or {})
    headers.update(bearer_header(token))
    kwargs.setdefault("timeout", DEFAULT_REQUEST_TIMEOUT)
    return httpx.AsyncClient(headers=headers, **kwargs)


class SupplierAuth(httpx.Auth):
    """httpx auth flow that fetches a bearer token from a supplier per request.

    Only usable with :class:`httpx.AsyncClient`, since suppliers are async.
    """

    def __init__(self, supplier: TokenSupplier) -> None:
        self._supplier = supplier

    def sync_auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        raise RuntimeError("SupplierAuth requires httpx.AsyncClient")

    async def async_auth_flow(
        self, request: httpx.Request
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        token = await self._supplier.get_token()
        request.headers.update(bearer_header(token))
        yield request
