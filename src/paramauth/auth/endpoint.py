"""OAuth2 token endpoint client.

:class:`TokenEndpointClient` performs the client-credentials grant
(:rfc:`6749` section 4.4): a ``POST`` with HTTP Basic client
authentication and a form-encoded ``grant_type=client_credentials`` body.
It returns the parsed JSON body; checking that the body holds a usable
token is left to the caller.

The client keeps no per-call state and may be shared between concurrent
coroutines.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Optional

import httpx

from paramauth.config import DEFAULT_REQUEST_TIMEOUT
from paramauth.exceptions import UpstreamTokenInvalidError, UpstreamTransportError

logger = logging.getLogger(__name__)

GRANT_TYPE = "client_credentials"


def basic_credentials(client_id: str, client_secret: str) -> str:
    """Return the Base64 ``client_id:client_secret`` value for a Basic header."""
    raw = f"{client_id}:{client_secret}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


class TokenEndpointClient:
    """Sends client-credentials grant requests.

    Args:
        timeout: Request timeout in seconds. A timeout surfaces as
            :class:`~paramauth.exceptions.UpstreamTransportError`.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.

    Example::

        client = TokenEndpointClient(timeout=2.0)
        body = await client.request_token("https://auth.example/token", "id", "secret")
    """

    def __init__(
        self,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    @property
    def timeout(self) -> float:
        return self._timeout

    async def request_token(
        self,
        endpoint: str,
        client_id: str,
        client_secret: str,
    ) -> dict[str, Any]:
        """POST a client-credentials grant to *endpoint* and return the JSON body.

        Args:
            endpoint: Token endpoint URL.
            client_id: OAuth2 client identifier.
            client_secret: OAuth2 client secret.

        Returns:
            The decoded JSON object.

        Raises:
            UpstreamTransportError: On timeouts and connection failures.
            UpstreamTokenInvalidError: If the endpoint answers with an HTTP
                error status or a body that is not a JSON object.
        """
        headers = {
            "Authorization": f"Basic {basic_credentials(client_id, client_secret)}",
            "Accept": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    endpoint,
                    data={"grant_type": GRANT_TYPE},
                    headers=headers,
                )
        except httpx.TimeoutException as exc:
            raise UpstreamTransportError(
                f"Token request to {endpoint} timed out after {self._timeout}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(f"Token request to {endpoint} failed: {exc}") from exc

        if response.status_code >= 400:
            raise UpstreamTokenInvalidError(
                f"Token request failed with status {response.status_code}: "
                f"{response.text[:200]}"
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise UpstreamTokenInvalidError(
                "Invalid token response: body is not JSON"
            ) from exc
        if not isinstance(body, dict):
            raise UpstreamTokenInvalidError("Invalid token response: body is not a JSON object")

        logger.debug("token endpoint %s answered with status %s", endpoint, response.status_code)
        return body
