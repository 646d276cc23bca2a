"""Self-signed JWT token supplier.

:class:`JWTSupplier` implements the ``jwt`` strategy. Every call re-reads
the key's ``{apiKey, apiSecret}`` from the store and signs a fresh HS256
token with claims::

    {"iss": <apiKey>, "exp": <now in epoch milliseconds> + 300000}

Nothing is cached: signing is cheap, and re-reading the secrets means a
rotated secret takes effect on the next call.
"""

from __future__ import annotations

import logging
from typing import Any

import jwt as pyjwt

from paramauth.auth.base import Clock, TokenSupplier, epoch_millis
from paramauth.auth.resolver import SecretsResolver
from paramauth.models import Strategy

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_MILLIS = 300_000
"""Lifetime of a minted token (five minutes)."""

SIGNING_ALGORITHM = "HS256"


def sign_token(api_key: str, api_secret: str, now_millis: int) -> str:
    """Sign a token issued by *api_key* that expires five minutes after *now_millis*.

    The ``exp`` claim is in epoch milliseconds, which is what the services
    consuming these tokens read.
    """
    payload: dict[str, Any] = {
        "iss": api_key,
        "exp": now_millis + DEFAULT_EXPIRY_MILLIS,
    }
    return pyjwt.encode(payload, api_secret, algorithm=SIGNING_ALGORITHM)


class JWTSupplier(TokenSupplier):
    """Mint a signed JWT on every call.

    Args:
        key: Credential key.
        resolver: Loads the key's API key and signing secret.
        clock: Returns the current time in epoch milliseconds.
    """

    def __init__(
        self,
        key: str,
        resolver: SecretsResolver,
        clock: Clock = epoch_millis,
    ) -> None:
        super().__init__(key)
        self._resolver = resolver
        self._clock = clock

    @property
    def strategy(self) -> Strategy:
        return Strategy.JWT

    async def get_token(self) -> str:
        """Resolve the signing secrets and return a freshly signed token.

        Raises:
            ConfigurationMissingError: No JWT secrets are stored for the key.
            ConfigurationMalformedError: Stored secrets have the wrong shape.
            SecretStoreUnavailableError: The store could not be read.
        """
        secrets = await self._resolver.resolve(self._key, Strategy.JWT)
        token = sign_token(secrets.api_key, secrets.api_secret, self._clock())
        logger.debug("minted jwt for key %s", self._key)
        return token
