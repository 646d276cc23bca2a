"""OAuth2 client-credentials token supplier.

This module provides :class:`ClientCredentialsSupplier`, which implements
the ``client_credentials`` strategy as a cache-aside read-through over the
secret store:

1. Read the cached token at ``<prefix>/<key>/client_credentials/token``.
2. Serve it unchanged while its stored expiry is in the future.
3. Otherwise resolve the key's secrets, exchange them at the token
   endpoint, store ``{token, expirationEpochMillis}`` over the old value,
   and return the fresh token.

Stored expiries are pulled in by :data:`EXPIRY_MARGIN_MILLIS` (two
minutes), so a token this module still considers valid has at least that
much real life left at the authorization server.

Concurrent misses for the same key share one refresh through
:class:`~paramauth.auth.singleflight.SingleFlight`.

See Also:
    :class:`paramauth.auth.base.TokenSupplier` for the base interface.
    :mod:`paramauth.strategies.jwt` for self-signed tokens.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from pydantic import ValidationError

from paramauth.auth.base import Clock, TokenSupplier, epoch_millis
from paramauth.auth.endpoint import TokenEndpointClient
from paramauth.auth.resolver import SecretsResolver
from paramauth.auth.singleflight import SingleFlight
from paramauth.config import StorePaths
from paramauth.exceptions import (
    SecretStoreUnavailableError,
    SecretStoreWriteError,
    UpstreamTokenInvalidError,
)
from paramauth.models import CachedToken, Strategy, TokenResponse
from paramauth.store.base import SecretStore

logger = logging.getLogger(__name__)

EXPIRY_MARGIN_MILLIS = 120_000
"""Subtracted from the upstream ``expires_in`` before a token is cached."""


class ClientCredentialsSupplier(TokenSupplier):
    """Serve cached client-credentials tokens, refreshing them when expired.

    Args:
        key: Credential key.
        store: Secret store holding both the secrets and the cached token.
        resolver: Loads the key's client id, secret, and endpoint.
        endpoint_client: Performs the token exchange.
        paths: Store path layout.
        single_flight: Shared per-key refresh coalescer. Suppliers created
            by the same manager share one instance.
        clock: Returns the current time in epoch milliseconds.
        refresh_on_store_outage: When ``True``, an unreadable cached token
            is treated as a miss and refreshed. When ``False`` (default),
            :class:`~paramauth.exceptions.SecretStoreUnavailableError` is
            raised so an outage is not mistaken for a cold start.
    """

    def __init__(
        self,
        key: str,
        store: SecretStore,
        resolver: SecretsResolver,
        endpoint_client: TokenEndpointClient,
        paths: StorePaths,
        single_flight: Optional[SingleFlight[str]] = None,
        clock: Clock = epoch_millis,
        refresh_on_store_outage: bool = False,
    ) -> None:
        super().__init__(key)
        self._store = store
        self._resolver = resolver
        self._endpoint_client = endpoint_client
        self._paths = paths
        self._single_flight = single_flight if single_flight is not None else SingleFlight()
        self._clock = clock
        self._refresh_on_store_outage = refresh_on_store_outage

    @property
    def strategy(self) -> Strategy:
        return Strategy.CLIENT_CREDENTIALS

    @property
    def token_path(self) -> str:
        return self._paths.token(self._key)

    async def get_token(self) -> str:
        """Return the cached token if still valid, otherwise a fresh one.

        Returns:
            An access token with at least two minutes of remaining life.

        Raises:
            ConfigurationMissingError: No secrets are stored for the key.
            ConfigurationMalformedError: Stored secrets have the wrong shape.
            UpstreamTokenInvalidError: The endpoint's answer holds no usable token.
            UpstreamTransportError: The endpoint could not be reached in time.
            SecretStoreUnavailableError: The store could not be read.
        """
        cached = await self.read_cached()
        if cached is not None and cached.is_valid_at(self._clock()):
            logger.debug("using cached client_credentials token for key %s", self._key)
            return cached.token

        logger.debug("no valid cached token for key %s, refreshing", self._key)
        return await self._single_flight.run(self._key, self._refresh)

    async def read_cached(self) -> Optional[CachedToken]:
        """Load the cached token without checking its expiry.

        Returns:
            The stored :class:`~paramauth.models.CachedToken`, or ``None`` when
            nothing usable is stored.

        Raises:
            SecretStoreUnavailableError: The store could not be read and the
                supplier is not configured to refresh through outages.
        """
        lookup = await self._store.get(self.token_path, decrypt=True)
        if lookup.is_unavailable:
            if not self._refresh_on_store_outage:
                raise SecretStoreUnavailableError(
                    f"could not read cached token for key {self._key}: {lookup.error}"
                )
            logger.warning(
                "cached token for key %s is unreadable, refreshing: %s",
                self._key,
                lookup.error,
            )
            return None
        if not lookup.is_present or not lookup.value:
            return None
        try:
            return CachedToken.model_validate(json.loads(lookup.value))
        except (json.JSONDecodeError, ValidationError):
            logger.debug("ignoring unparsable cached token for key %s", self._key)
            return None

    async def _refresh(self) -> str:
        secrets = await self._resolver.resolve(self._key, Strategy.CLIENT_CREDENTIALS)
        issued_at = self._clock()
        body = await self._endpoint_client.request_token(
            secrets.endpoint, secrets.client_id, secrets.client_secret
        )

        try:
            response = TokenResponse.model_validate(body)
        except ValidationError:
            raise UpstreamTokenInvalidError("Invalid token response") from None

        cached = CachedToken(
            token=response.access_token,
            expiration_epoch_millis=(
                issued_at + int(response.expires_in * 1000) - EXPIRY_MARGIN_MILLIS
            ),
        )
        await self._persist(cached)
        return cached.token

    async def _persist(self, cached: CachedToken) -> None:
        try:
            await self._store.put(
                self.token_path, cached.to_store_value(), secure=True, overwrite=True
            )
        except SecretStoreWriteError as exc:
            logger.warning("failed to cache token for key %s: %s", self._key, exc)
