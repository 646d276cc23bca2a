"""Credential manager -- the public entry point for obtaining tokens.

:class:`CredentialManager` owns the shared capabilities (secret store,
token endpoint client, clock, and the per-key refresh coalescer) and hands
out one :class:`~paramauth.auth.base.TokenSupplier` per ``(key, strategy)``
request. It keeps no token state itself; caching belongs to the
client-credentials strategy and lives in the store.

For most deployments, call :func:`create_default_manager` to get a manager
backed by AWS Parameter Store and configured from the environment.

See Also:
    :class:`~paramauth.strategies.client_credentials.ClientCredentialsSupplier`
    :class:`~paramauth.strategies.jwt.JWTSupplier`
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from paramauth.auth.base import Clock, TokenSupplier, epoch_millis
from paramauth.auth.endpoint import TokenEndpointClient
from paramauth.auth.resolver import SecretsResolver
from paramauth.auth.singleflight import SingleFlight
from paramauth.config import (
    DEFAULT_PREFIX,
    StorePaths,
    load_settings,
    validate_credential_key,
)
from paramauth.exceptions import InvalidUsageError
from paramauth.models import Settings, Strategy
from paramauth.store.base import SecretStore
from paramauth.strategies.client_credentials import ClientCredentialsSupplier
from paramauth.strategies.jwt import JWTSupplier

logger = logging.getLogger(__name__)


def _coerce_strategy(strategy: Union[Strategy, str]) -> Strategy:
    try:
        return Strategy(strategy)
    except ValueError:
        available = ", ".join(s.value for s in Strategy)
        raise InvalidUsageError(
            f"Unknown strategy '{strategy}'. Available strategies: {available}"
        ) from None


class CredentialManager:
    """Factory for token suppliers over injected store and HTTP capabilities.

    Args:
        store: Secret store holding secrets and cached tokens.
        endpoint_client: Token endpoint client. Defaults to a
            :class:`~paramauth.auth.endpoint.TokenEndpointClient` with the
            default timeout.
        prefix: Store path prefix.
        clock: Returns the current time in epoch milliseconds.
        refresh_on_store_outage: Passed to every client-credentials supplier.

    Example::

        manager = CredentialManager(MemorySecretStore(values))
        get_token = manager.create_supplier("blackboard", Strategy.CLIENT_CREDENTIALS)
        token = await get_token()
    """

    def __init__(
        self,
        store: SecretStore,
        endpoint_client: Optional[TokenEndpointClient] = None,
        prefix: str = DEFAULT_PREFIX,
        clock: Clock = epoch_millis,
        refresh_on_store_outage: bool = False,
    ) -> None:
        self._store = store
        self._endpoint_client = endpoint_client or TokenEndpointClient()
        self._paths = StorePaths(prefix)
        self._resolver = SecretsResolver(store, self._paths)
        self._clock = clock
        self._refresh_on_store_outage = refresh_on_store_outage
        self._single_flight: SingleFlight[str] = SingleFlight()

    @property
    def store(self) -> SecretStore:
        return self._store

    @property
    def paths(self) -> StorePaths:
        return self._paths

    def create_supplier(
        self, key: str, strategy: Union[Strategy, str]
    ) -> TokenSupplier:
        """Return a supplier of valid tokens for *key*.

        The key is validated here, not on first use, so misconfiguration
        surfaces when the supplier is built (typically at cold start).

        Args:
            key: Credential key configured under ``<prefix>/<key>/...``.
            strategy: :class:`~paramauth.models.Strategy` or its string value.

        Returns:
            A :class:`~paramauth.auth.base.TokenSupplier`.

        Raises:
            InvalidCredentialKeyError: If *key* is empty or contains ``/``.
            InvalidUsageError: If *strategy* is not a known strategy.
        """
        validate_credential_key(key)
        resolved = _coerce_strategy(strategy)
        logger.debug("retrieving %s credentials for: %s", resolved.value, key)

        if resolved is Strategy.CLIENT_CREDENTIALS:
            return ClientCredentialsSupplier(
                key,
                store=self._store,
                resolver=self._resolver,
                endpoint_client=self._endpoint_client,
                paths=self._paths,
                single_flight=self._single_flight,
                clock=self._clock,
                refresh_on_store_outage=self._refresh_on_store_outage,
            )
        return JWTSupplier(key, resolver=self._resolver, clock=self._clock)

    def client_credentials(self, key: str) -> TokenSupplier:
        """Shortcut for ``create_supplier(key, Strategy.CLIENT_CREDENTIALS)``."""
        return self.create_supplier(key, Strategy.CLIENT_CREDENTIALS)

    def jwt(self, key: str) -> TokenSupplier:
        """Shortcut for ``create_supplier(key, Strategy.JWT)``."""
        return self.create_supplier(key, Strategy.JWT)


def create_default_manager(settings: Optional[Settings] = None) -> CredentialManager:
    """Create a :class:`CredentialManager` backed by AWS Parameter Store.

    Args:
        settings: Explicit settings. When ``None``, they are read from the
            environment with :func:`~paramauth.config.load_settings`.

    Returns:
        A ready-to-use :class:`CredentialManager`.

    Raises:
        ConfigError: If the environment holds invalid settings.
    """
    from paramauth.store.parameter_store import ParameterStore

    if settings is None:
        settings = load_settings()
    return CredentialManager(
        ParameterStore(region_name=settings.region),
        endpoint_client=TokenEndpointClient(timeout=settings.request_timeout),
        prefix=settings.prefix,
        refresh_on_store_outage=settings.refresh_on_store_outage,
    )
