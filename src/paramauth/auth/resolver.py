"""Resolution of per-key secrets from the secret store.

:class:`SecretsResolver` reads ``<prefix>/<key>/<strategy>/secrets`` and
validates it against the model for that strategy. A missing or malformed
configuration is a deployment defect, so nothing here is retried.
"""

from __future__ import annotations

import json
import logging
from typing import Union

from pydantic import BaseModel, ValidationError

from paramauth.config import StorePaths
from paramauth.exceptions import (
    ConfigurationMalformedError,
    ConfigurationMissingError,
    SecretStoreUnavailableError,
)
from paramauth.models import ClientCredentialsSecrets, JWTSecrets, Strategy
from paramauth.store.base import SecretStore

logger = logging.getLogger(__name__)

Secrets = Union[ClientCredentialsSecrets, JWTSecrets]

_SECRET_MODELS: dict[Strategy, type[BaseModel]] = {
    Strategy.CLIENT_CREDENTIALS: ClientCredentialsSecrets,
    Strategy.JWT: JWTSecrets,
}


class SecretsResolver:
    """Loads and validates the secrets configured for a credential key.

    Args:
        store: Where the secrets live.
        paths: Path layout for the store.
    """

    def __init__(self, store: SecretStore, paths: StorePaths) -> None:
        self._store = store
        self._paths = paths

    async def resolve(self, key: str, strategy: Strategy) -> Secrets:
        """Read the secrets for *key* under *strategy*.

        Args:
            key: Credential key.
            strategy: Selects both the store sub-path and the expected shape.

        Returns:
            :class:`~paramauth.models.ClientCredentialsSecrets` or
            :class:`~paramauth.models.JWTSecrets`.

        Raises:
            ConfigurationMissingError: Nothing is stored at the secrets path.
            ConfigurationMalformedError: The stored value is not JSON or does
                not have the fields the strategy needs.
            SecretStoreUnavailableError: The store could not be read.
        """
        path = self._paths.secrets(key, strategy)
        lookup = await self._store.get(path, decrypt=True)

        if lookup.is_unavailable:
            raise SecretStoreUnavailableError(
                f"could not read secrets for key {key}, type {strategy.value}: {lookup.error}"
            )
        if not lookup.is_present or not lookup.value:
            raise ConfigurationMissingError(
                f"no secrets in Parameter Store defined for key {key}, type {strategy.value}"
            )

        model = _SECRET_MODELS[strategy]
        try:
            data = json.loads(lookup.value)
            secrets = model.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as exc:
            # The stored value must never appear in the message.
            raise ConfigurationMalformedError(
                f"secrets for key {key}, type {strategy.value} at {path} are malformed: "
                f"{type(exc).__name__}"
            ) from None
        logger.debug("resolved %s secrets for key %s", strategy.value, key)
        return secrets  # type: ignore[return-value]
