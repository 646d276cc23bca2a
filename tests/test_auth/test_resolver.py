"""Tests for secrets resolution."""

from __future__ import annotations

import asyncio
import json

import pytest

from paramauth.auth.resolver import SecretsResolver
from paramauth.config import StorePaths
from paramauth.exceptions import (
    ConfigurationMalformedError,
    ConfigurationMissingError,
    SecretStoreUnavailableError,
)
from paramauth.models import ClientCredentialsSecrets, JWTSecrets, Strategy
from paramauth.store.memory import MemorySecretStore


def _resolve(store: MemorySecretStore, key: str, strategy: Strategy):
    resolver = SecretsResolver(store, StorePaths("/oauth"))
    return asyncio.run(resolver.resolve(key, strategy))


class TestResolve:
    def test_client_credentials(self, store: MemorySecretStore) -> None:
        secrets = _resolve(store, "acme", Strategy.CLIENT_CREDENTIALS)
        assert isinstance(secrets, ClientCredentialsSecrets)
        assert secrets.client_id == "a"
        assert secrets.client_secret == "b"
        assert secrets.endpoint == "https://auth.example/token"
        assert store.reads == ["/oauth/acme/client_credentials/secrets"]

    def test_jwt(self, store: MemorySecretStore) -> None:
        secrets = _resolve(store, "acme", Strategy.JWT)
        assert isinstance(secrets, JWTSecrets)
        assert secrets.api_key == "api-key"
        assert store.reads == ["/oauth/acme/jwt/secrets"]

    def test_missing(self) -> None:
        with pytest.raises(ConfigurationMissingError) as exc_info:
            _resolve(MemorySecretStore(), "acme", Strategy.JWT)
        assert str(exc_info.value) == (
            "no secrets in Parameter Store defined for key acme, type jwt"
        )

    def test_empty_value_counts_as_missing(self) -> None:
        store = MemorySecretStore({"/oauth/acme/jwt/secrets": ""})
        with pytest.raises(ConfigurationMissingError):
            _resolve(store, "acme", Strategy.JWT)

    def test_unavailable(self, store: MemorySecretStore) -> None:
        store.make_unavailable("/oauth/acme/jwt/secrets")
        with pytest.raises(SecretStoreUnavailableError, match="could not read secrets"):
            _resolve(store, "acme", Strategy.JWT)


class TestMalformed:
    @pytest.mark.parametrize(
        "value",
        [
            "not json",
            json.dumps(["clientId", "clientSecret"]),
            json.dumps({"clientId": "a", "clientSecret": "b"}),
            json.dumps({"clientId": "", "clientSecret": "b", "endpoint": "https://x/t"}),
            json.dumps({"clientId": "a", "clientSecret": "b", "endpoint": "ftp://x/t"}),
            json.dumps({"clientId": "a", "clientSecret": "b", "endpoint": "/relative"}),
        ],
    )
    def test_client_credentials_shapes(self, value: str) -> None:
        store = MemorySecretStore({"/oauth/acme/client_credentials/secrets": value})
        with pytest.raises(ConfigurationMalformedError, match="key acme, type client_credentials"):
            _resolve(store, "acme", Strategy.CLIENT_CREDENTIALS)

    def test_jwt_shape(self) -> None:
        store = MemorySecretStore({"/oauth/acme/jwt/secrets": json.dumps({"apiKey": "k"})})
        with pytest.raises(ConfigurationMalformedError):
            _resolve(store, "acme", Strategy.JWT)

    def test_message_does_not_leak_secret(self) -> None:
        value = json.dumps({"clientId": "a", "clientSecret": "hunter2"})
        store = MemorySecretStore({"/oauth/acme/client_credentials/secrets": value})
        with pytest.raises(ConfigurationMalformedError) as exc_info:
            _resolve(store, "acme", Strategy.CLIENT_CREDENTIALS)
        assert "hunter2" not in str(exc_info.value)

    def test_strategies_do_not_mix(self) -> None:
        store = MemorySecretStore(
            {"/oauth/acme/client_credentials/secrets": json.dumps({"apiKey": "k", "apiSecret": "s"})}
        )
        with pytest.raises(ConfigurationMalformedError):
            _resolve(store, "acme", Strategy.CLIENT_CREDENTIALS)
