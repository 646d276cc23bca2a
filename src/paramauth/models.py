"""Canonical Pydantic models shared across all paramauth modules.

Every other module imports its data shapes from here. The models fall into
two groups:

**Stored values** -- JSON documents kept in the secret store:
    :class:`ClientCredentialsSecrets`, :class:`JWTSecrets`, and
    :class:`CachedToken`. Field aliases match the camelCase keys operators
    write into Parameter Store.

**Wire and runtime values**:
    :class:`Strategy` selects a token strategy, :class:`TokenResponse` is
    the validated body returned by an OAuth2 token endpoint, and
    :class:`Settings` carries environment-driven configuration.
"""

from __future__ import annotations

import enum

import httpx
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Strategy(str, enum.Enum):
    """Token strategy for a credential key.

    The value doubles as the store sub-path segment, so
    ``Strategy.CLIENT_CREDENTIALS`` secrets live under
    ``<prefix>/<key>/client_credentials/secrets``.
    """

    CLIENT_CREDENTIALS = "client_credentials"
    JWT = "jwt"


# --- Stored secrets ---


class ClientCredentialsSecrets(BaseModel):
    """OAuth2 client-credentials configuration for one credential key.

    Example stored value::

        {"clientId": "abc", "clientSecret": "s3cr3t", "endpoint": "https://auth.example/token"}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    client_id: str = Field(alias="clientId", min_length=1)
    client_secret: str = Field(alias="clientSecret", min_length=1)
    endpoint: str = Field(description="Token endpoint URL (http or https)")

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ValueError(f"invalid endpoint URL: {exc}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("endpoint must be an absolute http(s) URL")
        return value


class JWTSecrets(BaseModel):
    """Signing configuration for self-issued JWTs."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api_key: str = Field(alias="apiKey", min_length=1)
    api_secret: str = Field(alias="apiSecret", min_length=1)


class CachedToken(BaseModel):
    """A client-credentials token persisted for reuse.

    ``expiration_epoch_millis`` already includes the safety margin, so a
    token is usable while it is strictly greater than the current time.
    Older deployments wrote the field as ``expiration``; both names are
    accepted when reading, and ``expirationEpochMillis`` is always written.
    """

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(min_length=1)
    expiration_epoch_millis: int = Field(
        validation_alias=AliasChoices("expirationEpochMillis", "expiration"),
        serialization_alias="expirationEpochMillis",
    )

    def is_valid_at(self, now_millis: int) -> bool:
        return self.expiration_epoch_millis > now_millis

    def to_store_value(self) -> str:
        return self.model_dump_json(by_alias=True)


# --- Token endpoint ---


class TokenResponse(BaseModel):
    """The subset of an OAuth2 token response that paramauth relies on.

    Other fields (``token_type``, ``scope``) are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(min_length=1)
    expires_in: float = Field(
        gt=0, allow_inf_nan=False, description="Token lifetime in seconds, possibly fractional"
    )


# --- Runtime settings ---


class Settings(BaseModel):
    """Environment-driven settings; see :func:`paramauth.config.load_settings`."""

    region: str = "us-east-1"
    prefix: str = "/oauth"
    request_timeout: float = Field(default=2.0, gt=0)
    refresh_on_store_outage: bool = False
