"""Configuration: environment settings and the secret store path layout.

Settings are read from the process environment, which is how serverless
functions receive deployment configuration:

* ``PARAM_STORE_REGION`` -- AWS region of the Parameter Store
  (default ``us-east-1``).
* ``PARAMAUTH_PARAM_PREFIX`` -- path prefix for every parameter
  (default ``/oauth``).
* ``PARAMAUTH_REQUEST_TIMEOUT`` -- token endpoint timeout in seconds
  (default ``2.0``).
* ``PARAMAUTH_REFRESH_ON_STORE_OUTAGE`` -- when true, an unreadable cached
  token is treated as a cache miss instead of an error.

:class:`StorePaths` owns the namespace contract: every parameter a
credential key uses lives under ``<prefix>/<key>/<strategy>/``.
"""

from __future__ import annotations

import os
from typing import Optional

from pydantic import ValidationError

from paramauth.exceptions import ConfigError, InvalidCredentialKeyError
from paramauth.models import Settings, Strategy

DEFAULT_REGION = "us-east-1"
DEFAULT_PREFIX = "/oauth"
DEFAULT_REQUEST_TIMEOUT = 2.0

REGION_ENV_VAR = "PARAM_STORE_REGION"
PREFIX_ENV_VAR = "PARAMAUTH_PARAM_PREFIX"
TIMEOUT_ENV_VAR = "PARAMAUTH_REQUEST_TIMEOUT"
OUTAGE_POLICY_ENV_VAR = "PARAMAUTH_REFRESH_ON_STORE_OUTAGE"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}

SECRETS_LEAF = "secrets"
TOKEN_LEAF = "token"


# --- Environment settings ---


def _env_flag(name: str) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ConfigError(f"Environment variable '{name}' must be a boolean, got '{raw}'")


def _env_timeout(name: str) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(
            f"Environment variable '{name}' must be a number of seconds, got '{raw}'"
        ) from exc


def load_settings(
    region: Optional[str] = None,
    prefix: Optional[str] = None,
) -> Settings:
    """Resolve settings from explicit overrides and the environment.

    Precedence (high to low):
        1. Arguments (``region``, ``prefix``), e.g. from CLI flags
        2. Environment variables
        3. Defaults

    Returns:
        A validated :class:`~paramauth.models.Settings`.

    Raises:
        ConfigError: If an environment value cannot be parsed or is out of range.
    """
    resolved_region = region or os.environ.get(REGION_ENV_VAR) or DEFAULT_REGION
    if prefix is None:
        prefix = os.environ.get(PREFIX_ENV_VAR, DEFAULT_PREFIX)
    try:
        return Settings(
            region=resolved_region,
            prefix=prefix,
            request_timeout=_env_timeout(TIMEOUT_ENV_VAR),
            refresh_on_store_outage=_env_flag(OUTAGE_POLICY_ENV_VAR),
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid paramauth settings: {exc}") from exc


# --- Store path layout ---


def validate_credential_key(key: object) -> str:
    """Return *key* if it is usable as a store namespace segment.

    Raises:
        InvalidCredentialKeyError: If the key is not a string, is empty or
            blank, or contains ``/``.
    """
    if not isinstance(key, str) or not key.strip():
        raise InvalidCredentialKeyError("please pass a valid OAuth key")
    if "/" in key:
        raise InvalidCredentialKeyError(
            f"credential key '{key}' must not contain '/'"
        )
    return key


class StorePaths:
    """Builds secret store paths for credential keys.

    Args:
        prefix: Leading path segment(s). An empty prefix gives the bare
            ``<key>/<strategy>/<leaf>`` layout.

    Example::

        paths = StorePaths("/oauth")
        paths.secrets("acme", Strategy.JWT)        # "/oauth/acme/jwt/secrets"
        paths.token("acme")                        # "/oauth/acme/client_credentials/token"
    """

    def __init__(self, prefix: str = DEFAULT_PREFIX) -> None:
        self._prefix = prefix.rstrip("/")

    @property
    def prefix(self) -> str:
        return self._prefix

    def _join(self, key: str, strategy: Strategy, leaf: str) -> str:
        parts = [key, strategy.value, leaf]
        if self._prefix:
            parts.insert(0, self._prefix)
        return "/".join(parts)

    def secrets(self, key: str, strategy: Strategy) -> str:
        return self._join(key, strategy, SECRETS_LEAF)

    def token(self, key: str) -> str:
        """Path of the cached client-credentials token for *key*."""
        return self._join(key, Strategy.CLIENT_CREDENTIALS, TOKEN_LEAF)
