"""Exception hierarchy for paramauth.

All exceptions inherit from :class:`ParamAuthError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`paramauth.exit_codes`.
Library callers catch the specific subclasses; the CLI in
:func:`paramauth.app.main` catches ``ParamAuthError`` and exits with the
matching code.

Subclass hierarchy::

    ParamAuthError                  (exit 1)
    +-- InvalidUsageError           (exit 2)
    |   +-- InvalidCredentialKeyError
    +-- ConfigError                 (exit 1)
    +-- ConfigurationMissingError   (exit 4)
    +-- ConfigurationMalformedError (exit 5)
    +-- UpstreamTokenInvalidError   (exit 3)
    +-- UpstreamTransportError      (exit 6)
    +-- SecretStoreError            (exit 7)
        +-- SecretStoreUnavailableError
        +-- SecretStoreWriteError
"""

from paramauth.exit_codes import (
    EXIT_CONFIG_MALFORMED,
    EXIT_CONFIG_MISSING,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_STORE_UNAVAILABLE,
    EXIT_UPSTREAM_INVALID,
)


class ParamAuthError(Exception):
    """Base exception for all paramauth errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ParamAuthError):
    """Raised for invalid arguments such as an unknown strategy name."""

    exit_code = EXIT_INVALID_USAGE


class InvalidCredentialKeyError(InvalidUsageError):
    """Raised when a supplier is requested for an empty or malformed credential key."""


class ConfigError(ParamAuthError):
    """Raised for invalid environment settings (bad timeout, unparsable flags)."""

    exit_code = EXIT_GENERIC_FAILURE


class ConfigurationMissingError(ParamAuthError):
    """Raised when the store holds no secrets for a key and strategy."""

    exit_code = EXIT_CONFIG_MISSING


class ConfigurationMalformedError(ParamAuthError):
    """Raised when stored secrets are not JSON or do not match the strategy's shape."""

    exit_code = EXIT_CONFIG_MALFORMED


class UpstreamTokenInvalidError(ParamAuthError):
    """Raised when the token endpoint response lacks ``access_token`` or ``expires_in``."""

    exit_code = EXIT_UPSTREAM_INVALID


class UpstreamTransportError(ParamAuthError):
    """Raised on network-level failures talking to the token endpoint (timeout, DNS, refused)."""

    exit_code = EXIT_CONNECTION_ERROR


class SecretStoreError(ParamAuthError):
    """Base class for secret store failures."""

    exit_code = EXIT_STORE_UNAVAILABLE


class SecretStoreUnavailableError(SecretStoreError):
    """Raised when the store could not say whether a value exists (outage, permissions)."""


class SecretStoreWriteError(SecretStoreError):
    """Raised by a store when a ``put`` fails.

    The client-credentials token cache logs and swallows this error so a
    freshly issued token still reaches the caller.
    """
