"""Token strategies.

Each strategy lives in its own sub-package and provides one
:class:`~paramauth.auth.base.TokenSupplier` subclass:

- :mod:`paramauth.strategies.client_credentials` -- cached OAuth2
  client-credentials tokens.
- :mod:`paramauth.strategies.jwt` -- self-signed short-lived JWTs.
"""

from paramauth.strategies.client_credentials import ClientCredentialsSupplier
from paramauth.strategies.jwt import JWTSupplier

__all__ = ["ClientCredentialsSupplier", "JWTSupplier"]
