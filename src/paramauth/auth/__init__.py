"""Credential lifecycle: suppliers, secrets resolution, and token exchange.

The main entry points are:

- :class:`TokenSupplier` -- abstract base class every strategy implements.
- :class:`CredentialManager` -- builds suppliers for a credential key and
  strategy over injected store and HTTP capabilities.
- :func:`create_default_manager` -- a manager backed by AWS Parameter Store
  and configured from the environment.
- :class:`SecretsResolver` -- loads per-key secrets from the store.
- :class:`TokenEndpointClient` -- performs the client-credentials grant.

Typical usage::

    from paramauth.auth import create_default_manager

    manager = create_default_manager()
    get_token = manager.jwt("blackboard")
    token = await get_token()
"""

from paramauth.auth.base import Clock, TokenSupplier, epoch_millis
from paramauth.auth.endpoint import TokenEndpointClient
from paramauth.auth.resolver import SecretsResolver
from paramauth.auth.singleflight import SingleFlight
from paramauth.auth.manager import CredentialManager, create_default_manager

__all__ = [
    "Clock",
    "CredentialManager",
    "SecretsResolver",
    "SingleFlight",
    "TokenEndpointClient",
    "TokenSupplier",
    "create_default_manager",
    "epoch_millis",
]
