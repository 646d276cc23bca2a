"""paramauth -- always-valid bearer credentials for serverless HTTP calls.

Secrets for each credential key live in AWS Systems Manager Parameter Store.
A :class:`~paramauth.auth.manager.CredentialManager` hands out token
suppliers that either reuse a cached OAuth2 client-credentials token,
refresh it against the authorization server, or sign a short-lived JWT.

Typical usage::

    from paramauth import create_default_manager

    manager = create_default_manager()
    get_blackboard_token = manager.client_credentials("blackboard")
    token = await get_blackboard_token()

Modules:
    auth: Credential manager, secrets resolver, token endpoint client.
    strategies: Client-credentials and JWT token suppliers.
    store: Secret store port with SSM and in-memory implementations.
    http: API-Gateway response builders and bearer-authenticated clients.
    routing: Path-based dispatch of API-Gateway proxy events.
    config: Environment-driven settings and store path layout.
    exceptions: Exception hierarchy with exit-code mapping.
"""

from paramauth.auth.manager import CredentialManager, create_default_manager
from paramauth.models import Strategy

__version__ = "1.3.0"

__all__ = ["CredentialManager", "Strategy", "create_default_manager", "__version__"]
