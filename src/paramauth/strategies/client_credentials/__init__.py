"""OAuth2 client-credentials strategy.

Tokens are exchanged at the key's configured endpoint and cached in the
secret store until two minutes before they expire.

See Also:
    :class:`~paramauth.strategies.client_credentials.supplier.ClientCredentialsSupplier`
"""

from paramauth.strategies.client_credentials.supplier import (
    EXPIRY_MARGIN_MILLIS,
    ClientCredentialsSupplier,
)

__all__ = ["EXPIRY_MARGIN_MILLIS", "ClientCredentialsSupplier"]
