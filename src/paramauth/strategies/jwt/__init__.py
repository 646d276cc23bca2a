"""Self-signed JWT strategy."""

from paramauth.strategies.jwt.supplier import DEFAULT_EXPIRY_MILLIS, JWTSupplier, sign_token

__all__ = ["DEFAULT_EXPIRY_MILLIS", "JWTSupplier", "sign_token"]
