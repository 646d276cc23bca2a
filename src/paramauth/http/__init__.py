"""HTTP helpers for Lambda handlers.

- :mod:`paramauth.http.responses` -- API-Gateway proxy response envelopes.
- :mod:`paramauth.http.requests` -- bearer-authenticated outbound clients.
"""

from paramauth.http.requests import (
    SupplierAuth,
    authorized_client,
    bearer_header,
    build_query_param_url,
)
from paramauth.http.responses import (
    StatusCode,
    bad_request,
    build_error_response,
    build_response,
    created,
    failure,
    method_not_allowed,
    no_content,
    not_found,
    success,
)

__all__ = [
    "StatusCode",
    "SupplierAuth",
    "authorized_client",
    "bad_request",
    "bearer_header",
    "build_error_response",
    "build_query_param_url",
    "build_response",
    "created",
    "failure",
    "method_not_allowed",
    "no_content",
    "not_found",
    "success",
]
