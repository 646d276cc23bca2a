"""API-Gateway proxy response builders.

Lambda functions behind API Gateway return a dict with ``statusCode``,
``headers``, and a string ``body``. :func:`build_response` produces that
envelope with permissive CORS headers and a JSON-encoded body; the
shortcuts below cover the status codes handlers actually use.

Example::

    def get_user(event):
        return success({"id": 42})
"""

from __future__ import annotations

import enum
import json
from typing import Any, Optional


class StatusCode(enum.IntEnum):
    SUCCESS = 200
    CREATED = 201
    NO_CONTENT = 204
    BAD_REQUEST = 400
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    INTERNAL_ERROR = 500


CORS_HEADERS: dict[str, Any] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Credentials": True,
}

_NO_BODY = object()


def build_response(status: StatusCode, body: Any = _NO_BODY) -> dict[str, Any]:
    """Build a proxy response for *status*.

    Args:
        status: HTTP status of the response.
        body: JSON-serialisable payload. Omit it for an empty body.

    Returns:
        ``{"statusCode": int, "headers": {...}, "body": str | None}``.

    Raises:
        ValueError: If a body is passed with ``204 No Content``.
    """
    if status == StatusCode.NO_CONTENT and body is not _NO_BODY:
        raise ValueError("No content does not take in a body")
    return {
        "statusCode": int(status),
        "headers": dict(CORS_HEADERS),
        "body": None if body is _NO_BODY else json.dumps(body),
    }


def build_error_response(status: StatusCode, message: str) -> dict[str, Any]:
    """Build a response whose body is ``{"message": message}``."""
    return build_response(status, {"message": message})


def success(body: Any) -> dict[str, Any]:
    return build_response(StatusCode.SUCCESS, body)


def created(body: Any) -> dict[str, Any]:
    return build_response(StatusCode.CREATED, body)


def no_content() -> dict[str, Any]:
    return build_response(StatusCode.NO_CONTENT)


def failure(message: str) -> dict[str, Any]:
    return build_error_response(StatusCode.INTERNAL_ERROR, message)


def not_found(message: str) -> dict[str, Any]:
    return build_error_response(StatusCode.NOT_FOUND, message)


def bad_request(message: str) -> dict[str, Any]:
    return build_error_response(StatusCode.BAD_REQUEST, message)


def method_not_allowed(message: Optional[str] = None) -> dict[str, Any]:
    return build_error_response(
        StatusCode.METHOD_NOT_ALLOWED, message or "Method not allowed"
    )
