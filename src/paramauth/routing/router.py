"""Path-based dispatch of API-Gateway proxy events.

:class:`ResourceRouter` walks the segments of ``event["resource"]`` (the
route template, e.g. ``/courses/{courseId}/announcements``) through a
nested dict of resources. A segment written as ``{name}`` (or its
URL-encoded form ``%7Bname%7D``) right after a resource marks that the
request targets a single item.

Handler selection on the final resource:

====== ================= ==========================
Method With path token   Without path token
====== ================= ==========================
GET    ``get``           ``get_all``
PUT    ``update``        400 Bad Request
DELETE ``remove``        400 Bad Request
POST   ``post``          ``post``
====== ================= ==========================

Example::

    router = ResourceRouter({
        "courses": {
            "get_all": list_courses,
            "get": get_course,
            "announcements": {"post": create_announcement},
        },
    })

    def handler(event, context):
        return router(event)
"""

from __future__ import annotations

import re
from typing import Any, Callable, Mapping, Optional

from paramauth.http.responses import bad_request, method_not_allowed, not_found

Handler = Callable[[Mapping[str, Any]], dict[str, Any]]

ACTION_NAMES = frozenset({"get", "get_all", "update", "create", "remove", "post"})

_PROTOCOL = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)
_TOKEN = re.compile(r"^(\{\w+\}|%7B\w+%7D)$", re.IGNORECASE)


def canonicalize_path(path: str) -> list[str]:
    """Split a resource path into segments.

    Strips any protocol, fragment, and query string, then drops empty
    segments so leading, trailing, and doubled slashes are ignored.
    """
    path = _PROTOCOL.sub("", path)
    path = path.split("#", 1)[0].split("?", 1)[0]
    return [segment for segment in path.split("/") if segment]


def is_path_token(segment: Optional[str]) -> bool:
    return segment is not None and _TOKEN.match(segment) is not None


class ResourceRouter:
    """Dispatches API-Gateway proxy events to handlers by resource path and method.

    Args:
        routes: Nested mapping of resource names to sub-resources and
            handlers. Handler keys are the names in :data:`ACTION_NAMES`.
    """

    def __init__(self, routes: Mapping[str, Any]) -> None:
        self._routes = routes

    def resolve(self, resource_path: str) -> tuple[Optional[Mapping[str, Any]], bool, str]:
        """Find the resource addressed by *resource_path*.

        Returns:
            ``(resource, has_token, missing)``. When a segment names an
            unknown resource, ``resource`` is ``None`` and ``missing`` holds
            that segment.
        """
        segments = canonicalize_path(resource_path)
        if not segments:
            return None, False, ""
        found: Mapping[str, Any] = self._routes
        has_token = False
        index = 0

        while index < len(segments):
            name = segments[index]
            child = found.get(name)
            if name in ACTION_NAMES or not isinstance(child, Mapping):
                return None, False, name
            found = child
            index += 1
            has_token = index < len(segments) and is_path_token(segments[index])
            if has_token:
                index += 1

        return found, has_token, ""

    def __call__(self, event: Mapping[str, Any]) -> dict[str, Any]:
        resource, has_token, missing = self.resolve(event.get("resource") or "")
        if resource is None:
            return not_found(
                f"'{missing}' resource not found in path {event.get('path', '')}"
            )

        method = (event.get("httpMethod") or "").upper()
        action: Optional[Handler] = None

        if method == "GET":
            action = resource.get("get") if has_token else resource.get("get_all")
        elif method == "PUT":
            if not has_token:
                return bad_request("Update requires an id.")
            action = resource.get("update")
        elif method == "DELETE":
            if not has_token:
                return bad_request("Remove requires an id.")
            action = resource.get("remove")
        elif method == "POST":
            action = resource.get("post")

        if action is None:
            return method_not_allowed(
                f"{method or 'UNKNOWN'} is not supported for {event.get('path', '')}"
            )
        return action(event)
