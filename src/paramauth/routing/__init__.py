"""Routing of API-Gateway proxy events to resource handlers."""

from paramauth.routing.router import ResourceRouter, canonicalize_path, is_path_token

__all__ = ["ResourceRouter", "canonicalize_path", "is_path_token"]
