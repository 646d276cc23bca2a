"""In-process secret store.

:class:`MemorySecretStore` keeps values in a dict. It backs local runs and
the test suite, and records every call so tests can assert on store
traffic. Individual paths can be marked unavailable or read-only to
simulate backend failures.
"""

from __future__ import annotations

from typing import Optional

from paramauth.exceptions import SecretStoreUnavailableError, SecretStoreWriteError
from paramauth.store.base import SecretStore, StoreLookup


class MemorySecretStore(SecretStore):
    """Dict-backed :class:`~paramauth.store.base.SecretStore`.

    Args:
        values: Initial path → value mapping.

    Example::

        store = MemorySecretStore({"/oauth/acme/jwt/secrets": '{"apiKey": "k", "apiSecret": "s"}'})
        lookup = await store.get("/oauth/acme/jwt/secrets")
        assert lookup.is_present
    """

    def __init__(self, values: Optional[dict[str, str]] = None) -> None:
        self._values: dict[str, str] = dict(values or {})
        self._secure: set[str] = set(self._values)
        self._unavailable: set[str] = set()
        self._read_only: set[str] = set()
        self.reads: list[str] = []
        self.writes: list[tuple[str, str]] = []

    # ------------------------------------------------------------------ #
    # Failure simulation
    # ------------------------------------------------------------------ #

    def make_unavailable(self, path: str) -> None:
        """Make reads of *path* report ``UNAVAILABLE``."""
        self._unavailable.add(path)

    def make_read_only(self, path: str) -> None:
        """Make writes to *path* raise :class:`SecretStoreWriteError`."""
        self._read_only.add(path)

    # ------------------------------------------------------------------ #
    # SecretStore
    # ------------------------------------------------------------------ #

    async def get(self, path: str, decrypt: bool = True) -> StoreLookup:
        self.reads.append(path)
        if path in self._unavailable:
            return StoreLookup.unavailable(
                SecretStoreUnavailableError(f"parameter {path} is unavailable")
            )
        if path not in self._values:
            return StoreLookup.absent()
        return StoreLookup.present(self._values[path])

    async def put(
        self,
        path: str,
        value: str,
        secure: bool = True,
        overwrite: bool = True,
    ) -> None:
        if path in self._read_only:
            raise SecretStoreWriteError(f"parameter {path} is read-only")
        if not overwrite and path in self._values:
            raise SecretStoreWriteError(f"parameter {path} already exists")
        self.writes.append((path, value))
        self._values[path] = value
        if secure:
            self._secure.add(path)
        else:
            self._secure.discard(path)

    # ------------------------------------------------------------------ #
    # Inspection
    # ------------------------------------------------------------------ #

    def value(self, path: str) -> Optional[str]:
        return self._values.get(path)

    def is_secure(self, path: str) -> bool:
        return path in self._secure
