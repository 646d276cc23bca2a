"""Secret store port.

A secret store is a key/value service addressed by slash-separated paths.
Reads return a :class:`StoreLookup` that separates three outcomes:

- ``PRESENT`` -- the value exists and is carried in :attr:`StoreLookup.value`.
- ``ABSENT`` -- the store confirmed there is no value at the path.
- ``UNAVAILABLE`` -- the store could not answer (network, throttling,
  permissions). The cause is kept in :attr:`StoreLookup.error`.

Keeping "confirmed absent" apart from "could not determine" lets callers
decide whether an outage should look like a cold start.

See Also:
    :class:`~paramauth.store.parameter_store.ParameterStore` -- AWS SSM backend.
    :class:`~paramauth.store.memory.MemorySecretStore` -- in-process backend.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class LookupStatus(str, enum.Enum):
    PRESENT = "present"
    ABSENT = "absent"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class StoreLookup:
    """Result of :meth:`SecretStore.get`."""

    status: LookupStatus
    value: Optional[str] = None
    error: Optional[BaseException] = None

    @classmethod
    def present(cls, value: str) -> StoreLookup:
        return cls(LookupStatus.PRESENT, value=value)

    @classmethod
    def absent(cls) -> StoreLookup:
        return cls(LookupStatus.ABSENT)

    @classmethod
    def unavailable(cls, error: Optional[BaseException] = None) -> StoreLookup:
        return cls(LookupStatus.UNAVAILABLE, error=error)

    @property
    def is_present(self) -> bool:
        return self.status is LookupStatus.PRESENT

    @property
    def is_unavailable(self) -> bool:
        return self.status is LookupStatus.UNAVAILABLE


class SecretStore(ABC):
    """Abstract async key/value store for secrets and cached tokens.

    Implementations must be safe to share between concurrent coroutines
    and must not raise from :meth:`get`; failures are reported as
    ``UNAVAILABLE`` lookups instead.
    """

    @abstractmethod
    async def get(self, path: str, decrypt: bool = True) -> StoreLookup:
        """Read the value stored at *path*.

        Args:
            path: Full parameter path, e.g. ``/oauth/acme/jwt/secrets``.
            decrypt: Return the plaintext of encrypted values.

        Returns:
            A :class:`StoreLookup` describing the outcome.
        """
        ...

    @abstractmethod
    async def put(
        self,
        path: str,
        value: str,
        secure: bool = True,
        overwrite: bool = True,
    ) -> None:
        """Write *value* at *path*.

        Args:
            path: Full parameter path.
            value: The string to store.
            secure: Store the value encrypted at rest.
            overwrite: Replace an existing value instead of failing.

        Raises:
            SecretStoreWriteError: If the value could not be written.
        """
        ...
