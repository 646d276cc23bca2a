"""Secret store port and backends.

- :class:`SecretStore` -- abstract async get/put interface.
- :class:`StoreLookup` / :class:`LookupStatus` -- tri-state read result.
- :class:`ParameterStore` -- AWS Systems Manager Parameter Store backend.
- :class:`MemorySecretStore` -- dict-backed backend for tests and local runs.
"""

from paramauth.store.base import LookupStatus, SecretStore, StoreLookup
from paramauth.store.memory import MemorySecretStore
from paramauth.store.parameter_store import ParameterStore

__all__ = [
    "LookupStatus",
    "MemorySecretStore",
    "ParameterStore",
    "SecretStore",
    "StoreLookup",
]
