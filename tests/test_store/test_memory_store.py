"""Tests for the in-process secret store and lookup results."""

from __future__ import annotations

import asyncio

import pytest

from paramauth.exceptions import SecretStoreError, SecretStoreWriteError
from paramauth.store import LookupStatus, MemorySecretStore, StoreLookup


class TestStoreLookup:
    def test_present(self) -> None:
        lookup = StoreLookup.present("v")
        assert lookup.status is LookupStatus.PRESENT
        assert lookup.is_present
        assert not lookup.is_unavailable
        assert lookup.value == "v"

    def test_absent(self) -> None:
        lookup = StoreLookup.absent()
        assert lookup.status is LookupStatus.ABSENT
        assert not lookup.is_present
        assert not lookup.is_unavailable
        assert lookup.value is None

    def test_unavailable_keeps_cause(self) -> None:
        cause = RuntimeError("throttled")
        lookup = StoreLookup.unavailable(cause)
        assert lookup.is_unavailable
        assert lookup.error is cause


class TestMemorySecretStore:
    def test_get_present_and_absent(self) -> None:
        store = MemorySecretStore({"/a": "1"})

        async def run() -> tuple[StoreLookup, StoreLookup]:
            return await store.get("/a"), await store.get("/b")

        present, absent = asyncio.run(run())
        assert present == StoreLookup.present("1")
        assert absent == StoreLookup.absent()
        assert store.reads == ["/a", "/b"]

    def test_put_overwrites_and_records(self) -> None:
        store = MemorySecretStore({"/a": "1"})
        asyncio.run(store.put("/a", "2"))
        assert store.value("/a") == "2"
        assert store.writes == [("/a", "2")]

    def test_put_plain_string(self) -> None:
        store = MemorySecretStore()
        asyncio.run(store.put("/a", "1", secure=False))
        assert not store.is_secure("/a")

    def test_initial_values_are_secure(self) -> None:
        assert MemorySecretStore({"/a": "1"}).is_secure("/a")

    def test_put_without_overwrite_on_existing_path(self) -> None:
        store = MemorySecretStore({"/a": "1"})
        with pytest.raises(SecretStoreWriteError, match="already exists"):
            asyncio.run(store.put("/a", "2", overwrite=False))
        assert store.value("/a") == "1"

    def test_unavailable_path(self) -> None:
        store = MemorySecretStore({"/a": "1"})
        store.make_unavailable("/a")
        lookup = asyncio.run(store.get("/a"))
        assert lookup.is_unavailable
        assert isinstance(lookup.error, SecretStoreError)

    def test_read_only_path(self) -> None:
        store = MemorySecretStore()
        store.make_read_only("/a")
        with pytest.raises(SecretStoreWriteError, match="read-only"):
            asyncio.run(store.put("/a", "1"))
        assert store.writes == []
