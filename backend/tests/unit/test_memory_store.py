"""Unit tests for the in-process document store."""

import asyncio

import pytest

from clanboard.exceptions import StoreTimeoutError
from clanboard.storage import MemoryDocumentStore


def test_put_get_and_scan() -> None:
    store = MemoryDocumentStore()

    async def run() -> None:
        await store.put("snapshots", "a", {"season_name": "S1", "value": 1})
        await store.put("snapshots", "b", {"season_name": "S2", "value": 2})
        await store.put("snapshots", "c", {"season_name": "S1", "value": 3})

        assert await store.get_by_id("snapshots", "b") == {"season_name": "S2", "value": 2}
        assert await store.get_by_id("snapshots", "zzz") is None
        assert await store.get_by_id("missing", "a") is None

        matches = await store.scan("snapshots", {"season_name": "S1"})
        assert [doc_id for doc_id, _ in matches] == ["a", "c"]
        assert [doc_id for doc_id, _ in await store.get_all("snapshots")] == ["a", "b", "c"]
        assert await store.get_all("missing") == []
        assert await store.ping() is True

    asyncio.run(run())


def test_put_replaces_whole_document() -> None:
    store = MemoryDocumentStore({"home": {"schedule": {"events": [1], "updatedBy": "x"}}})

    async def run() -> None:
        await store.put("home", "schedule", {"events": []})
        assert await store.get_by_id("home", "schedule") == {"events": []}

    asyncio.run(run())


def test_returned_records_are_copies() -> None:
    store = MemoryDocumentStore({"users": {"m1": {"labels": ["a"]}}})

    async def run() -> None:
        record = await store.get_by_id("users", "m1")
        record["labels"].append("b")
        assert (await store.get_by_id("users", "m1"))["labels"] == ["a"]

    asyncio.run(run())


def test_concurrent_replacements_do_not_tear() -> None:
    store = MemoryDocumentStore()

    async def run() -> None:
        writes = [
            store.put("home", "schedule", {"events": [n] * 50, "updatedBy": str(n)})
            for n in range(20)
        ]
        await asyncio.gather(*writes)

        stored = await store.get_by_id("home", "schedule")
        writer = int(stored["updatedBy"])
        assert stored["events"] == [writer] * 50

    asyncio.run(run())


def test_slow_operation_times_out() -> None:
    store = MemoryDocumentStore(timeout_seconds=0.01)

    async def run() -> None:
        with pytest.raises(StoreTimeoutError):
            await store._guard(asyncio.sleep(1), "slow read")

    asyncio.run(run())
