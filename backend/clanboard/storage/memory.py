"""In-process document store for local development and tests."""

import asyncio
import copy
import logging
from collections.abc import Mapping
from typing import Any

from clanboard.storage.base import DocumentStore, Record

logger = logging.getLogger(__name__)


class MemoryDocumentStore(DocumentStore):
    """Dict-backed store with the same contract as the Mongo adapter.

    Records are deep-copied on the way in and out so callers never share
    mutable state with the store. Writes to a collection are serialized
    by a per-collection lock.
    """

    def __init__(
        self,
        data: Mapping[str, Mapping[str, Mapping[str, Any]]] | None = None,
        timeout_seconds: float = 10.0,
    ):
        super().__init__(timeout_seconds=timeout_seconds)
        self._collections: dict[str, dict[str, Record]] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        for collection, documents in (data or {}).items():
            self._collections[collection] = {
                str(doc_id): copy.deepcopy(dict(record))
                for doc_id, record in documents.items()
            }

    def _lock(self, collection: str) -> asyncio.Lock:
        if collection not in self._locks:
            self._locks[collection] = asyncio.Lock()
        return self._locks[collection]

    async def get_all(self, collection: str) -> list[tuple[str, Record]]:
        return await self._guard(self._read(collection), f"get_all {collection}")

    async def get_by_id(self, collection: str, doc_id: str) -> Record | None:
        async def read() -> Record | None:
            record = self._collections.get(collection, {}).get(str(doc_id))
            return copy.deepcopy(record) if record is not None else None

        return await self._guard(read(), f"get_by_id {collection}/{doc_id}")

    async def put(self, collection: str, doc_id: str, record: Mapping[str, Any]) -> None:
        async def write() -> None:
            async with self._lock(collection):
                documents = self._collections.setdefault(collection, {})
                documents[str(doc_id)] = copy.deepcopy(dict(record))

        await self._guard(write(), f"put {collection}/{doc_id}")
        logger.debug(f"Stored document {collection}/{doc_id}")

    async def scan(
        self, collection: str, filters: Mapping[str, Any] | None = None
    ) -> list[tuple[str, Record]]:
        documents = await self._guard(self._read(collection), f"scan {collection}")
        if not filters:
            return documents
        return [
            (doc_id, record)
            for doc_id, record in documents
            if all(key in record and record[key] == value for key, value in filters.items())
        ]

    async def ping(self) -> bool:
        return True

    async def _read(self, collection: str) -> list[tuple[str, Record]]:
        documents = self._collections.get(collection, {})
        return [(doc_id, copy.deepcopy(record)) for doc_id, record in documents.items()]
