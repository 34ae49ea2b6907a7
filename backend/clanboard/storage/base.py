"""Document store interface shared by the Mongo and in-memory backends."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Mapping
from typing import Any, TypeVar

from clanboard.exceptions import StoreTimeoutError

logger = logging.getLogger(__name__)

Record = dict[str, Any]
T = TypeVar("T")


class DocumentStore(ABC):
    """Generic key/document access; no business logic lives here.

    Every operation runs under ``timeout_seconds`` and raises
    StoreTimeoutError when the deadline passes. Records are plain dicts
    keyed by a string id, returned in stored order.
    """

    def __init__(self, timeout_seconds: float = 10.0):
        self.timeout_seconds = timeout_seconds

    async def _guard(self, operation: Awaitable[T], description: str) -> T:
        try:
            return await asyncio.wait_for(operation, timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.error(
                f"Store operation timed out after {self.timeout_seconds}s: {description}"
            )
            raise StoreTimeoutError(
                f"Document store did not respond within {self.timeout_seconds}s"
            ) from None

    @abstractmethod
    async def get_all(self, collection: str) -> list[tuple[str, Record]]:
        """All documents of a collection as (id, record) pairs."""

    @abstractmethod
    async def get_by_id(self, collection: str, doc_id: str) -> Record | None:
        """Single document, or None when it does not exist."""

    @abstractmethod
    async def put(self, collection: str, doc_id: str, record: Mapping[str, Any]) -> None:
        """Insert or wholly replace one document atomically."""

    @abstractmethod
    async def scan(
        self, collection: str, filters: Mapping[str, Any] | None = None
    ) -> list[tuple[str, Record]]:
        """Documents whose top-level fields equal every filter value."""

    @abstractmethod
    async def ping(self) -> bool:
        """True when the backend is reachable."""

    async def close(self) -> None:
        """Release connections held by the backend."""
        return None
