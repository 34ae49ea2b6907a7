"""MongoDB document store via Motor (async driver)."""

import logging
from collections.abc import Mapping
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from clanboard.config import StoreConfig
from clanboard.exceptions import StoreUnavailableError
from clanboard.storage.base import DocumentStore, Record

logger = logging.getLogger(__name__)


class MongoDocumentStore(DocumentStore):
    """Maps documents to Mongo collections, keeping the id in ``_id``."""

    def __init__(
        self,
        database: AsyncIOMotorDatabase,
        client: AsyncIOMotorClient | None = None,
        timeout_seconds: float = 10.0,
    ):
        super().__init__(timeout_seconds=timeout_seconds)
        self._database = database
        self._client = client

    @classmethod
    def from_config(cls, config: StoreConfig) -> "MongoDocumentStore":
        """Create a client for the configured URL and database."""
        timeout_ms = int(config.timeout_seconds * 1000)
        client = AsyncIOMotorClient(
            config.mongodb_url,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
        )
        return cls(
            client[config.database],
            client=client,
            timeout_seconds=config.timeout_seconds,
        )

    async def _call(self, operation, description: str):
        try:
            return await self._guard(operation, description)
        except PyMongoError as e:
            logger.error(f"MongoDB error during {description}: {e}")
            raise StoreUnavailableError("Document store is unavailable") from e

    async def get_all(self, collection: str) -> list[tuple[str, Record]]:
        return await self.scan(collection)

    async def get_by_id(self, collection: str, doc_id: str) -> Record | None:
        document = await self._call(
            self._database[collection].find_one({"_id": doc_id}),
            f"get_by_id {collection}/{doc_id}",
        )
        if document is None:
            return None
        return _split_id(document)[1]

    async def put(self, collection: str, doc_id: str, record: Mapping[str, Any]) -> None:
        document = {key: value for key, value in record.items() if key != "_id"}
        await self._call(
            self._database[collection].replace_one({"_id": doc_id}, document, upsert=True),
            f"put {collection}/{doc_id}",
        )
        logger.debug(f"Stored document {collection}/{doc_id}")

    async def scan(
        self, collection: str, filters: Mapping[str, Any] | None = None
    ) -> list[tuple[str, Record]]:
        # Natural order is insertion order for collections without reorganisation
        cursor = self._database[collection].find(dict(filters or {}))
        documents = await self._call(cursor.to_list(length=None), f"scan {collection}")
        return [_split_id(document) for document in documents]

    async def ping(self) -> bool:
        try:
            await self._guard(self._database.command("ping"), "ping")
            return True
        except Exception:
            return False

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


def _split_id(document: Mapping[str, Any]) -> tuple[str, Record]:
    record = dict(document)
    return str(record.pop("_id")), record


def sanitize_mongodb_url(url: str) -> str:
    """Hide password in MongoDB URL for safe logging."""
    if "@" not in url or "://" not in url:
        return url

    protocol, rest = url.split("://", 1)
    credentials, host = rest.rsplit("@", 1)
    if ":" in credentials:
        username = credentials.split(":", 1)[0]
        return f"{protocol}://{username}:***@{host}"
    return url
