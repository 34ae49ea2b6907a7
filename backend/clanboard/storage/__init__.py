"""Storage layer: document store adapters.

This package provides:
- DocumentStore: async get-all / get-by-id / put / scan interface
- MongoDocumentStore: MongoDB backend via Motor
- MemoryDocumentStore: in-process backend for development and tests
"""

from clanboard.config import StoreConfig

from .base import DocumentStore, Record
from .memory import MemoryDocumentStore
from .mongo import MongoDocumentStore, sanitize_mongodb_url


def connect_store(config: StoreConfig) -> DocumentStore:
    """Build the backend selected by ``store.backend``."""
    if config.backend == "memory":
        return MemoryDocumentStore(timeout_seconds=config.timeout_seconds)
    return MongoDocumentStore.from_config(config)


def describe_store(config: StoreConfig) -> dict:
    """Connection information safe to log."""
    return {
        "backend": config.backend,
        "url": sanitize_mongodb_url(config.mongodb_url) if config.backend == "mongo" else None,
        "database": config.database,
    }


__all__ = [
    "DocumentStore",
    "MemoryDocumentStore",
    "MongoDocumentStore",
    "Record",
    "connect_store",
    "describe_store",
    "sanitize_mongodb_url",
]
