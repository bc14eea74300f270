"""
Document store backends for marginalia.

Provides the async document-store interface the journal reads from, an
in-memory backend and a Cloud Firestore backend.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from marginalia.core.exceptions import ConfigurationError

from .base import DocumentStore, EntryQuery, StoredDocument
from .firestore import FirestoreDocumentStore, is_missing_index_error
from .memory import MemoryDocumentStore

if TYPE_CHECKING:
    from marginalia.core.config import Config


def create_store(config: Config) -> DocumentStore:
    """Build the backend named by ``store.backend``."""
    backend = str(config.get("store.backend", "memory")).lower()
    if backend == "memory":
        seed_file = config.get("store.seed_file", "")
        if seed_file:
            return MemoryDocumentStore.from_file(seed_file)
        return MemoryDocumentStore()
    if backend == "firestore":
        auth = None
        credentials_path = config.get("store.credentials_path", "")
        if credentials_path:
            from marginalia.core.auth import ServiceAccountAuth

            auth = ServiceAccountAuth(credentials_path)
        return FirestoreDocumentStore(
            project_id=config.get("store.project_id", ""),
            collection=config.get("store.collection", "journalEntries"),
            auth=auth,
        )
    raise ConfigurationError(f"Unknown store backend: {backend!r}")


__all__ = [
    "DocumentStore",
    "EntryQuery",
    "FirestoreDocumentStore",
    "MemoryDocumentStore",
    "StoredDocument",
    "create_store",
    "is_missing_index_error",
]
