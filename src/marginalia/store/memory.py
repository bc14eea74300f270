"""
In-memory document store backend.

Keeps documents in a dict keyed by id. Without an ordering the store
returns documents in id order, mirroring Firestore's implicit
``__name__`` ordering. Set ``indexed=False`` to reproduce a project
that is missing the composite index for ordered, filtered queries.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any

import yaml
from loguru import logger

from marginalia.core.exceptions import MissingIndexError
from marginalia.core.utils.timestamps import normalize_timestamp

from .base import DocumentStore, EntryQuery, StoredDocument

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class MemoryDocumentStore(DocumentStore):
    """Dict-backed store for tests, demos and local tooling."""

    def __init__(self, documents: dict[str, dict[str, Any]] | None = None, *, indexed: bool = True, **config):
        super().__init__(**config)
        self.indexed = indexed
        self._documents: dict[str, dict[str, Any]] = {k: dict(v) for k, v in (documents or {}).items()}
        self.queries: list[EntryQuery] = []

    @classmethod
    def from_file(cls, path: str, *, indexed: bool = True) -> MemoryDocumentStore:
        """Seed a store from a YAML or JSON file.

        The file holds either a mapping of id to record or a list of
        records that each carry an ``id`` key.
        """
        with open(path, encoding="utf-8") as f:
            if os.path.splitext(path)[1].lower() == ".json":
                raw = json.load(f)
            else:
                raw = yaml.safe_load(f) or {}

        if isinstance(raw, list):
            raw = {str(record.pop("id")): record for record in raw}
        logger.debug(f"Seeded memory store with {len(raw)} documents from {path}")
        return cls(raw, indexed=indexed)

    def put(self, doc_id: str, data: dict[str, Any]) -> None:
        self._documents[doc_id] = dict(data)

    def remove(self, doc_id: str) -> bool:
        return self._documents.pop(doc_id, None) is not None

    def __len__(self) -> int:
        return len(self._documents)

    async def get(self, doc_id: str) -> StoredDocument | None:
        data = self._documents.get(doc_id)
        if data is None:
            return None
        return StoredDocument(id=doc_id, data=dict(data))

    async def query(self, query: EntryQuery) -> list[StoredDocument]:
        self.queries.append(query)
        matches = [
            StoredDocument(id=doc_id, data=dict(data))
            for doc_id, data in self._documents.items()
            if query.field in data and data[query.field] == query.value
        ]

        if query.order_by:
            if not self.indexed:
                raise MissingIndexError(
                    f"The query requires an index on ({query.field}, {query.order_by} "
                    f"{'DESC' if query.descending else 'ASC'})."
                )
            key = self._ordering_key(query.order_by)
            matches = [doc for doc in matches if query.order_by in doc.data]
            matches.sort(key=key, reverse=query.descending)
            if query.start_after is not None:
                cursor_key = key(query.start_after)
                if query.descending:
                    matches = [doc for doc in matches if key(doc) < cursor_key]
                else:
                    matches = [doc for doc in matches if key(doc) > cursor_key]
        else:
            matches.sort(key=lambda doc: doc.id)
            if query.start_after is not None:
                matches = [doc for doc in matches if doc.id > query.start_after.id]

        if query.limit is not None:
            matches = matches[: query.limit]

        logger.trace(f"memory query {query.field}=={query.value!r} order_by={query.order_by} -> {len(matches)}")
        return matches

    @staticmethod
    def _ordering_key(field_name: str):
        def key(doc: StoredDocument) -> tuple[datetime, str]:
            return normalize_timestamp(doc.data.get(field_name)) or _EPOCH, doc.id

        return key
