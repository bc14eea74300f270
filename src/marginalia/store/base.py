"""
Abstract base class for document store backends.

The journal only needs two primitives from its backing store: a point
lookup by id and a filtered query with optional descending ordering,
a result limit and a resume-after cursor. Backends signal a missing
composite index with ``MissingIndexError``; every other failure
propagates unchanged.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class StoredDocument:
    """One record as returned by the store.

    ``handle`` carries the backend's native object (e.g. a Firestore
    ``DocumentSnapshot``) so it can be fed back as a query cursor.
    """

    id: str
    data: dict[str, Any] = field(default_factory=dict)
    handle: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class EntryQuery:
    """Filtered query shape: ``field == value``, optional ordering, limit and cursor."""

    field: str
    value: Any
    order_by: str | None = None
    descending: bool = True
    limit: int | None = None
    start_after: StoredDocument | None = None

    def unordered(self) -> "EntryQuery":
        """Same filter, limit and cursor with the sort clause dropped."""
        return EntryQuery(
            field=self.field,
            value=self.value,
            order_by=None,
            limit=self.limit,
            start_after=self.start_after,
        )


class DocumentStore(ABC):
    """Abstract base class for document store backends."""

    def __init__(self, **config):
        self.config = config

    @abstractmethod
    async def get(self, doc_id: str) -> StoredDocument | None:
        """Fetch one document by id. Returns None when it doesn't exist."""

    @abstractmethod
    async def query(self, query: EntryQuery) -> list[StoredDocument]:
        """Run a filtered query. Raises MissingIndexError for unindexed orderings."""
