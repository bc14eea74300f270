"""Google Cloud Firestore document store.

Thin async wrapper around ``google.cloud.firestore.AsyncClient`` for the
journal's ``journalEntries`` collection.

Requires ``marginalia[firestore]``.
"""

from __future__ import annotations

from loguru import logger

from marginalia.core.exceptions import MissingIndexError

from .base import DocumentStore, EntryQuery, StoredDocument


def _require_firestore():
    """Lazy import with clear error message."""
    try:
        from google.api_core.exceptions import FailedPrecondition
        from google.cloud import firestore
        from google.cloud.firestore_v1.base_query import FieldFilter

        return firestore, FieldFilter, FailedPrecondition
    except ImportError:
        raise ImportError("Install with: pip install marginalia[firestore]") from None


def is_missing_index_error(exc: BaseException) -> bool:
    """True for a failed-precondition error that complains about an index."""
    _, _, failed_precondition = _require_firestore()
    return isinstance(exc, failed_precondition) and "index" in str(exc).lower()


class FirestoreDocumentStore(DocumentStore):
    """Firestore-backed document store.

    Args:
        project_id: Google Cloud project id. Empty uses the credentials' project.
        collection: Collection holding journal entries.
        auth: A :class:`~marginalia.core.auth.ServiceAccountAuth` instance.
            If ``None``, uses Application Default Credentials.
        client: Pre-built ``AsyncClient`` (mainly for tests).
    """

    def __init__(
        self,
        project_id: str = "",
        collection: str = "journalEntries",
        *,
        auth=None,
        client=None,
        **config,
    ):
        super().__init__(**config)
        self.project_id = project_id
        self.collection = collection
        self.auth = auth
        self._client = client

    @property
    def client(self):
        if self._client is None:
            firestore, _, _ = _require_firestore()
            kwargs = {}
            if self.auth is not None:
                kwargs["credentials"] = self.auth.credentials
            project = self.project_id or (self.auth.project_id if self.auth is not None else None)
            if project:
                kwargs["project"] = project
            self._client = firestore.AsyncClient(**kwargs)
        return self._client

    async def get(self, doc_id: str) -> StoredDocument | None:
        snap = await self.client.collection(self.collection).document(doc_id).get()
        if not snap.exists:
            return None
        return StoredDocument(id=snap.id, data=snap.to_dict() or {}, handle=snap)

    async def query(self, query: EntryQuery) -> list[StoredDocument]:
        firestore, field_filter, _ = _require_firestore()

        q = self.client.collection(self.collection).where(filter=field_filter(query.field, "==", query.value))
        if query.order_by:
            direction = firestore.Query.DESCENDING if query.descending else firestore.Query.ASCENDING
            q = q.order_by(query.order_by, direction=direction)
        if query.limit is not None:
            q = q.limit(query.limit)
        if query.start_after is not None:
            q = q.start_after(query.start_after.handle)

        try:
            snaps = await q.get()
        except Exception as e:
            if query.order_by and is_missing_index_error(e):
                raise MissingIndexError(str(e)) from e
            raise

        logger.debug(f"firestore {self.collection}: {query.field}=={query.value!r} -> {len(snaps)} docs")
        return [StoredDocument(id=snap.id, data=snap.to_dict() or {}, handle=snap) for snap in snaps]
