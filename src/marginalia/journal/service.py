"""Journal service: the entry point the presentation layer talks to.

Wraps a document store with the journal's access rules: owner-only
reads need a signed-in owner, public reads only ever see published
entries, and a missing entry is ``None`` rather than an exception.
"""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from marginalia.core.exceptions import AuthenticationError, ConfigurationError
from marginalia.media.upload import ImageUploader, UploadSettings, validate_image
from marginalia.store.base import DocumentStore, EntryQuery

from .models import Entry
from .pagination import ORDER_FIELD, Page, PaginationState, load_more
from .scope import VisibilityScope


class JournalService:
    """Read access to one journal collection.

    Args:
        store: Backing document store. ``None`` means the backend was never
            configured; every call then raises ``ConfigurationError``.
        owner_id: The signed-in owner's uid, if any.
        uploader: Object-storage collaborator used by :meth:`upload_image`.
        upload_settings: Limits checked before handing a file to ``uploader``.
        page_size: Default page size for new sessions.
    """

    def __init__(
        self,
        store: DocumentStore | None,
        *,
        owner_id: str | None = None,
        uploader: ImageUploader | None = None,
        upload_settings: UploadSettings | None = None,
        page_size: int = 5,
    ):
        self._store = store
        self.owner_id = owner_id
        self.uploader = uploader
        self.upload_settings = upload_settings or UploadSettings()
        self.page_size = page_size

    @property
    def store(self) -> DocumentStore:
        return self._require_store()

    def _require_store(self) -> DocumentStore:
        if self._store is None:
            raise ConfigurationError("Document store is not initialized. Check the store configuration.")
        return self._store

    def _require_owner(self) -> str:
        self._require_store()
        if not self.owner_id:
            raise AuthenticationError("You must be signed in to access journal data.")
        return self.owner_id

    def owner_session(self, page_size: int | None = None) -> PaginationState:
        """New paging session over the signed-in owner's entries."""
        scope = VisibilityScope.owner(self._require_owner())
        return PaginationState(scope=scope, page_size=page_size or self.page_size)

    def public_session(self, page_size: int | None = None) -> PaginationState:
        """New paging session over published entries."""
        self._require_store()
        return PaginationState(scope=VisibilityScope.published(), page_size=page_size or self.page_size)

    async def load_more(self, state: PaginationState) -> Page:
        return await load_more(self.store, state)

    async def get_entry(self, entry_id: str) -> Entry | None:
        """Owner lookup. None when the entry is missing or belongs to someone else."""
        scope = VisibilityScope.owner(self._require_owner())
        doc = await self.store.get(entry_id)
        if doc is None or not scope.permits(doc.data):
            return None
        return Entry.from_document(doc)

    async def get_public_entry(self, entry_id: str) -> Entry | None:
        """Public lookup. None unless the entry exists and is published."""
        doc = await self.store.get(entry_id)
        if doc is None or not VisibilityScope.published().permits(doc.data):
            return None
        return Entry.from_document(doc)

    async def get_all_entries(self) -> list[Entry]:
        """Every entry the owner has, newest first, in a single ordered query."""
        scope = VisibilityScope.owner(self._require_owner())
        docs = await self.store.query(EntryQuery(field=scope.field, value=scope.value, order_by=ORDER_FIELD))
        return [Entry.from_document(doc) for doc in docs]

    async def upload_image(
        self,
        data: bytes,
        content_type: str,
        *,
        folder: str | None = None,
        on_progress: Callable[[int], None] | None = None,
    ) -> str:
        """Validate an image and hand it to the upload collaborator.

        Returns:
            The public URL of the uploaded image.
        """
        self._require_owner()
        if self.uploader is None:
            raise ConfigurationError("No image uploader is configured.")
        validate_image(content_type, len(data), self.upload_settings)
        url = await self.uploader.upload(
            data,
            content_type,
            folder=folder or self.upload_settings.folder,
            on_progress=on_progress,
        )
        logger.info(f"Uploaded {len(data)} bytes to {url}")
        return url
