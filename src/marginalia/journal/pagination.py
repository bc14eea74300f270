"""Cursor-based page retrieval of journal entries.

Pages are requested newest-first by ``createdAt``. If the store reports
that the ordered query needs a composite index it doesn't have, the same
page is re-requested without the sort clause and the session stays in
that degraded mode from then on. The degraded flag lives on the
caller-held ``PaginationState`` so independent sessions (an owner view
and a public view, say) never share it.

Usage::

    state = PaginationState(scope=VisibilityScope.published(), page_size=5)
    while state.has_more:
        await load_more(store, state)
    render(state.entries)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from marginalia.core.exceptions import MissingIndexError
from marginalia.store.base import DocumentStore, EntryQuery, StoredDocument

from .models import Entry
from .scope import VisibilityScope

ORDER_FIELD = "createdAt"


@dataclass(frozen=True)
class PageCursor:
    """Opaque resume point: the last document of the previous page."""

    last: StoredDocument


@dataclass(frozen=True)
class Page:
    entries: list[Entry]
    next_cursor: PageCursor | None


@dataclass
class PaginationState:
    """Caller-owned state for one paging session.

    Attributes:
        scope: Visibility predicate applied to every page.
        page_size: Entries requested per page.
        entries: Everything loaded so far, append-only.
        cursor: Resume point for the next page; None before the first fetch.
        has_more: True until a page comes back shorter than ``page_size``.
        index_available: Cleared for good once the unordered fallback fires.
    """

    scope: VisibilityScope
    page_size: int = 5
    entries: list[Entry] = field(default_factory=list)
    cursor: PageCursor | None = None
    has_more: bool = True
    index_available: bool = True
    pages_loaded: int = 0

    def apply(self, page: Page) -> None:
        """Accumulate a fetched page.

        A page of exactly ``page_size`` entries reports more even when it
        happens to be the last one; the next fetch then comes back empty.
        """
        self.entries.extend(page.entries)
        if page.next_cursor is not None:
            self.cursor = page.next_cursor
        self.has_more = len(page.entries) == self.page_size
        self.pages_loaded += 1

    def reset(self) -> None:
        """Start over from the first page. The index flag is kept."""
        self.entries = []
        self.cursor = None
        self.has_more = True
        self.pages_loaded = 0


def _build_query(page_size: int, cursor: PageCursor | None, scope: VisibilityScope) -> EntryQuery:
    return EntryQuery(
        field=scope.field,
        value=scope.value,
        order_by=ORDER_FIELD,
        descending=True,
        limit=page_size,
        start_after=cursor.last if cursor is not None else None,
    )


async def fetch_page(
    store: DocumentStore,
    page_size: int,
    cursor: PageCursor | None,
    scope: VisibilityScope,
    *,
    state: PaginationState,
) -> Page:
    """Fetch one page of entries visible under ``scope``.

    ``state`` is consulted (and possibly updated) only for its
    ``index_available`` flag; accumulation is left to the caller.

    Raises:
        ValueError: if ``page_size`` is not positive.
        MarginaliaError / backend errors: anything other than a missing index.
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")

    query = _build_query(page_size, cursor, scope)

    if state.index_available:
        try:
            docs = await store.query(query)
        except MissingIndexError as e:
            logger.warning(
                f"Missing composite index for {scope.name} entries ordered by {ORDER_FIELD}; "
                f"falling back to unordered pages for this session ({e})"
            )
            state.index_available = False
            docs = await store.query(query.unordered())
    else:
        docs = await store.query(query.unordered())

    entries = [Entry.from_document(doc) for doc in docs]
    next_cursor = PageCursor(last=docs[-1]) if docs else None
    logger.debug(
        f"Fetched {len(entries)} {scope.name} entries (page_size={page_size}, ordered={state.index_available})"
    )
    return Page(entries=entries, next_cursor=next_cursor)


async def load_more(store: DocumentStore, state: PaginationState) -> Page:
    """Fetch the page after ``state.cursor`` and accumulate it into ``state``."""
    page = await fetch_page(store, state.page_size, state.cursor, state.scope, state=state)
    state.apply(page)
    return page
