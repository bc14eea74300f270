"""Journal entries: normalized models, visibility scopes and paginated retrieval."""

from .archive import group_by_month
from .dashboard import EntryStats, entry_stats, filter_entries
from .models import Entry, EntryType
from .pagination import Page, PageCursor, PaginationState, fetch_page, load_more
from .scope import VisibilityScope
from .service import JournalService

__all__ = [
    "Entry",
    "EntryStats",
    "EntryType",
    "JournalService",
    "Page",
    "PageCursor",
    "PaginationState",
    "VisibilityScope",
    "entry_stats",
    "fetch_page",
    "filter_entries",
    "group_by_month",
    "load_more",
]
