"""Filtering and counts for an owner's full list of entries."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .models import Entry


@dataclass(frozen=True)
class EntryStats:
    published: int = 0
    drafts: int = 0
    with_media: int = 0

    @property
    def total(self) -> int:
        return self.published + self.drafts


def filter_entries(
    entries: Iterable[Entry],
    *,
    year: int | str | None = None,
    month: str | None = None,
    title: str | None = None,
    mood: str | None = None,
) -> list[Entry]:
    """Narrow entries down by display date and text, keeping input order.

    Args:
        year: Display year; digit strings are accepted.
        month: English month name as produced by ``group_by_month``.
        title: Case-insensitive substring of the title.
        mood: Case-insensitive substring of the mood. Entries without a
            mood never match.

    Empty or ``None`` criteria are ignored.
    """
    result = list(entries)
    if year not in (None, ""):
        wanted = int(year)
        result = [e for e in result if e.date.year == wanted]
    if month:
        result = [e for e in result if e.date.strftime("%B") == month]
    if title:
        needle = title.lower()
        result = [e for e in result if needle in e.title.lower()]
    if mood:
        needle = mood.lower()
        result = [e for e in result if e.mood and needle in e.mood.lower()]
    return result


def entry_stats(entries: Iterable[Entry]) -> EntryStats:
    published = drafts = with_media = 0
    for entry in entries:
        if entry.is_published:
            published += 1
        else:
            drafts += 1
        if entry.media:
            with_media += 1
    return EntryStats(published=published, drafts=drafts, with_media=with_media)
