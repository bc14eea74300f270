"""Core data models for journal entries.

``Entry`` is the normalized, read-only view of one stored record. All of
the record's date shapes are collapsed into ``Entry.date`` once, here, so
rendering and grouping code never re-derive it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from marginalia.core.exceptions import DataProcessingError
from marginalia.core.utils.timestamps import normalize_timestamp
from marginalia.store.base import StoredDocument

TITLE_SIZE_RANGE = (20.0, 56.0)
LINE_HEIGHT_RANGE = (1.2, 2.6)


class EntryType(Enum):
    """What kind of post an entry is."""

    STORY = "story"
    IMAGE = "image"
    VIDEO = "video"

    @classmethod
    def parse(cls, value: Any) -> EntryType:
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.STORY


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_number(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (OverflowError, TypeError, ValueError):
        return None


def _clamp(value: float | None, bounds: tuple[float, float]) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    low, high = bounds
    return min(high, max(low, value))


def _tags(value: Any) -> list[str]:
    if isinstance(value, str):
        value = value.split(",")
    seen: dict[str, None] = {}
    for tag in value or []:
        tag = str(tag).strip()
        if tag:
            seen.setdefault(tag)
    return list(seen)


@dataclass
class Entry:
    """One journal record.

    Attributes:
        id: Store document id.
        title: Entry title (may be empty).
        raw_content: Body text in the journal markup dialect.
        date: Display date, the record's ``date``, else its ``createdAt``.
        created_at: Server creation time, used for ordering.
        tags: Unique tags in their original order.
        media: Cover media URL for image/video entries.
        embed_url: Standalone video link (YouTube/Vimeo) shown under the body.
        image_urls: Gallery image URLs.
    """

    id: str
    title: str
    raw_content: str
    date: datetime
    owner_id: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    tags: list[str] = field(default_factory=list)
    mood: str | None = None
    location: str | None = None
    type: EntryType = EntryType.STORY
    media: str | None = None
    embed_url: str | None = None
    image_urls: list[str] = field(default_factory=list)
    title_size: float | None = None
    line_height: float | None = None
    is_published: bool = False

    @classmethod
    def from_record(cls, doc_id: str, data: dict[str, Any]) -> Entry:
        """Normalize a raw stored record.

        Raises:
            DataProcessingError: if the record has neither ``date`` nor ``createdAt``.
        """
        created_at = normalize_timestamp(data.get("createdAt"))
        display_date = normalize_timestamp(data.get("date")) or created_at
        if display_date is None:
            raise DataProcessingError(f"Entry {doc_id!r} has no usable date or createdAt")

        content = data.get("rawContent", data.get("content"))
        embed = data.get("embedUrl", data.get("youtubeEmbedUrl"))

        return cls(
            id=doc_id,
            title=str(data.get("title") or ""),
            raw_content=str(content or ""),
            date=display_date,
            owner_id=str(data.get("ownerId") or ""),
            created_at=created_at,
            updated_at=normalize_timestamp(data.get("updatedAt")),
            tags=_tags(data.get("tags")),
            mood=_optional_str(data.get("mood")),
            location=_optional_str(data.get("location")),
            type=EntryType.parse(data.get("type", "story")),
            media=_optional_str(data.get("media")),
            embed_url=_optional_str(embed),
            image_urls=[str(u) for u in data.get("imageUrls") or [] if u],
            title_size=_optional_number(data.get("titleSize")),
            line_height=_optional_number(data.get("lineHeight")),
            is_published=data.get("isPublished") is True,
        )

    @classmethod
    def from_document(cls, doc: StoredDocument) -> Entry:
        return cls.from_record(doc.id, doc.data)

    @property
    def cover_image(self) -> str | None:
        """The entry's media, falling back to its first gallery image."""
        return self.media or (self.image_urls[0] if self.image_urls else None)

    @property
    def video_url(self) -> str | None:
        if self.embed_url:
            return self.embed_url
        return self.media if self.type is EntryType.VIDEO else None

    @property
    def display_title_size(self) -> float | None:
        """Title size in px, clamped to 20-56. None when unset or not finite."""
        return _clamp(self.title_size, TITLE_SIZE_RANGE)

    @property
    def display_line_height(self) -> float | None:
        """Body line height, clamped to 1.2-2.6. None when unset or not finite."""
        return _clamp(self.line_height, LINE_HEIGHT_RANGE)

    def __repr__(self) -> str:
        return f"Entry(id='{self.id}', title='{self.title}', date={self.date.date().isoformat()})"
