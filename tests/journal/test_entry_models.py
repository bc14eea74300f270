"""Tests for marginalia.journal.models."""

from datetime import datetime, timezone

import pytest

from marginalia.core.exceptions import DataProcessingError
from marginalia.journal import Entry, EntryType
from marginalia.store import StoredDocument

CREATED = datetime(2024, 5, 2, 8, 30, tzinfo=timezone.utc)


class TestEntryFromRecord:
    def test_date_prefers_explicit_date(self):
        entry = Entry.from_record("a", {"createdAt": CREATED, "date": "2023-12-25"})
        assert entry.date == datetime(2023, 12, 25, tzinfo=timezone.utc)
        assert entry.created_at == CREATED

    def test_date_falls_back_to_created_at(self):
        entry = Entry.from_record("a", {"createdAt": CREATED})
        assert entry.date == CREATED

    def test_unparseable_date_falls_back(self):
        entry = Entry.from_record("a", {"createdAt": CREATED, "date": "someday"})
        assert entry.date == CREATED

    def test_no_dates_raises(self):
        with pytest.raises(DataProcessingError, match="no usable date"):
            Entry.from_record("a", {"title": "x"})

    def test_firestore_export_shape(self):
        entry = Entry.from_record("a", {"createdAt": {"_seconds": 1714638600, "_nanoseconds": 0}})
        assert entry.date == CREATED

    def test_fields_mapped(self):
        entry = Entry.from_record(
            "a",
            {
                "title": "Tide",
                "content": "[u]hi[/u]",
                "createdAt": CREATED,
                "updatedAt": CREATED,
                "tags": ["sea", " sea ", "", "walk"],
                "mood": " calm ",
                "location": "",
                "type": "IMAGE",
                "media": "beach.jpg",
                "youtubeEmbedUrl": "https://youtu.be/x",
                "imageUrls": ["a.jpg", None, "b.jpg"],
                "titleSize": "32",
                "lineHeight": 1.6,
                "isPublished": True,
                "ownerId": "u1",
            },
        )
        assert entry.title == "Tide"
        assert entry.raw_content == "[u]hi[/u]"
        assert entry.tags == ["sea", "walk"]
        assert entry.mood == "calm"
        assert entry.location is None
        assert entry.type is EntryType.IMAGE
        assert entry.embed_url == "https://youtu.be/x"
        assert entry.image_urls == ["a.jpg", "b.jpg"]
        assert entry.title_size == 32.0
        assert entry.line_height == 1.6
        assert entry.is_published is True
        assert entry.owner_id == "u1"
        assert entry.updated_at == CREATED

    def test_defaults(self):
        entry = Entry.from_record("a", {"createdAt": CREATED})
        assert entry.title == ""
        assert entry.raw_content == ""
        assert entry.tags == []
        assert entry.type is EntryType.STORY
        assert entry.is_published is False

    def test_raw_content_key_preferred(self):
        entry = Entry.from_record("a", {"createdAt": CREATED, "rawContent": "new", "content": "old"})
        assert entry.raw_content == "new"

    def test_unknown_type_is_story(self):
        assert Entry.from_record("a", {"createdAt": CREATED, "type": "poem"}).type is EntryType.STORY

    def test_from_document(self):
        entry = Entry.from_document(StoredDocument("doc-1", {"createdAt": CREATED, "title": "T"}))
        assert entry.id == "doc-1"
        assert "doc-1" in repr(entry)


class TestDerivedMedia:
    def test_cover_image_prefers_media(self):
        entry = Entry.from_record("a", {"createdAt": CREATED, "media": "m.jpg", "imageUrls": ["g.jpg"]})
        assert entry.cover_image == "m.jpg"

    def test_cover_image_from_gallery(self):
        entry = Entry.from_record("a", {"createdAt": CREATED, "imageUrls": ["g.jpg"]})
        assert entry.cover_image == "g.jpg"

    def test_video_url(self):
        video = Entry.from_record("a", {"createdAt": CREATED, "type": "video", "media": "clip.mp4"})
        assert video.video_url == "clip.mp4"
        story = Entry.from_record("a", {"createdAt": CREATED, "media": "clip.mp4"})
        assert story.video_url is None
        embedded = Entry.from_record("a", {"createdAt": CREATED, "embedUrl": "https://vimeo.com/1"})
        assert embedded.video_url == "https://vimeo.com/1"


class TestDisplaySizing:
    @pytest.mark.parametrize(
        "stored, expected",
        [(32, 32.0), ("10", 20.0), (80, 56.0), (None, None), ("big", None), ("inf", None), ("nan", None)],
    )
    def test_title_size_clamped(self, stored, expected):
        entry = Entry.from_record("a", {"createdAt": CREATED, "titleSize": stored})
        assert entry.display_title_size == expected

    @pytest.mark.parametrize(
        "stored, expected",
        [(1.6, 1.6), (0.5, 1.2), ("3", 2.6), (None, None), ("-inf", None)],
    )
    def test_line_height_clamped(self, stored, expected):
        entry = Entry.from_record("a", {"createdAt": CREATED, "lineHeight": stored})
        assert entry.display_line_height == expected

    def test_raw_values_kept(self):
        entry = Entry.from_record("a", {"createdAt": CREATED, "titleSize": 80, "lineHeight": 10**400})
        assert entry.title_size == 80.0
        assert entry.line_height is None
