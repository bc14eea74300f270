"""Shared test fixtures for marginalia."""

import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest

from marginalia.store import MemoryDocumentStore

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _make_record(n: int, **overrides) -> dict:
    """A stored journal record created ``n`` hours after BASE_TIME."""
    record = {
        "title": f"Entry {n}",
        "content": f"Body {n}",
        "createdAt": BASE_TIME + timedelta(hours=n),
        "tags": ["daily"],
        "type": "story",
        "isPublished": True,
        "ownerId": "owner-1",
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_record():
    """Factory for stored records: ``make_record(n, **overrides)``."""
    return _make_record


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {"data_dir": os.path.join(tmp_dir, "data")},
        "store": {"backend": "memory", "collection": "testEntries"},
        "pagination": {"page_size": 3},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def twelve_entry_store():
    """Twelve published entries with ids e00..e11, e11 newest."""
    return MemoryDocumentStore({f"e{n:02d}": _make_record(n) for n in range(12)})
