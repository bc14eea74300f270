"""Image upload collaborator interface.

Uploading and compressing media lives in an external object store; the
journal only validates the file and keeps the returned URL. Implement
:class:`ImageUploader` for the storage service in use.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from marginalia.core.exceptions import UploadError

MAX_FILE_SIZE = 5 * 1024 * 1024
ALLOWED_TYPES = ("image/jpeg", "image/png", "image/webp")


@dataclass
class UploadSettings:
    """Limits applied before an image is handed to the uploader."""

    folder: str = "journal-images"
    max_bytes: int = MAX_FILE_SIZE
    allowed_types: list[str] = field(default_factory=lambda: list(ALLOWED_TYPES))

    @classmethod
    def from_config(cls, config) -> UploadSettings:
        types = config.get("upload.allowed_types", ALLOWED_TYPES)
        if isinstance(types, str):
            types = [t.strip() for t in types.split(",") if t.strip()]
        return cls(
            folder=config.get("upload.folder", "journal-images"),
            max_bytes=int(config.get("upload.max_bytes", MAX_FILE_SIZE)),
            allowed_types=list(types),
        )


@runtime_checkable
class ImageUploader(Protocol):
    """Object-storage upload contract."""

    async def upload(
        self,
        data: bytes,
        content_type: str,
        *,
        folder: str,
        on_progress: Callable[[int], None] | None = None,
    ) -> str:
        """Upload ``data`` into ``folder`` and return its public URL.

        ``on_progress`` receives integers from 0 to 100.
        """
        ...


def validate_image(content_type: str, size: int, settings: UploadSettings | None = None) -> None:
    """Reject files the object store would refuse.

    Raises:
        UploadError: on an empty file, a disallowed type or an oversize file.
    """
    settings = settings or UploadSettings()
    if size <= 0:
        raise UploadError("No file selected.")
    if content_type not in settings.allowed_types:
        raise UploadError("Only JPG, PNG, and WEBP images are allowed.")
    if size > settings.max_bytes:
        raise UploadError(f"File is too large. Max {settings.max_bytes // (1024 * 1024)}MB allowed.")


def progress_percent(loaded: int, total: int) -> int:
    """Round a byte count into a 0–100 progress value."""
    if total <= 0:
        return 0
    return max(0, min(100, round(loaded / total * 100)))
