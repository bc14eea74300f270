"""Media references: URL classification, embed URLs and upload validation."""

from .resolver import (
    FALLBACK_IMAGE,
    MediaKind,
    MediaResolver,
    ResolvedMedia,
    classify,
    embed_url,
    resolve_path,
    vimeo_id,
    youtube_id,
)
from .upload import ImageUploader, UploadSettings, progress_percent, validate_image

__all__ = [
    "FALLBACK_IMAGE",
    "ImageUploader",
    "MediaKind",
    "MediaResolver",
    "ResolvedMedia",
    "UploadSettings",
    "classify",
    "embed_url",
    "progress_percent",
    "resolve_path",
    "validate_image",
    "vimeo_id",
    "youtube_id",
]
