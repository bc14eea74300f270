"""Media URL classification and resolution.

Decides how a media reference found in an entry should be shown: as an
image, a native video, or an iframe for a known video platform. Platform
embeds use privacy-hardened player URLs with a fixed parameter set.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

DEFAULT_UPLOAD_PREFIX = "/uploads/"
FALLBACK_IMAGE = "/images/posts/fallback.svg"

_YOUTUBE_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([^&\n?#]+)"),
    re.compile(r"youtube\.com/embed/([^&\n?#]+)"),
)
_VIMEO_PATTERNS = (
    re.compile(r"vimeo\.com/(\d+)"),
    re.compile(r"player\.vimeo\.com/video/(\d+)"),
)

VIDEO_EXTENSIONS = frozenset({"mp4", "webm", "ogg", "mov"})
IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp", "svg"})

YOUTUBE_EMBED_PARAMS = (
    "rel=0&modestbranding=1&autoplay=0&controls=1&iv_load_policy=3"
    "&fs=0&playsinline=1&disablekb=1&cc_load_policy=0"
)
VIMEO_EMBED_PARAMS = "title=0&byline=0&portrait=0&badge=0&controls=1&autopause=1&dnt=1"


class MediaKind(Enum):
    IMAGE = "image"
    VIDEO = "video"
    YOUTUBE = "youtube"
    VIMEO = "vimeo"
    EMBED = "embed"
    UNKNOWN = "unknown"

    @property
    def is_platform(self) -> bool:
        return self in (MediaKind.YOUTUBE, MediaKind.VIMEO)


def _first_match(patterns: tuple[re.Pattern, ...], url: str | None) -> str | None:
    if not url:
        return None
    for pattern in patterns:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def youtube_id(url: str | None) -> str | None:
    """Extract a YouTube video id from watch, short or embed links."""
    return _first_match(_YOUTUBE_PATTERNS, url)


def vimeo_id(url: str | None) -> str | None:
    """Extract a numeric Vimeo video id."""
    return _first_match(_VIMEO_PATTERNS, url)


def _extension(url: str) -> str:
    path = re.split(r"[?#]", url, maxsplit=1)[0]
    return path.rsplit(".", 1)[-1].lower() if "." in path else ""


def classify(url: str | None) -> MediaKind:
    """Classify a media URL. A platform video id wins over the file extension."""
    if not url:
        return MediaKind.UNKNOWN
    if youtube_id(url):
        return MediaKind.YOUTUBE
    if vimeo_id(url):
        return MediaKind.VIMEO

    ext = _extension(url)
    if ext in VIDEO_EXTENSIONS:
        return MediaKind.VIDEO
    if ext in IMAGE_EXTENSIONS:
        return MediaKind.IMAGE
    if url.startswith(("http://", "https://")):
        return MediaKind.EMBED
    return MediaKind.UNKNOWN


def embed_url(url: str | None) -> str | None:
    """Privacy-hardened iframe source for YouTube or Vimeo, else None."""
    video_id = youtube_id(url)
    if video_id:
        return f"https://www.youtube-nocookie.com/embed/{video_id}?{YOUTUBE_EMBED_PARAMS}"
    video_id = vimeo_id(url)
    if video_id:
        return f"https://player.vimeo.com/video/{video_id}?{VIMEO_EMBED_PARAMS}"
    return None


def is_bare_filename(url: str) -> bool:
    return not (url.startswith(("http", "/")) or "youtu" in url or "vimeo" in url)


def resolve_path(url: str, upload_prefix: str = DEFAULT_UPLOAD_PREFIX) -> str:
    """Rewrite a bare filename onto the upload storage prefix; leave anything else alone."""
    if url and is_bare_filename(url):
        return f"{upload_prefix.rstrip('/')}/{url}"
    return url


@dataclass
class ResolvedMedia:
    """A media reference ready for display.

    ``src`` starts as the resolved path. When the asset fails to load,
    :meth:`on_load_error` swaps in the fallback image exactly once.
    """

    src: str
    kind: MediaKind
    embed_src: str | None = None
    fallback: str = FALLBACK_IMAGE
    _fell_back: bool = field(default=False, repr=False)

    @property
    def fell_back(self) -> bool:
        return self._fell_back

    def on_load_error(self) -> bool:
        """Switch to the fallback asset. Returns False if already switched."""
        if self._fell_back or self.src == self.fallback:
            return False
        logger.warning(f"Media failed to load: {self.src}; using {self.fallback}")
        self.src = self.fallback
        self.kind = MediaKind.IMAGE
        self.embed_src = None
        self._fell_back = True
        return True


class MediaResolver:
    """Resolves media references under one storage convention."""

    def __init__(self, upload_prefix: str = DEFAULT_UPLOAD_PREFIX, fallback_image: str = FALLBACK_IMAGE):
        self.upload_prefix = upload_prefix
        self.fallback_image = fallback_image

    @classmethod
    def from_config(cls, config) -> MediaResolver:
        return cls(
            upload_prefix=config.get("media.upload_prefix", DEFAULT_UPLOAD_PREFIX),
            fallback_image=config.get("media.fallback_image", FALLBACK_IMAGE),
        )

    def resolve(self, src: str | None) -> ResolvedMedia:
        if not src:
            return ResolvedMedia(
                src=self.fallback_image, kind=MediaKind.IMAGE, fallback=self.fallback_image, _fell_back=True
            )
        path = resolve_path(src.strip(), self.upload_prefix)
        return ResolvedMedia(src=path, kind=classify(path), embed_src=embed_url(path), fallback=self.fallback_image)
