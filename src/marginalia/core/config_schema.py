"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``.  Call
``Config.validated()`` to obtain a typed, validated ``MarginaliaConfig``
instance.  Existing dict-based access continues to work unchanged.

Values coming from environment variables arrive as strings; pydantic's
lax mode coerces ``"10"`` and ``"false"`` into the declared types.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _split_csv(v: Any) -> Any:
    if isinstance(v, str):
        return [part.strip() for part in v.split(",") if part.strip()]
    return v


class PathsConfig(BaseModel):
    """File-system paths used by the application."""

    data_dir: Path
    log_dir: Path | None = None

    @field_validator("data_dir", "log_dir", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v


class StoreConfig(BaseModel):
    """Document store backend selection."""

    backend: Literal["memory", "firestore"] = "memory"
    project_id: str = ""
    collection: str = Field(default="journalEntries", min_length=1)
    credentials_path: str = ""
    seed_file: str = ""


class PaginationConfig(BaseModel):
    page_size: int = Field(default=5, gt=0)


class MediaConfig(BaseModel):
    """Media path conventions."""

    upload_prefix: str = "/uploads/"
    fallback_image: str = "/images/posts/fallback.svg"

    @field_validator("upload_prefix")
    @classmethod
    def _trailing_slash(cls, v: str) -> str:
        return v if v.endswith("/") else f"{v}/"


class MarkupConfig(BaseModel):
    """Inline markup rendering options."""

    allowed_fonts: list[str] = ["EB Garamond", "Newsreader", "Inter"]
    strict_colors: bool = True

    @field_validator("allowed_fonts", mode="before")
    @classmethod
    def _split_names(cls, v: Any) -> Any:
        return _split_csv(v)


class UploadConfig(BaseModel):
    """Image upload validation limits."""

    folder: str = "journal-images"
    max_bytes: int = Field(default=5 * 1024 * 1024, gt=0)
    allowed_types: list[str] = ["image/jpeg", "image/png", "image/webp"]

    @field_validator("allowed_types", mode="before")
    @classmethod
    def _split_types(cls, v: Any) -> Any:
        return _split_csv(v)


class LoggingConfig(BaseModel):
    level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class MarginaliaConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so consumers can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = PathsConfig(data_dir=Path("~/.marginalia"))
    store: StoreConfig = StoreConfig()
    pagination: PaginationConfig = PaginationConfig()
    media: MediaConfig = MediaConfig()
    markup: MarkupConfig = MarkupConfig()
    upload: UploadConfig = UploadConfig()
    logging: LoggingConfig = LoggingConfig()
