"""Shared infrastructure: configuration, exceptions, logging, auth, CLI."""

from .config import Config, get_config, reset_config
from .exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    DataProcessingError,
    MarginaliaError,
    MissingIndexError,
    UploadError,
)

__all__ = [
    "APIError",
    "AuthenticationError",
    "Config",
    "ConfigurationError",
    "DataProcessingError",
    "MarginaliaError",
    "MissingIndexError",
    "UploadError",
    "get_config",
    "reset_config",
]
