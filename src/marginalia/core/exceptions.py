"""
Marginalia exception hierarchy.

All marginalia exceptions inherit from MarginaliaError, making it easy for
consumers to catch library-level errors while still distinguishing specific
failure modes. A missing entry is never an exception: lookups return None.
"""


class MarginaliaError(Exception):
    """Base exception class for all marginalia errors."""


class ConfigurationError(MarginaliaError):
    """Raised when the backend is not configured (missing store, bad settings)."""


class AuthenticationError(MarginaliaError):
    """Raised when an operation requires a signed-in owner."""


class APIError(MarginaliaError):
    """Raised for document store communication errors."""


class MissingIndexError(APIError):
    """Raised when an ordered query needs a composite index the store lacks."""


class DataProcessingError(MarginaliaError):
    """Raised when a stored record cannot be normalized into an Entry."""


class UploadError(MarginaliaError):
    """Raised for image upload failures (size, type, transport)."""
