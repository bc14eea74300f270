"""Google Service Account authentication.

Handles service-account-based auth for Cloud Firestore.
The credential path is injected, never hardcoded.

Requires ``marginalia[firestore]``.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

DATASTORE_SCOPE = "https://www.googleapis.com/auth/datastore"


class ServiceAccountAuth:
    """Authenticate via a Google service-account JSON key.

    Credentials are loaded lazily on first access and cached.

    Args:
        key_path: Path to the service-account JSON key file.
        scopes: OAuth scopes.  Defaults to the Datastore/Firestore scope.
    """

    def __init__(
        self,
        key_path: str | Path,
        scopes: list[str] | None = None,
    ):
        self.key_path = Path(key_path).expanduser()
        self.scopes = scopes or [DATASTORE_SCOPE]
        self._credentials = None

    @property
    def credentials(self):
        """Lazy-load and cache service-account credentials."""
        if self._credentials is None:
            try:
                from google.oauth2 import service_account
            except ImportError:
                raise ImportError("Install with: pip install marginalia[firestore]")

            if not self.key_path.exists():
                raise FileNotFoundError(
                    f"Service account key not found: {self.key_path}\n"
                    "Download one from Firebase Console → Project settings → Service accounts."
                )

            self._credentials = service_account.Credentials.from_service_account_file(
                str(self.key_path), scopes=self.scopes
            )
            logger.debug(f"Loaded service account from {self.key_path}")

        return self._credentials

    @property
    def project_id(self) -> str | None:
        """Project id embedded in the key file, if any."""
        return getattr(self.credentials, "project_id", None)
