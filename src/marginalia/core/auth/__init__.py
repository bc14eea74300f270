"""Google authentication for the Firestore backend.

Requires ``marginalia[firestore]``. Credentials load lazily and fail
with a helpful message if the Google libraries aren't installed.
"""

from .service_account import DATASTORE_SCOPE, ServiceAccountAuth

__all__ = [
    "DATASTORE_SCOPE",
    "ServiceAccountAuth",
]
