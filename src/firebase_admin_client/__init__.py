"""Public package exports for the Firebase admin client."""

from .async_client import AsyncFirebaseClient
from .client import FirebaseClient
from .config import FirebaseClientConfig
from .core.errors import ErrorCode, FirebaseError

__all__ = [
    "FirebaseClient",
    "AsyncFirebaseClient",
    "FirebaseClientConfig",
    "ErrorCode",
    "FirebaseError",
]
