from .firebase_auth_client import FirebaseAuthClient
from .session_persistence import FileSessionPersistence

__all__ = [
    "FirebaseAuthClient",
    "FileSessionPersistence",
]
