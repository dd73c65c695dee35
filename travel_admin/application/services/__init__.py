from .session_context import SessionContext
from .profile_service import ProfileService

__all__ = [
    "SessionContext",
    "ProfileService",
]
