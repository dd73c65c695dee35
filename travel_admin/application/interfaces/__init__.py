from .auth_provider import AuthProvider
from .document_store import DocumentStore, FieldFilter, QueryPage, StoreQuery
from .object_storage import ObjectStorage
from .session_persistence import PersistenceMode, SessionPersistence

__all__ = [
    "AuthProvider",
    "DocumentStore",
    "FieldFilter",
    "QueryPage",
    "StoreQuery",
    "ObjectStorage",
    "PersistenceMode",
    "SessionPersistence",
]
