from .base import Base
from .document_store import SQLAlchemyDocumentStore
from .models import DocumentModel
from .session import create_engine_and_factory, init_database

__all__ = [
    "Base",
    "DocumentModel",
    "SQLAlchemyDocumentStore",
    "create_engine_and_factory",
    "init_database",
]
