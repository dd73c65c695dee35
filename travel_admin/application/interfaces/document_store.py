"""Abstract interface (port) for the remote document database."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from travel_admin.domain.entities import Record


@dataclass(frozen=True)
class FieldFilter:
    """Equality predicate on a (possibly dotted) field path, e.g. ``created_by.uid``."""

    path: str
    value: Any


@dataclass
class StoreQuery:
    """A single-collection query: equality filters, one ordering, keyset cursor, limit."""

    collection: str
    filters: list[FieldFilter] = field(default_factory=list)
    order_by: str | None = None
    descending: bool = True
    start_after: str | None = None  # opaque cursor from a previous QueryPage
    limit: int | None = None


@dataclass
class QueryPage:
    """Result of a query; ``cursor`` points at the last document returned."""

    records: list[Record]
    cursor: str | None = None

    @property
    def empty(self) -> bool:
        return not self.records


class DocumentStore(ABC):
    """Port for document persistence — implemented in the infrastructure layer.

    Values equal to ``SERVER_TIMESTAMP`` in written data are replaced by the
    store's clock at write time. Timestamps are read back in the store's own
    representation; callers normalise them.

    Every method raises ``DocumentStoreError`` when the backend fails.
    """

    @abstractmethod
    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """Insert a new document and return its generated identity."""
        ...

    @abstractmethod
    async def get(self, collection: str, document_id: str) -> Record | None:
        """Return the document, or None when it does not exist."""
        ...

    @abstractmethod
    async def update(self, collection: str, document_id: str, fields: dict[str, Any]) -> None:
        """Merge ``fields`` into an existing document.

        Raises ``EntityNotFoundError`` when the document does not exist.
        """
        ...

    @abstractmethod
    async def delete(self, collection: str, document_id: str) -> bool:
        """Delete a document. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def query(self, query: StoreQuery) -> QueryPage:
        """Run a query and return one page of documents."""
        ...
