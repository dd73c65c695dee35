"""Domain entity — a flat document record as held by the entity repositories."""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any


class ServerTimestamp:
    """Sentinel written in place of a timestamp; the store substitutes its own clock."""

    _instance: "ServerTimestamp | None" = None

    def __new__(cls) -> "ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = ServerTimestamp()


@dataclass
class Record:
    """A single document: store-assigned identity plus a flat field map.

    ``data`` holds domain fields, audit fields (``created_by`` and the
    created/updated timestamps) and, for soft-delete capable entities,
    ``is_deleted`` / ``date_deleted``. Nested values are identity stubs
    such as ``created_by = {"uid": ..., "email": ..., "displayName": ...}``.
    """

    id: str
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)

    def merged(self, fields: dict[str, Any]) -> "Record":
        """Return a copy with ``fields`` shallow-merged over the current data."""
        return Record(id=self.id, data={**self.data, **fields})

    def copy(self) -> "Record":
        return Record(id=self.id, data=deepcopy(self.data))

    @property
    def is_deleted(self) -> bool:
        return bool(self.data.get("is_deleted", False))

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a single mapping with the identity under ``id``."""
        return {"id": self.id, **self.data}
