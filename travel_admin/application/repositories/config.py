"""Per-entity configuration consumed by the generic repository."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EntityConfig:
    """Everything that differs between the seven entity repositories.

    ``search_fields`` are matched case-insensitively; ``exact_search_fields``
    (phone numbers) are matched as case-sensitive substrings.
    """

    collection: str
    search_fields: tuple[str, ...] = ()
    exact_search_fields: tuple[str, ...] = ()
    soft_delete: bool = False
    created_field: str = "date_created"
    updated_field: str = "date_updated"
    defaults: dict[str, Any] = field(default_factory=dict)

    @property
    def timestamp_fields(self) -> tuple[str, ...]:
        if self.soft_delete:
            return (self.created_field, self.updated_field, "date_deleted")
        return (self.created_field, self.updated_field)

    @property
    def protected_fields(self) -> tuple[str, ...]:
        """Fields an update payload may never overwrite."""
        return ("id", "created_by", self.created_field)
