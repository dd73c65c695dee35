"""Uniform result shapes returned by repository and session operations."""

from dataclasses import dataclass, field
from typing import Any

from travel_admin.domain.entities import Record


@dataclass
class OperationResult:
    """``{success, data}`` on success, ``{success: False, error}`` on failure.

    ``cursor`` is set by paginated fetches and points at the last document of
    the page, so callers can thread it back explicitly.
    """

    success: bool
    data: Any = None
    error: str | None = None
    cursor: str | None = None

    @classmethod
    def ok(cls, data: Any = None, cursor: str | None = None) -> "OperationResult":
        return cls(success=True, data=data, cursor=cursor)

    @classmethod
    def fail(cls, error: str) -> "OperationResult":
        return cls(success=False, error=error)


@dataclass
class SearchPartition:
    """Search result split by soft-delete state."""

    active: list[Record] = field(default_factory=list)
    deleted: list[Record] = field(default_factory=list)
