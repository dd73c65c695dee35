"""Abstract interface (port) for keeping the signed-in session between runs."""

from abc import ABC, abstractmethod
from enum import Enum

from travel_admin.domain.entities import Actor


class PersistenceMode(str, Enum):
    """DURABLE survives a restart; EPHEMERAL lives only as long as the process."""

    DURABLE = "durable"
    EPHEMERAL = "ephemeral"


class SessionPersistence(ABC):
    """Port for session storage — implemented in the infrastructure layer."""

    @abstractmethod
    def set_mode(self, mode: PersistenceMode) -> None:
        """Select where subsequent ``save`` calls write."""
        ...

    @abstractmethod
    def save(self, actor: Actor) -> None:
        ...

    @abstractmethod
    def load(self) -> Actor | None:
        """Return the remembered actor, or None."""
        ...

    @abstractmethod
    def clear(self) -> None:
        ...
