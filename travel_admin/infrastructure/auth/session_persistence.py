"""Session persistence — a JSON file for durable sessions, memory otherwise."""

import json
import logging
from dataclasses import asdict
from pathlib import Path

from travel_admin.application.interfaces.session_persistence import (
    PersistenceMode,
    SessionPersistence,
)
from travel_admin.domain.entities import Actor

logger = logging.getLogger(__name__)


class FileSessionPersistence(SessionPersistence):
    """Keeps the signed-in actor in ``path`` (durable) or in memory (ephemeral).

    Saving in ephemeral mode removes any file left from a durable session so
    a later start does not resurrect it. Switching modes alone touches
    nothing, so a failed sign-in keeps the previous durable session.
    """

    def __init__(self, path: str | Path, mode: PersistenceMode = PersistenceMode.DURABLE):
        self._path = Path(path)
        self._mode = mode
        self._memory: Actor | None = None

    @property
    def mode(self) -> PersistenceMode:
        return self._mode

    def set_mode(self, mode: PersistenceMode) -> None:
        self._mode = mode

    def save(self, actor: Actor) -> None:
        self._memory = actor
        if self._mode != PersistenceMode.DURABLE:
            self._path.unlink(missing_ok=True)
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(asdict(actor)), encoding="utf-8")
        logger.debug("Session saved to %s", self._path)

    def load(self) -> Actor | None:
        if self._memory is not None:
            return self._memory
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return Actor(**data)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self._path, exc)
            return None

    def clear(self) -> None:
        self._memory = None
        self._path.unlink(missing_ok=True)
