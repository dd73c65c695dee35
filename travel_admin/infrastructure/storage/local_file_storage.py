"""Local filesystem object storage.

Storage layout:
    <storage_dir>/<key>          — e.g. <storage_dir>/profileImages/<uid>

Keys are slash-separated; each segment is sanitised so a key can never
escape ``storage_dir``.
"""

import logging
import re
from pathlib import Path

from travel_admin.application.interfaces.object_storage import ObjectStorage
from travel_admin.domain.exceptions import ObjectStorageError

logger = logging.getLogger(__name__)


def _sanitise(name: str, max_len: int = 120) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-.]", "_", name)[:max_len].strip("_.") or "unnamed"


class LocalObjectStorage(ObjectStorage):
    """Infrastructure adapter for object storage on the local disk."""

    def __init__(self, storage_dir: str | Path, base_url: str | None = None):
        self._root = Path(storage_dir).resolve()
        self._root.mkdir(parents=True, exist_ok=True)
        self._base_url = base_url.rstrip("/") if base_url else None

    def _path_for(self, key: str) -> Path:
        parts = [_sanitise(p) for p in key.split("/") if p]
        if not parts:
            raise ObjectStorageError(key, "empty key")
        return self._root.joinpath(*parts)

    async def put(self, key: str, content: bytes, content_type: str | None = None) -> str:
        """Write ``content`` under ``key``, replacing any previous object."""
        dest_path = self._path_for(key)
        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            dest_path.write_bytes(content)
        except OSError as exc:
            raise ObjectStorageError(key, str(exc)) from exc

        logger.info("Stored object: %s (%d bytes, %s)", dest_path, len(content), content_type or "unknown type")
        return self.url_for(key)

    async def delete(self, key: str) -> bool:
        """Delete an object.

        Returns True if successfully deleted, False if not found.
        """
        file_path = self._path_for(key)
        if not file_path.exists():
            return False
        try:
            file_path.unlink()
        except OSError as exc:
            raise ObjectStorageError(key, str(exc)) from exc

        logger.info("Deleted object from disk: %s", file_path)
        return True

    def url_for(self, key: str) -> str:
        path = self._path_for(key)
        if self._base_url:
            return f"{self._base_url}/{path.relative_to(self._root).as_posix()}"
        return path.as_uri()
