"""Abstract interface (port) for binary object storage."""

from abc import ABC, abstractmethod


class ObjectStorage(ABC):
    """Port for storing objects under string keys such as ``profileImages/<uid>``."""

    @abstractmethod
    async def put(self, key: str, content: bytes, content_type: str | None = None) -> str:
        """Store ``content`` under ``key`` and return its retrievable URL."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove the object. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    def url_for(self, key: str) -> str:
        """Return the URL an object under ``key`` is served from."""
        ...
