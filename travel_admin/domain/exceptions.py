"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DocumentStoreError(Exception):
    """Raised when the remote document store fails a read or write."""

    def __init__(self, operation: str, collection: str, message: str):
        self.operation = operation
        self.collection = collection
        self.message = message
        super().__init__(f"[{collection}] {operation} failed: {message}")


class AuthProviderError(Exception):
    """Raised when the authentication provider rejects a request.

    ``code`` carries the provider error code (e.g. ``INVALID_PASSWORD``,
    ``TOO_MANY_ATTEMPTS_TRY_LATER``) so callers can map it to a message.
    """

    def __init__(self, code: str, message: str, status_code: int | None = None):
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(f"{code}: {message}")


class ObjectStorageError(Exception):
    """Raised when an object cannot be written to or removed from storage."""

    def __init__(self, key: str, message: str):
        self.key = key
        self.message = message
        super().__init__(f"{key}: {message}")
