"""Opaque keyset cursors for document queries."""

import base64
import json
from typing import Any


def encode_cursor(document_id: str, value: Any) -> str:
    """Encode the position of a document: its id and its ordering value.

    Args:
        document_id: Identity of the last document on the page
        value: That document's value for the ordering field (JSON-serialisable)

    Returns:
        Base64-encoded cursor string
    """
    cursor_data = {"id": str(document_id), "value": value}
    json_str = json.dumps(cursor_data)
    return base64.b64encode(json_str.encode("utf-8")).decode("utf-8")


def decode_cursor(cursor: str) -> tuple[str, Any]:
    """Decode a cursor into (id, ordering value).

    Raises:
        ValueError: If cursor is invalid or malformed
    """
    try:
        json_str = base64.b64decode(cursor.encode("utf-8"), validate=True).decode("utf-8")
        cursor_data = json.loads(json_str)
        return cursor_data["id"], cursor_data.get("value")
    except (KeyError, TypeError, UnicodeDecodeError, json.JSONDecodeError, ValueError) as e:
        raise ValueError(f"Invalid cursor: {e}") from e
