"""Cursor encoding and decoding for keyset pagination.

A cursor identifies the last row of a page by its ``(id, sort_key)`` pair.
Over HTTP it travels as an opaque URL-safe base64 token wrapping a compact
JSON object:

    {"id": "0193a4...", "k": "2025-01-15T10:30:00+00:00", "t": "ts"}

``t`` records whether the sort key is a timestamp (``ts``) or an integer
count (``int``) so the value round-trips with its original type. Clients must
pass tokens back unmodified; they are only meaningful for the collection and
ordering that produced them.
"""

from __future__ import annotations

import base64
import binascii
import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SortKey = datetime | int

# Tokens produced here stay well under this; longer input is rejected unread.
MAX_TOKEN_LENGTH = 512


class Cursor(BaseModel):
    """Position of the last row returned on a page.

    Attributes:
        id: Opaque row identifier (tie-breaker).
        sort_key: Primary sort value of that row (timestamp or integer count).
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Row identifier used as tie-breaker")
    sort_key: SortKey = Field(description="Primary sort value of the row")


class CursorCodec:
    """Encode and decode opaque cursor tokens.

    Usage:
        token = CursorCodec.encode(Cursor(id="abc", sort_key=42))
        cursor = CursorCodec.decode(token)
        assert cursor.sort_key == 42
    """

    @staticmethod
    def encode(cursor: Cursor) -> str:
        """Encode a cursor to an opaque URL-safe string."""
        payload = {"id": cursor.id, **CursorCodec._serialize_key(cursor.sort_key)}
        json_str = json.dumps(payload, separators=(",", ":"))
        return base64.urlsafe_b64encode(json_str.encode()).decode()

    @staticmethod
    def encode_optional(cursor: Cursor | None) -> str | None:
        return CursorCodec.encode(cursor) if cursor is not None else None

    @staticmethod
    def decode(token: str) -> Cursor:
        """Decode a cursor token.

        Raises:
            ValueError: If the token is too long, is not valid base64/JSON or has
                the wrong shape.
        """
        if len(token) > MAX_TOKEN_LENGTH:
            raise ValueError(f"Invalid cursor: token longer than {MAX_TOKEN_LENGTH} characters")
        try:
            json_str = base64.urlsafe_b64decode(token.encode()).decode()
            payload = json.loads(json_str)
        except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
            raise ValueError(f"Invalid cursor: {e}") from e

        if not isinstance(payload, dict):
            raise ValueError("Invalid cursor: payload is not an object")

        row_id = payload.get("id")
        if not isinstance(row_id, str) or not row_id:
            raise ValueError("Invalid cursor: missing id")

        return Cursor(id=row_id, sort_key=CursorCodec._deserialize_key(payload))

    @staticmethod
    def _serialize_key(value: SortKey) -> dict[str, Any]:
        # bool is an int subclass and never a valid sort key
        if isinstance(value, bool):
            raise TypeError("Cursor sort key cannot be a boolean")
        if isinstance(value, datetime):
            return {"k": value.isoformat(), "t": "ts"}
        return {"k": int(value), "t": "int"}

    @staticmethod
    def _deserialize_key(payload: dict[str, Any]) -> SortKey:
        kind = payload.get("t")
        value = payload.get("k")
        if kind == "ts" and isinstance(value, str):
            try:
                return datetime.fromisoformat(value)
            except ValueError as e:
                raise ValueError(f"Invalid cursor: bad timestamp {value!r}") from e
        if kind == "int" and isinstance(value, int) and not isinstance(value, bool):
            return value
        raise ValueError(f"Invalid cursor: unsupported sort key {kind!r}")


__all__ = ["MAX_TOKEN_LENGTH", "Cursor", "CursorCodec", "SortKey"]
