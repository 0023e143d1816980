"""Unit tests for keyset cursor tokens."""

from __future__ import annotations

import base64
import json
from datetime import UTC, datetime

import pytest

from video_service.core.pagination.cursor import MAX_TOKEN_LENGTH, Cursor, CursorCodec


def _token(payload: object) -> str:
    return base64.urlsafe_b64encode(json.dumps(payload).encode()).decode()


class TestCursorCodec:
    """Tests for CursorCodec encode/decode."""

    def test_encode_uses_compact_payload(self):
        """Tokens wrap a short-keyed JSON object in URL-safe base64."""
        token = CursorCodec.encode(Cursor(id="video-1", sort_key=42))

        payload = json.loads(base64.urlsafe_b64decode(token.encode()))
        assert payload == {"id": "video-1", "k": 42, "t": "int"}

    def test_integer_sort_key_survives_decode(self):
        decoded = CursorCodec.decode(CursorCodec.encode(Cursor(id="a", sort_key=7)))

        assert decoded.sort_key == 7
        assert isinstance(decoded.sort_key, int)

    def test_timestamp_sort_key_survives_decode(self):
        """Timestamps keep their type and timezone."""
        stamp = datetime(2025, 1, 15, 10, 30, 0, 123456, tzinfo=UTC)

        decoded = CursorCodec.decode(CursorCodec.encode(Cursor(id="a", sort_key=stamp)))

        assert decoded.sort_key == stamp
        assert isinstance(decoded.sort_key, datetime)

    def test_encode_optional(self):
        assert CursorCodec.encode_optional(None) is None
        assert CursorCodec.encode_optional(Cursor(id="a", sort_key=1)) is not None

    def test_cursor_requires_id(self):
        with pytest.raises(ValueError):
            Cursor(id="", sort_key=1)


class TestCursorDecodeErrors:
    """Malformed tokens are reported as ValueError."""

    def test_not_base64_json(self):
        with pytest.raises(ValueError, match="Invalid cursor"):
            CursorCodec.decode("definitely not a cursor")

    def test_payload_not_an_object(self):
        with pytest.raises(ValueError, match="not an object"):
            CursorCodec.decode(_token([1, 2, 3]))

    def test_missing_id(self):
        with pytest.raises(ValueError, match="missing id"):
            CursorCodec.decode(_token({"k": 1, "t": "int"}))

    def test_unknown_key_type(self):
        with pytest.raises(ValueError, match="unsupported sort key"):
            CursorCodec.decode(_token({"id": "a", "k": 1.5, "t": "float"}))

    def test_boolean_is_not_an_integer_key(self):
        with pytest.raises(ValueError, match="unsupported sort key"):
            CursorCodec.decode(_token({"id": "a", "k": True, "t": "int"}))

    def test_bad_timestamp(self):
        with pytest.raises(ValueError, match="bad timestamp"):
            CursorCodec.decode(_token({"id": "a", "k": "yesterday", "t": "ts"}))

    def test_oversized_token(self):
        token = base64.urlsafe_b64encode(("[" * 100_000 + "]" * 100_000).encode()).decode()

        with pytest.raises(ValueError, match="token longer than"):
            CursorCodec.decode(token)

    def test_nested_payload_within_length(self):
        token = base64.urlsafe_b64encode(("[" * 150 + "]" * 150).encode()).decode()

        assert len(token) <= MAX_TOKEN_LENGTH
        with pytest.raises(ValueError, match="not an object"):
            CursorCodec.decode(token)
