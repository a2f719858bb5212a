"""Opaque offset cursors.

A cursor is the base64 encoding of a fixed prefix followed by an integer
offset, e.g. ``base64("mongodbconnection:42")``. Offsets are only meaningful
against the ordering that produced them.
"""

from __future__ import annotations

import base64
import binascii
import re

PREFIX = "mongodbconnection:"

_OFFSET_RE = re.compile(r"-?[0-9]+")


class CursorCodec:
    """Encodes integer offsets into prefixed base64 cursors and back."""

    def __init__(self, prefix: str = PREFIX) -> None:
        if not prefix:
            raise ValueError("cursor prefix cannot be empty")
        if not prefix.isascii():
            raise ValueError(f"cursor prefix must be ASCII, got {prefix!r}")
        self.prefix = prefix

    def encode(self, offset: int) -> str:
        raw = f"{self.prefix}{offset}".encode("ascii")
        return base64.b64encode(raw).decode("ascii")

    def decode(self, cursor: str) -> int | None:
        """Return the offset stored in ``cursor``, or None if it does not parse.

        Never raises: foreign or corrupted cursors simply have no offset.
        """
        if not isinstance(cursor, str):
            return None
        try:
            raw = base64.b64decode(cursor.encode("ascii"), validate=True)
            text = raw.decode("ascii")
        except (binascii.Error, UnicodeError):
            return None

        if not text.startswith(self.prefix):
            return None
        remainder = text[len(self.prefix):]
        if not _OFFSET_RE.fullmatch(remainder):
            return None
        try:
            return int(remainder)
        except ValueError:
            # longer than the interpreter allows for int(str)
            return None

    def offset_or_default(self, cursor: str | None, default_offset: int) -> int:
        """Decode ``cursor``, falling back to ``default_offset`` when absent or invalid."""
        if cursor is None:
            return default_offset
        offset = self.decode(cursor)
        return default_offset if offset is None else offset

    def __repr__(self) -> str:
        return f"CursorCodec(prefix={self.prefix!r})"


default_codec = CursorCodec()


def encode_offset(offset: int) -> str:
    """Create the cursor string for an offset."""
    return default_codec.encode(offset)


def decode_cursor(cursor: str) -> int | None:
    """Rederive the offset from a cursor string. None if it is not one of ours."""
    return default_codec.decode(cursor)


def resolve_offset_or_default(cursor: str | None, default_offset: int) -> int:
    """Offset stored in an optional cursor, or ``default_offset``."""
    return default_codec.offset_or_default(cursor, default_offset)
