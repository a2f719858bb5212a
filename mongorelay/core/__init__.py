from mongorelay.core.cursor import (
    PREFIX,
    CursorCodec,
    encode_offset,
    decode_cursor,
    resolve_offset_or_default,
)
from mongorelay.core.window import OffsetWindow, resolve_window
from mongorelay.core.builder import build_connection, connection_from_sequence

__all__ = [
    "PREFIX",
    "CursorCodec",
    "encode_offset",
    "decode_cursor",
    "resolve_offset_or_default",
    "OffsetWindow",
    "resolve_window",
    "build_connection",
    "connection_from_sequence",
]
