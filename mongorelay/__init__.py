from mongorelay.core import (
    PREFIX,
    CursorCodec,
    encode_offset,
    decode_cursor,
    resolve_offset_or_default,
    OffsetWindow,
    resolve_window,
    build_connection,
    connection_from_sequence,
)
from mongorelay.sources import (
    ConnectionSource,
    MongoQuery,
    MongoAggregation,
    SequenceSource,
)
from mongorelay.lifecycle import (
    enable_tracing,
    disable_tracing,
    QueryEvent,
    add_listener,
)
from mongorelay.utils import (
    MongoRelayError,
    InvalidSource,
    ConnectionArgs,
    Connection,
    Edge,
    PageInfo,
)

__all__ = [
    # Core
    "PREFIX",
    "CursorCodec",
    "encode_offset",
    "decode_cursor",
    "resolve_offset_or_default",
    "OffsetWindow",
    "resolve_window",
    "build_connection",
    "connection_from_sequence",
    # Sources
    "ConnectionSource",
    "MongoQuery",
    "MongoAggregation",
    "SequenceSource",
    # Lifecycle
    "enable_tracing",
    "disable_tracing",
    "QueryEvent",
    "add_listener",
    # Utils
    "MongoRelayError",
    "InvalidSource",
    "ConnectionArgs",
    "Connection",
    "Edge",
    "PageInfo",
]
