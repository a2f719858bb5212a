from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from typing import Any, Callable, Sequence

from mongorelay.core.cursor import CursorCodec, default_codec
from mongorelay.core.window import resolve_window
from mongorelay.sources.base import ConnectionSource
from mongorelay.sources.sequence import SequenceSource
from mongorelay.utils.exceptions import InvalidSource
from mongorelay.utils.pagination import Connection, ConnectionArgs, Edge, PageInfo

logger = logging.getLogger(__name__)

Mapper = Callable[[Any], Any]
ArgsLike = ConnectionArgs | Mapping[str, Any] | None


async def _apply_mapper(records: Sequence[Any], mapper: Mapper) -> list[Any]:
    """Map records in order. Awaitable results (async mappers) are awaited."""
    mapped = []
    for record in records:
        result = mapper(record)
        if inspect.isawaitable(result):
            result = await result
        mapped.append(result)
    return mapped


async def build_connection(
    source: ConnectionSource,
    args: ArgsLike = None,
    mapper: Mapper | None = None,
    *,
    codec: CursorCodec = default_codec,
) -> Connection:
    """Build a Relay connection from a countable, windowable source.

    The source is duplicated before use, so the caller's object is never
    configured and may be reused. The total count is queried on every call;
    cursors are offsets and stay valid only while the source's size and
    ordering do not change.

    Args:
        source: Any object implementing ConnectionSource.
        args: ConnectionArgs or a mapping with after/before/first/last.
        mapper: Applied to each fetched record, in order, before edges are
            built. May return an awaitable.
        codec: Cursor codec used to read after/before and to encode edges.

    Returns:
        Connection with edges and page info.

    Raises:
        InvalidSource: If ``source`` does not implement ConnectionSource.
        TypeError: If ``args`` contains unknown keys.
    """
    if not isinstance(source, ConnectionSource):
        raise InvalidSource(
            f"{type(source).__name__} does not implement count/configure_window/fetch/duplicate"
        )
    args = ConnectionArgs.coerce(args)

    scoped = source.duplicate()
    total_count = await scoped.count()
    window = resolve_window(
        total_count,
        after=args.after,
        before=args.before,
        first=args.first,
        last=args.last,
        codec=codec,
    )
    logger.debug(
        "Resolved window skip=%d limit=%d over %d items for %r",
        window.skip,
        window.limit,
        total_count,
        source,
    )

    scoped.configure_window(window.skip, window.limit)
    records: Sequence[Any] = [] if window.is_empty else await scoped.fetch()

    if mapper is not None:
        records = await _apply_mapper(records, mapper)

    edges = tuple(
        Edge(cursor=codec.encode(window.start_offset + index), node=record)
        for index, record in enumerate(records)
    )

    page_info = PageInfo(
        start_cursor=edges[0].cursor if edges else None,
        end_cursor=edges[-1].cursor if edges else None,
        has_previous_page=(
            window.start_offset > window.lower_bound if args.last is not None else False
        ),
        has_next_page=(
            window.end_offset < window.upper_bound if args.first is not None else False
        ),
    )
    return Connection(edges=edges, page_info=page_info)


async def connection_from_sequence(
    items: Sequence[Any],
    args: ArgsLike = None,
    mapper: Mapper | None = None,
    *,
    codec: CursorCodec = default_codec,
) -> Connection:
    """Paginate an in-memory sequence."""
    return await build_connection(SequenceSource(items), args, mapper, codec=codec)
