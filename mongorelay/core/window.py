from __future__ import annotations

from dataclasses import dataclass

from mongorelay.core.cursor import CursorCodec, default_codec


@dataclass(frozen=True)
class OffsetWindow:
    """Slice of the ordered source selected by a set of pagination arguments.

    ``skip``/``limit`` are applied to the source. ``start_offset``/``end_offset``
    are the logical bounds used for cursors and page flags, and
    ``lower_bound``/``upper_bound`` are what those flags are tested against.
    """

    skip: int
    limit: int
    start_offset: int
    end_offset: int
    lower_bound: int
    upper_bound: int

    @property
    def is_empty(self) -> bool:
        return self.limit == 0


def resolve_window(
    total_count: int,
    after: str | None = None,
    before: str | None = None,
    first: int | None = None,
    last: int | None = None,
    *,
    codec: CursorCodec = default_codec,
) -> OffsetWindow:
    """Compose after/before/first/last into one window over ``total_count`` items.

    ``first`` trims the window from the end, then ``last`` keeps the trailing
    items of what remains. Conflicting arguments yield an empty window rather
    than an error.
    """
    before_offset = codec.offset_or_default(before, total_count)
    after_offset = codec.offset_or_default(after, -1)

    start_offset = max(-1, after_offset) + 1
    end_offset = min(total_count, before_offset)

    if first is not None:
        end_offset = min(end_offset, start_offset + first)
    if last is not None:
        start_offset = max(start_offset, end_offset - last)

    lower_bound = after_offset + 1 if after is not None else 0
    upper_bound = min(before_offset, total_count) if before is not None else total_count

    return OffsetWindow(
        skip=max(start_offset, 0),
        limit=max(end_offset - start_offset, 0),
        start_offset=start_offset,
        end_offset=end_offset,
        lower_bound=lower_bound,
        upper_bound=upper_bound,
    )
