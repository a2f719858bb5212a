import pytest

from mongorelay.core.cursor import CursorCodec, encode_offset
from mongorelay.core.window import OffsetWindow, resolve_window


class TestResolveWindow:
    def test_no_args_selects_everything(self):
        window = resolve_window(10)
        assert window == OffsetWindow(
            skip=0, limit=10, start_offset=0, end_offset=10, lower_bound=0, upper_bound=10
        )

    def test_first(self):
        window = resolve_window(10, first=3)
        assert (window.skip, window.limit) == (0, 3)
        assert window.end_offset == 3

    def test_after_and_first(self):
        window = resolve_window(10, after=encode_offset(2), first=3)
        assert (window.skip, window.limit) == (3, 3)
        assert window.lower_bound == 3

    def test_last(self):
        window = resolve_window(10, last=3)
        assert (window.skip, window.limit) == (7, 3)
        assert (window.start_offset, window.end_offset) == (7, 10)

    def test_before_and_last(self):
        window = resolve_window(10, before=encode_offset(8), last=3)
        assert (window.start_offset, window.end_offset) == (5, 8)
        assert window.upper_bound == 8

    def test_before_only(self):
        window = resolve_window(10, before=encode_offset(4))
        assert (window.skip, window.limit) == (0, 4)

    def test_first_and_last_intersect(self):
        # trailing 2 of the first 5
        window = resolve_window(10, first=5, last=2)
        assert (window.start_offset, window.end_offset) == (3, 5)
        assert window.limit == 2

    def test_last_larger_than_window_keeps_window(self):
        window = resolve_window(10, after=encode_offset(6), last=50)
        assert (window.start_offset, window.end_offset) == (7, 10)

    def test_empty_total(self):
        window = resolve_window(0)
        assert window.limit == 0
        assert window.is_empty

    def test_first_zero(self):
        window = resolve_window(10, first=0)
        assert window.limit == 0
        assert window.start_offset == window.end_offset == 0

    def test_last_zero(self):
        window = resolve_window(10, last=0)
        assert window.limit == 0
        assert window.start_offset == 10

    @pytest.mark.parametrize("after,before", [(5, 5), (7, 3), (9, 0)])
    def test_conflicting_after_before_is_empty(self, after, before):
        window = resolve_window(10, after=encode_offset(after), before=encode_offset(before))
        assert window.limit == 0
        assert window.is_empty

    def test_negative_first_clamps_limit(self):
        window = resolve_window(10, first=-3)
        assert window.limit == 0
        assert window.end_offset == -3

    def test_after_past_end(self):
        window = resolve_window(10, after=encode_offset(20))
        assert window.skip == 21
        assert window.limit == 0

    def test_before_past_end_is_clamped(self):
        window = resolve_window(10, before=encode_offset(50))
        assert window.end_offset == 10
        assert window.upper_bound == 10

    def test_malformed_cursors_fall_back_to_defaults(self):
        window = resolve_window(10, after="junk", before="junk")
        assert (window.skip, window.limit) == (0, 10)
        assert window.lower_bound == 0
        assert window.upper_bound == 10

    def test_custom_codec(self):
        codec = CursorCodec(prefix="items:")
        window = resolve_window(10, after=codec.encode(4), first=2, codec=codec)
        assert (window.skip, window.limit) == (5, 2)

    def test_foreign_codec_cursor_is_ignored(self):
        codec = CursorCodec(prefix="items:")
        window = resolve_window(10, after=encode_offset(4), first=2, codec=codec)
        assert (window.skip, window.limit) == (0, 2)
