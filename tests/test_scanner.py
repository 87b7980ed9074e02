"""Tests for scanner module."""

from unittest.mock import patch

import pytest

from gpx_fastpath.exceptions import GPXStructureError
from gpx_fastpath.scanner import (
    ScanContext,
    _index_tag,
    detect_quote_style,
    estimate_size,
    first_trackpoint,
    iter_trackpoints,
    next_trackpoint,
)
from conftest import build_gpx, build_trkpt, varied_points, varied_trkpts


# 43 bytes each; the close tag of the first point starts at 35
SHORT_POINT = b'<trkpt lat="1" lon="2"><ele>3</ele></trkpt>'


class TestIndexTag:
    """Tests for the _index_tag locator."""

    def test_finds_tag(self):
        """Test locating a close tag after other elements."""
        data = b"<ele>1</ele></trkpt>"
        assert _index_tag(data, b"</trkpt>", 0, len(data)) == 12

    def test_not_found(self):
        """Test missing tag returns -1."""
        data = b"<ele>1</ele>"
        assert _index_tag(data, b"</trkpt>", 0, len(data)) == -1

    def test_no_delimiter(self):
        """Test buffer without any '<'."""
        assert _index_tag(b"plain text", b"<ele>", 0, 10) == -1

    def test_respects_start(self):
        """Test that matches before start are ignored."""
        data = b"<trkpt a><trkpt b>"
        assert _index_tag(data, b"<trkpt", 1, len(data)) == 9

    def test_respects_end(self):
        """Test that a tag crossing end is not matched."""
        data = b"xx</trkpt>"
        assert _index_tag(data, b"</trkpt>", 0, len(data) - 1) == -1
        assert _index_tag(data, b"</trkpt>", 0, len(data)) == 2

    def test_short_tag_before_match(self):
        """Test that the skip stride does not jump over a following tag."""
        data = b"<a><trkpt"
        assert _index_tag(data, b"<trkpt", 0, len(data)) == 3

    def test_short_close_tag_before_match(self):
        """Test a short close tag directly before the wanted one."""
        data = b"<hr>120</hr></trkpt>"
        assert _index_tag(data, b"</trkpt>", 0, len(data)) == 12

    def test_absolute_index(self):
        """Test that returned index is absolute, not relative to start."""
        data = b"<ele>1</ele><ele>2</ele>"
        assert _index_tag(data, b"<ele>", 5, len(data)) == 12


class TestDetectQuoteStyle:
    """Tests for detect_quote_style function."""

    def test_double_only(self):
        """Test span with double quotes only."""
        span = b'lat="1" lon="2">'
        assert detect_quote_style(span, 0, len(span)) == b'"'

    def test_single_only(self):
        """Test span with single quotes only."""
        span = b"lat='1' lon='2'>"
        assert detect_quote_style(span, 0, len(span)) == b"'"

    def test_double_first(self):
        """Test that the earlier quote wins when both occur."""
        span = b'lat="1" lon="2"><name>O\'Brien</name>'
        assert detect_quote_style(span, 0, len(span)) == b'"'

    def test_single_first(self):
        """Test single quote before a double quote."""
        span = b"lat='1' lon='2'><desc>\"x\"</desc>"
        assert detect_quote_style(span, 0, len(span)) == b"'"

    def test_no_quotes(self):
        """Test span without quotes raises structural error."""
        span = b"lat=1 lon=2><ele>3</ele>"
        with pytest.raises(GPXStructureError, match="missing lat/lon quote marking"):
            detect_quote_style(span, 0, len(span))

    def test_only_looks_inside_span(self):
        """Test quotes outside the span are ignored."""
        data = b'"outside" lat=1 lon=2 \'after\''
        with pytest.raises(GPXStructureError):
            detect_quote_style(data, 10, 22)


class TestEstimateSize:
    """Tests for estimate_size function."""

    def test_small_buffer(self):
        """Test buffer under the minimum size assumes one point."""
        assert estimate_size(SHORT_POINT, 0, len(SHORT_POINT)) == (1, 24)

    def test_regular_points(self):
        """Test per-point length is the distance between open tags."""
        data = SHORT_POINT * 100
        count, length = estimate_size(data, 0, len(data))
        assert length == len(SHORT_POINT)
        assert count >= 100

    def test_count_is_biased_upwards(self):
        """Test count estimate does not under-allocate regular data."""
        data = SHORT_POINT * 1000
        count, _ = estimate_size(data, 0, len(data))
        assert 1000 <= count <= 1100

    def test_single_point_in_second_half(self):
        """Test only one open tag in the sampled half."""
        data = b" " * 600 + SHORT_POINT
        assert estimate_size(data, 0, len(data)) == (1, 24)

    def test_no_tag_in_second_half(self):
        """Test open tags only in the first half."""
        data = SHORT_POINT * 2 + b" " * 600
        assert estimate_size(data, 0, len(data)) == (1, 24)

    def test_degenerate_distance(self):
        """Test tags closer than the minimum distance."""
        data = b"<trkpt<trkpt" * 100
        assert estimate_size(data, 0, len(data)) == (1, 24)

    def test_window_start(self):
        """Test that only bytes from start on are measured."""
        data = b" " * 10000 + SHORT_POINT * 20
        count, length = estimate_size(data, 10000, len(data))
        assert length == len(SHORT_POINT)
        assert count >= 20


class TestFirstTrackpoint:
    """Tests for first_trackpoint function."""

    def test_locates_span(self):
        """Test open tag index and span bounds of the first point."""
        data = b"<gpx>" + SHORT_POINT
        assert first_trackpoint(data, 0, len(data)) == (5, 12, 40)

    def test_no_trackpoint(self):
        """Test document without trackpoints."""
        data = b"<gpx><trk></trk></gpx>"
        assert first_trackpoint(data, 0, len(data)) is None

    def test_missing_close_tag(self):
        """Test span runs to the buffer end without a close tag."""
        data = b'<trkpt lat="1" lon="2">'
        assert first_trackpoint(data, 0, len(data)) == (0, 7, len(data))


class TestNextTrackpoint:
    """Tests for the trackpoint segmenter."""

    def test_exact_search(self):
        """Test segmenting with a zero window."""
        data = SHORT_POINT * 2
        ctx = ScanContext(data=data, pos=0, end=len(data))
        assert next_trackpoint(ctx) == (7, 35)
        assert ctx.pos == 43
        assert next_trackpoint(ctx) == (50, 78)
        assert next_trackpoint(ctx) is None

    def test_span_content(self):
        """Test the span is the interior of the trackpoint."""
        data = b'\n<trkpt lon="-5.760211" lat="37.942557"> <ele>615.25</ele> </trkpt>\n'
        ctx = ScanContext(data=data, pos=0, end=len(data))
        start, end = next_trackpoint(ctx)
        assert data[start:end] == b'lon="-5.760211" lat="37.942557"> <ele>615.25</ele> '

    def test_accurate_window(self):
        """Test a window that lands just before the close tag."""
        data = SHORT_POINT * 3
        ctx = ScanContext(data=data, pos=0, end=len(data), window=33)
        assert next_trackpoint(ctx) == (7, 35)
        assert ctx.window == 33

    def test_accepted_window_rescans_skipped_bytes(self):
        """Test the bytes before the window start are searched on every accepted match."""
        data = SHORT_POINT * 3
        ctx = ScanContext(data=data, pos=0, end=len(data), window=33)
        with patch("gpx_fastpath.scanner._index_tag", wraps=_index_tag) as index_tag:
            assert next_trackpoint(ctx) == (7, 35)
        searches = [call.args[1:] for call in index_tag.call_args_list]
        assert searches == [
            (b"<trkpt", 0, len(data)),
            (b"</trkpt>", 33, len(data)),
            (b"</trkpt>", 7, 40),
        ]

    def test_overshoot_into_next_close_tag(self):
        """Test a window past the close tag, landing near the next one."""
        data = SHORT_POINT * 2
        ctx = ScanContext(data=data, pos=0, end=len(data), window=76)
        assert next_trackpoint(ctx) == (7, 35)
        assert ctx.window == 75
        assert ctx.pos == 43
        assert next_trackpoint(ctx) == (50, 78)

    def test_far_miss_retries_from_span_start(self):
        """Test a close tag found far beyond the window start."""
        long_point = b'<trkpt lat="4" lon="5"><ele>6</ele>' + b" " * 60 + b"</trkpt>"
        data = SHORT_POINT + long_point
        ctx = ScanContext(data=data, pos=0, end=len(data), window=40)
        assert next_trackpoint(ctx) == (7, 35)
        assert ctx.window == 39

    def test_window_never_grows(self):
        """Test the window only shrinks across many points."""
        data = SHORT_POINT * 50
        ctx = ScanContext(data=data, pos=0, end=len(data), window=60)
        windows = [ctx.window]
        spans = list(iter_trackpoints(ctx))
        windows.append(ctx.window)
        assert len(spans) == 50
        assert windows[-1] <= windows[0]

    def test_window_floor(self):
        """Test the window does not shrink below zero."""
        ctx = ScanContext(data=b"", pos=0, end=0, window=0)
        ctx.shrink_window()
        assert ctx.window == 0

    def test_missing_last_close_tag(self):
        """Test trailing trackpoint without close tag stops the scan."""
        data = SHORT_POINT + b'<trkpt lat="4" lon="5"><ele>6</ele>'
        ctx = ScanContext(data=data, pos=0, end=len(data))
        assert next_trackpoint(ctx) == (7, 35)
        assert next_trackpoint(ctx) is None
        assert ctx.pos == ctx.end

    def test_tail_too_short(self):
        """Test a tail that cannot hold a trackpoint."""
        data = SHORT_POINT + b"</gpx>"
        ctx = ScanContext(data=data, pos=43, end=len(data))
        assert next_trackpoint(ctx) is None

    def test_exhausted_stays_exhausted(self):
        """Test repeated calls after exhaustion."""
        ctx = ScanContext(data=SHORT_POINT, pos=0, end=len(SHORT_POINT))
        assert next_trackpoint(ctx) is not None
        assert next_trackpoint(ctx) is None
        assert next_trackpoint(ctx) is None

    def test_short_last_point_with_large_window(self):
        """Test a last point shorter than the window is still found."""
        data = SHORT_POINT + b"</trkseg></trk></gpx>"
        ctx = ScanContext(data=data, pos=0, end=len(data), window=50)
        assert next_trackpoint(ctx) == (7, 35)

    @pytest.mark.parametrize("window", [0, 1, 14, 40, 90, 150, 400, 5000])
    def test_spans_independent_of_window(self, window):
        """Test that every window yields the same spans."""
        data = build_gpx(varied_trkpts(varied_points(40)))
        start = data.index(b"<trkpt")
        exact = list(iter_trackpoints(ScanContext(data=data, pos=start, end=len(data))))
        ctx = ScanContext(data=data, pos=start, end=len(data), window=window)
        assert list(iter_trackpoints(ctx)) == exact
        assert len(exact) == 40

    def test_spans_do_not_copy(self):
        """Test spans are offsets into the original buffer."""
        data = build_gpx([build_trkpt("1.5", "2.5", "3")])
        ctx = ScanContext(data=data, pos=0, end=len(data))
        start, end = next_trackpoint(ctx)
        assert isinstance(start, int) and isinstance(end, int)
        assert data[start:end].startswith(b'lat="1.5"')
