"""Byte-level trackpoint scanner.

This module finds trackpoint records in a GPX buffer without building a
markup tree. It knows exactly three tags (<trkpt, </trkpt> and <ele>) and
trades XML correctness for speed:

Key Pieces:
- Tag locator: jumps from '<' to '<' and compares the fixed tag bytes
- Quote-style detector: picks " or ' once, from the first trackpoint
- Size estimator: guesses point count and length from a buffer sample
- Segmenter: cuts the next trackpoint span off the buffer tail

Spans are (start, end) offsets into the caller's buffer, so segmenting never
copies bytes. All state of one parse lives on a ScanContext; nothing here is
shared between calls, and independent buffers can be scanned from several
threads at once.

Example:
    >>> ctx = ScanContext(data=data, pos=0, end=len(data), window=60)
    >>> for start, end in iter_trackpoints(ctx):
    ...     print(data[start:end])
    b'lon="-5.760211" lat="37.942557"><ele>615.25</ele>'
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .constants import (
    CLOSE_TAG_SLACK,
    DOUBLE_QUOTE,
    ESTIMATE_BIAS,
    ESTIMATE_MIN_BUFFER,
    ESTIMATE_MIN_DISTANCE,
    ESTIMATE_MIN_TRKPT_LEN,
    MIN_TRKPT_BYTES,
    SINGLE_QUOTE,
    TAG_DELIMITER,
    TAG_SKIP_STRIDE,
    TRKPT_CLOSE_TAG,
    TRKPT_OPEN_TAG,
)
from .exceptions import GPXStructureError
from .logger import logger

__all__ = [
    'ScanContext',
    'detect_quote_style',
    'estimate_size',
    'first_trackpoint',
    'next_trackpoint',
    'iter_trackpoints',
]

OPEN_TAG_LEN = len(TRKPT_OPEN_TAG)
CLOSE_TAG_LEN = len(TRKPT_CLOSE_TAG)


def _index_tag(data: bytes, tag: bytes, start: int, end: int) -> int:
    """
    Return the index of the first tag in data[start:end], or -1.

    Only valid for short ASCII tags that begin with '<'. After a '<' that does
    not start the tag, the search resumes a fixed stride further on, since no
    other tag of well-formed markup can begin inside that stride.

    Args:
        data: Buffer to search
        tag: Tag literal such as b"<trkpt"
        start: First index to consider
        end: Index one past the last byte to consider

    Returns:
        Absolute index of the match, or -1 if not found
    """
    tag_len = len(tag)
    stride = min(TAG_SKIP_STRIDE, tag_len)
    j = start
    while True:
        j = data.find(TAG_DELIMITER, j, end)
        if j < 0 or j + tag_len > end:
            return -1
        if data.startswith(tag, j):
            return j
        j += stride


@dataclass
class ScanContext:
    """Per-call scanner state.

    pos is the start of the unscanned tail. window is the offset from the tail
    start where the close-tag search begins; it only ever shrinks.
    """

    data: bytes
    pos: int
    end: int
    quote: bytes = DOUBLE_QUOTE
    window: int = 0
    error_count: int = 0

    def shrink_window(self) -> None:
        if self.window > 0:
            self.window -= 1


def detect_quote_style(data: bytes, start: int, end: int) -> bytes:
    """
    Decide which quote byte delimits attribute values in this document.

    Args:
        data: Buffer holding the first trackpoint
        start: Start of the first trackpoint span
        end: End of the first trackpoint span

    Returns:
        b'"' or b"'"

    Raises:
        GPXStructureError: If the span holds no quote at all
    """
    double = data.find(DOUBLE_QUOTE, start, end)
    single = data.find(SINGLE_QUOTE, start, end)

    if double < 0 and single < 0:
        raise GPXStructureError("missing lat/lon quote marking")
    if single < 0 or 0 <= double < single:
        return DOUBLE_QUOTE
    return SINGLE_QUOTE


def estimate_size(data: bytes, start: int, end: int) -> Tuple[int, int]:
    """
    Estimate trackpoint count and average trackpoint length in bytes.

    Measures the distance between two consecutive <trkpt tags in the second
    half of the buffer. The result only sizes the point storage and seeds the
    segmenter's window; it never decides which points are accepted.

    Args:
        data: GPX buffer
        start: Index of the first <trkpt tag
        end: Buffer end

    Returns:
        Tuple of (point_count, point_length)
    """
    size = end - start
    if size < ESTIMATE_MIN_BUFFER:
        return 1, ESTIMATE_MIN_TRKPT_LEN

    first = _index_tag(data, TRKPT_OPEN_TAG, start + size // 2, end)
    if first < 0:
        return 1, ESTIMATE_MIN_TRKPT_LEN

    second = _index_tag(data, TRKPT_OPEN_TAG, first + 1, end)
    if second < 0 or second - first < ESTIMATE_MIN_DISTANCE:
        return 1, ESTIMATE_MIN_TRKPT_LEN

    length = second - first
    return max(1, int(size / length * ESTIMATE_BIAS)), length


def first_trackpoint(data: bytes, start: int, end: int) -> Optional[Tuple[int, int, int]]:
    """
    Locate the first trackpoint with a plain forward search.

    Returns:
        Tuple of (open_tag_index, span_start, span_end), or None if the buffer
        has no <trkpt tag. span_end is the buffer end when the close tag is
        missing.
    """
    open_at = _index_tag(data, TRKPT_OPEN_TAG, start, end)
    if open_at < 0:
        return None

    left = min(open_at + OPEN_TAG_LEN + 1, end)
    right = _index_tag(data, TRKPT_CLOSE_TAG, left, end)
    if right < 0:
        right = end
    return open_at, left, right


def next_trackpoint(ctx: ScanContext) -> Optional[Tuple[int, int]]:
    """
    Cut the next trackpoint span off the tail of ctx.data.

    A span is the interior between the open tag (plus one delimiter byte) and
    the close tag, e.g. for

        <trkpt lon="-5.760211" lat="37.942557"><ele>615.25</ele></trkpt>

    the span covers lon="-5.760211" lat="37.942557"><ele>615.25</ele>

    The close-tag search starts ctx.window bytes into the tail instead of at
    the span start. When the match lands far past that point, or a close tag
    hides in the skipped bytes, the estimate was wrong for this document: the
    span start is used instead and the window shrinks by one byte for good.

    Every span ends at the first close tag after its start, whatever the
    window. To guarantee that, an accepted window match is followed by a scan
    of the bytes the window skipped, so the window does not reduce the bytes
    examined per point. It only decides which of the two searches runs first.

    Args:
        ctx: Scanner state; ctx.pos advances past the returned trackpoint

    Returns:
        Tuple of (span_start, span_end), or None once the tail is exhausted
    """
    data, tail, end = ctx.data, ctx.pos, ctx.end

    if end - tail < MIN_TRKPT_BYTES:
        ctx.pos = end
        return None

    open_at = _index_tag(data, TRKPT_OPEN_TAG, tail, end)
    if open_at < 0:
        ctx.pos = end
        return None

    left = open_at + OPEN_TAG_LEN + 1
    search_from = tail + ctx.window

    if search_from <= left or search_from >= end:
        right = _index_tag(data, TRKPT_CLOSE_TAG, left, end)
    else:
        right = _index_tag(data, TRKPT_CLOSE_TAG, search_from, end)
        if right < 0 or right - search_from > CLOSE_TAG_LEN + CLOSE_TAG_SLACK:
            ctx.shrink_window()
            logger.debug(f"Close tag missed at offset {search_from}, window now {ctx.window}")
            right = _index_tag(data, TRKPT_CLOSE_TAG, left, end)
        else:
            skipped = _index_tag(data, TRKPT_CLOSE_TAG, left, min(search_from + CLOSE_TAG_LEN - 1, end))
            if skipped >= 0:
                ctx.shrink_window()
                logger.debug(f"Close tag overshot at offset {search_from}, window now {ctx.window}")
                right = skipped

    if right < 0:
        ctx.pos = end
        return None

    ctx.pos = right + CLOSE_TAG_LEN
    return left, right


def iter_trackpoints(ctx: ScanContext) -> Iterator[Tuple[int, int]]:
    """Yield trackpoint spans until the segmenter is exhausted."""
    while True:
        span = next_trackpoint(ctx)
        if span is None:
            return
        yield span
