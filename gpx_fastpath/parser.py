"""GPX trackpoint parsing.

This module turns a GPX buffer into a Document holding latitude, longitude
and elevation of every trackpoint. Two paths exist:

- parse(): the fast path. Scans bytes for <trkpt> records without building a
  markup tree and puts every accepted point into a single track with a single
  segment. Validity of the XML itself is not checked.
- parse_xml(): the lxml fallback, see xml_parser.py. Slower, keeps the
  document's tracks, segments and metadata.

parse_file() reads a file and dispatches to either path.

Error Modes:
- Strict (default): the first bad trackpoint aborts the parse with a
  TrackpointError naming its 1-based ordinal
- Best-effort (ignore_errors=True): bad trackpoints are counted and skipped

Either way a parse that accepts no trackpoint at all raises
NoTrackpointsError.

Example:
    >>> from gpx_fastpath.parser import parse_file
    >>> doc = parse_file('ride.gpx', ignore_errors=True)
    >>> print(f"{doc.trackpoint_count()} points, {doc.error_count()} skipped")
    1234 points, 2 skipped
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

from .constants import BYTES_PER_MB, LARGE_FILE_WARNING_MB, WINDOW_MARGIN
from .decorators import timed
from .exceptions import (
    GPXReadError,
    GPXStructureError,
    NoTrackpointsError,
    TrackpointError,
    TrackpointFieldError,
)
from .fields import parse_trkpt
from .logger import logger
from .models import Document, Segment, Track, Trackpoint
from .scanner import (
    ScanContext,
    detect_quote_style,
    estimate_size,
    first_trackpoint,
    iter_trackpoints,
)
from .xml_parser import parse_xml

__all__ = [
    'parse',
    'parse_file',
]

BufferLike = Union[bytes, bytearray, memoryview, str]


def _as_bytes(data: BufferLike) -> Union[bytes, bytearray]:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray)):
        return data
    return bytes(data)


def _make_document(capacity: int) -> Tuple[Document, List[Optional[Trackpoint]]]:
    """Build a Document with one track, one segment and pre-sized point storage."""
    points: List[Optional[Trackpoint]] = [None] * capacity
    document = Document(tracks=[Track(segments=[Segment(points=points)])])
    return document, points


def parse(data: BufferLike, ignore_errors: bool = False) -> Document:
    """
    Parse lat, lon and ele of all trackpoints with the fast scanner.

    Everything before the first <trkpt is ignored. All accepted points end up
    in a single track with a single segment, in source order.

    Args:
        data: GPX content; str is encoded as UTF-8
        ignore_errors: Skip bad trackpoints instead of aborting

    Returns:
        Parsed Document

    Raises:
        GPXStructureError: No <trkpt found or no quote style in the first one
        TrackpointError: A trackpoint failed in strict mode
        NoTrackpointsError: No trackpoint was accepted
    """
    data = _as_bytes(data)
    end = len(data)

    first = first_trackpoint(data, 0, end)
    if first is None:
        raise GPXStructureError("no track points found")
    start, first_left, first_right = first

    quote = detect_quote_style(data, first_left, first_right)
    capacity, point_len = estimate_size(data, start, end)
    logger.debug(f"Estimated {capacity} trackpoints of ~{point_len} bytes, quote {quote!r}")

    ctx = ScanContext(
        data=data,
        pos=start,
        end=end,
        quote=quote,
        window=max(0, point_len - WINDOW_MARGIN),
    )
    document, points = _make_document(capacity)

    accepted = 0
    for ordinal, (left, right) in enumerate(iter_trackpoints(ctx), start=1):
        try:
            point = parse_trkpt(data, left, right, ctx.quote)
        except TrackpointFieldError as e:
            if not ignore_errors:
                raise TrackpointError(ordinal, e) from e
            ctx.error_count += 1
            logger.debug(f"Skipping trackpoint {ordinal}: {e}")
            continue

        if accepted == len(points):
            points.extend([None] * max(accepted, 1))
        points[accepted] = point
        accepted += 1

    document.skipped = ctx.error_count
    if accepted == 0:
        raise NoTrackpointsError(skipped=ctx.error_count)

    # Clip excess capacity
    del points[accepted:]
    return document


@timed
def parse_file(gpx_file: Union[str, Path], use_xml_parser: bool = False, ignore_errors: bool = False) -> Document:
    """
    Read a GPX file and parse it.

    Args:
        gpx_file: Path to GPX file
        use_xml_parser: Use the lxml fallback instead of the fast scanner
        ignore_errors: Skip bad trackpoints instead of aborting

    Returns:
        Parsed Document

    Raises:
        GPXReadError: The file could not be read
        GPXStructureError, TrackpointError, NoTrackpointsError: As for parse(),
            with the file path attached
    """
    file_path = str(gpx_file)
    name = Path(gpx_file).name

    try:
        data = Path(gpx_file).read_bytes()
    except OSError as e:
        raise GPXReadError(e.strerror or str(e), file_path=file_path) from e

    size_mb = len(data) / BYTES_PER_MB
    if size_mb > LARGE_FILE_WARNING_MB:
        logger.warning(f"Large input file {name} ({size_mb:.1f} MB)")

    parse_func = parse_xml if use_xml_parser else parse
    try:
        document = parse_func(data, ignore_errors=ignore_errors)
    except TrackpointError as e:
        raise TrackpointError(e.ordinal, e.cause, file_path=file_path) from e.cause
    except NoTrackpointsError as e:
        raise NoTrackpointsError(skipped=e.skipped, file_path=file_path) from e
    except GPXStructureError as e:
        raise GPXStructureError(str(e), file_path=file_path) from e

    parser_name = "lxml" if use_xml_parser else "fast scanner"
    logger.info(f"✓ Loaded {len(document.all_trackpoints())} trackpoints from {name} ({parser_name})")
    if document.error_count():
        logger.warning(f"Skipped {document.error_count()} malformed trackpoint(s) in {name}")

    return document
