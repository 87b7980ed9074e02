"""Field extractors for trackpoint spans.

A trackpoint span as cut by the scanner looks like

    lon="-5.760211" lat="37.942557"> <ele>615.25</ele>

Attributes are expected before the elevation element. White space around
numbers is trimmed and ignored elsewhere, and anything else in the span is
fine as long as it does not disturb these lookups, so even

    lon "  -5.760211" lat    "37.942557" <ele>615.25<

parses. Numbers must be plain decimals, optionally signed (a leading '+' is
fine) and with an exponent; nan, inf and underscores are rejected.
"""

import math
import re
from functools import partial
from typing import Callable, Dict, Sequence, Tuple, Union

from .constants import (
    ATTR_ASSIGN_SKIP,
    ELE_OPEN_TAG,
    ELE_SEARCH_OFFSET,
    LAT_NAME,
    LON_NAME,
    SNIPPET_MAX_LEN,
    TAG_DELIMITER,
)
from .exceptions import InvalidNumberError, TrackpointFieldError
from .models import Trackpoint
from .scanner import _index_tag

# Plain decimal notation with optional sign and exponent; rejects nan, inf and
# digit-grouping underscores that float() would accept
DECIMAL_PATTERN = re.compile(rb"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

__all__ = [
    "parse_number",
    "parse_coordinate",
    "parse_elevation",
    "parse_trkpt",
    "extract_all",
]


def _snippet(data: bytes, start: int, end: int) -> str:
    """Printable preview of a span for error messages."""
    stop = min(end, start + SNIPPET_MAX_LEN)
    text = bytes(data[start:stop]).decode("utf-8", errors="replace")
    if stop < end:
        text += "..."
    return text


def parse_number(raw: Union[bytes, str], field: str = None) -> float:
    """
    Convert numeric text to float after trimming surrounding white space.

    Args:
        raw: Numeric text, bytes or str
        field: Field name for error messages

    Returns:
        Parsed value

    Raises:
        InvalidNumberError: If the text is not a finite decimal number
    """
    text = raw.strip()
    if isinstance(text, str):
        text = text.encode("utf-8")
    if DECIMAL_PATTERN.fullmatch(text):
        value = float(text)
        if math.isfinite(value):
            return value
    raise InvalidNumberError(bytes(text).decode("utf-8", errors="replace"), field=field)


def parse_coordinate(data: bytes, start: int, end: int, name: bytes, quote: bytes) -> float:
    """
    Parse the lat or lon attribute value from a trackpoint span.

    Args:
        data: Buffer holding the span
        start: Span start
        end: Span end
        name: b"lat" or b"lon"
        quote: Quote byte chosen for this document

    Returns:
        Coordinate value

    Raises:
        TrackpointFieldError: If the attribute or its quotes are missing, or
            the value is not a number
    """
    field = name.decode("ascii")

    at = data.find(name, start, end)
    if at < 0:
        raise TrackpointFieldError(f"missing {field} attribute", field, _snippet(data, start, end))

    opening = data.find(quote, at + len(name) + ATTR_ASSIGN_SKIP, end)
    if opening < 0:
        raise TrackpointFieldError(f"missing {field} quotemark", field, _snippet(data, start, end))

    closing = data.find(quote, opening + 1, end)
    if closing < 0:
        raise TrackpointFieldError(f"missing {field} quotemark", field, _snippet(data, start, end))

    return parse_number(data[opening + 1:closing], field)


def parse_elevation(data: bytes, start: int, end: int) -> float:
    """
    Parse the <ele> value from a trackpoint span.

    The search starts a fixed number of bytes into the span so that attribute
    text is not scanned. The value runs up to the next '<' of any kind; the
    closing </ele> itself is not checked. A value followed by some other
    tag-like byte sequence is therefore read up to that sequence, which
    conforming GPX never contains.

    Raises:
        TrackpointFieldError: If there is no <ele> tag, no '<' after it, or
            the value is not a number
    """
    at = _index_tag(data, ELE_OPEN_TAG, min(start + ELE_SEARCH_OFFSET, end), end)
    if at < 0:
        raise TrackpointFieldError("missing elevation tag", "ele", _snippet(data, start, end))

    value_start = at + len(ELE_OPEN_TAG)
    value_end = data.find(TAG_DELIMITER, value_start, end)
    if value_end < 0:
        raise TrackpointFieldError("invalid elevation syntax", "ele", _snippet(data, start, end))

    return parse_number(data[value_start:value_end], "ele")


def extract_all(extractors: Sequence[Tuple[str, Callable[[], float]]]) -> Dict[str, float]:
    """
    Run every extractor, even after a failure, and raise the first failure.

    Args:
        extractors: (field name, zero-argument extractor) pairs in order

    Returns:
        Dict mapping field name to value

    Raises:
        TrackpointFieldError: The first failure in extractor order
    """
    values = {}
    first_error = None
    for name, extract in extractors:
        try:
            values[name] = extract()
        except TrackpointFieldError as e:
            if first_error is None:
                first_error = e
    if first_error is not None:
        raise first_error
    return values


def parse_trkpt(data: bytes, start: int, end: int, quote: bytes) -> Trackpoint:
    """
    Parse lon, lat and ele from a trackpoint span.

    Raises:
        TrackpointFieldError: The first of the three fields that failed
    """
    values = extract_all((
        ("lon", partial(parse_coordinate, data, start, end, LON_NAME, quote)),
        ("lat", partial(parse_coordinate, data, start, end, LAT_NAME, quote)),
        ("ele", partial(parse_elevation, data, start, end)),
    ))
    return Trackpoint(lat=values["lat"], lon=values["lon"], ele=values["ele"])
