"""Full markup parsing of GPX documents with lxml.

The fallback for callers that need the document as written: every <trk> and
<trkseg> is kept, and creator, version, time and track names are filled in.
Elements are matched by local name, so GPX 1.0, GPX 1.1 and files without a
namespace all work.

Trackpoint rules match the fast path: lat, lon and ele must all be present
and numeric, bad points abort the parse or are skipped depending on
ignore_errors, and a document without any accepted point is an error.
"""

from functools import partial
from typing import Any, List, Union

from lxml import etree

from .exceptions import (
    GPXStructureError,
    NoTrackpointsError,
    TrackpointError,
    TrackpointFieldError,
)
from .fields import extract_all, parse_number
from .logger import logger
from .models import Document, Segment, Track, Trackpoint

__all__ = [
    'parse_xml',
]


def _local_name(element: Any) -> str:
    return etree.QName(element).localname


def _children(parent: Any, name: str) -> List[Any]:
    """Child elements of parent with the given local name, namespace ignored."""
    return [
        child for child in parent
        if isinstance(child.tag, str) and _local_name(child) == name
    ]


def _child_text(parent: Any, name: str) -> str:
    for child in _children(parent, name):
        return (child.text or "").strip()
    return ""


def _document_time(root: Any) -> str:
    """GPX 1.0 puts <time> under <gpx>, GPX 1.1 under <metadata>."""
    time = _child_text(root, "time")
    if time:
        return time
    for metadata in _children(root, "metadata"):
        return _child_text(metadata, "time")
    return ""


def _attribute(element: Any, name: str) -> float:
    value = element.get(name)
    if value is None:
        raise TrackpointFieldError(f"missing {name} attribute", name)
    return parse_number(value, name)


def _elevation(element: Any) -> float:
    ele = _children(element, "ele")
    if not ele:
        raise TrackpointFieldError("missing elevation tag", "ele")
    return parse_number(ele[0].text or "", "ele")


def _parse_trkpt_element(element: Any) -> Trackpoint:
    values = extract_all((
        ("lon", partial(_attribute, element, "lon")),
        ("lat", partial(_attribute, element, "lat")),
        ("ele", partial(_elevation, element)),
    ))
    return Trackpoint(lat=values["lat"], lon=values["lon"], ele=values["ele"])


def _parse_tree(data: bytes) -> Any:
    """
    Parse GPX bytes into an lxml root element.

    Entities are not resolved and no network access is made.

    Raises:
        GPXStructureError: If the data is not well-formed XML
    """
    parser = etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        huge_tree=True,
        remove_comments=True,
    )
    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        logger.debug(f"XML parsing error: {e}")
        raise GPXStructureError(f"XML parsing error: {e}") from e
    if root is None:
        raise GPXStructureError("empty XML document")
    return root


def parse_xml(data: Union[bytes, bytearray, memoryview, str], ignore_errors: bool = False) -> Document:
    """
    Parse a GPX document with lxml, keeping tracks and segments.

    Args:
        data: GPX content; str is encoded as UTF-8
        ignore_errors: Skip bad trackpoints instead of aborting

    Returns:
        Parsed Document

    Raises:
        GPXStructureError: The data is not well-formed XML
        TrackpointError: A trackpoint failed in strict mode
        NoTrackpointsError: No trackpoint was accepted
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    root = _parse_tree(bytes(data))

    document = Document(
        creator=root.get("creator", ""),
        version=root.get("version", ""),
        time=_document_time(root),
    )

    ordinal = 0
    accepted = 0
    for trk in _children(root, "trk"):
        track = Track(name=_child_text(trk, "name"))
        for trkseg in _children(trk, "trkseg"):
            segment = Segment()
            for trkpt in _children(trkseg, "trkpt"):
                ordinal += 1
                try:
                    point = _parse_trkpt_element(trkpt)
                except TrackpointFieldError as e:
                    if not ignore_errors:
                        raise TrackpointError(ordinal, e) from e
                    document.skipped += 1
                    logger.debug(f"Skipping trackpoint {ordinal}: {e}")
                    continue
                segment.points.append(point)
                accepted += 1
            track.segments.append(segment)
        document.tracks.append(track)

    logger.debug(f"Parsed {len(document.tracks)} track(s) with {accepted} trackpoints")

    if accepted == 0:
        raise NoTrackpointsError(skipped=document.skipped)
    return document
