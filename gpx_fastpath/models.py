"""Data model for parsed GPX documents.

Entities are flat records composed by reference:

    Document -> [Track] -> [Segment] -> [Trackpoint]

The fast path always produces exactly one Track holding exactly one Segment;
the markup fallback keeps whatever tracks and segments the file contains.

Example:
    >>> from gpx_fastpath import parse
    >>> doc = parse(data)
    >>> doc.trackpoint_count()
    1234
    >>> doc.trackpoints()[0]
    Trackpoint(lat=37.942557, lon=-5.760211, ele=615.25)
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Iterator, List

__all__ = [
    "Trackpoint",
    "Segment",
    "Track",
    "Document",
    "TrackpointView",
]


@dataclass(frozen=True)
class Trackpoint:
    lat: float
    lon: float
    ele: float  # meters


@dataclass
class Segment:
    points: List[Trackpoint] = field(default_factory=list)


@dataclass
class Track:
    name: str = ""
    segments: List[Segment] = field(default_factory=list)


class TrackpointView(Sequence):
    """Read-only view over a segment's point list. No copy is made."""

    __slots__ = ("_points",)

    def __init__(self, points: List[Trackpoint]):
        self._points = points

    def __getitem__(self, index):
        if isinstance(index, slice):
            return TrackpointView(self._points[index])
        return self._points[index]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Trackpoint]:
        return iter(self._points)

    def __eq__(self, other) -> bool:
        if isinstance(other, TrackpointView):
            return self._points == other._points
        if isinstance(other, (list, tuple)):
            return self._points == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"TrackpointView({len(self._points)} points)"


@dataclass
class Document:
    """A parsed GPX document.

    Only the markup fallback fills creator, version and time. skipped counts
    the trackpoints dropped in best-effort mode.
    """

    creator: str = ""
    version: str = ""
    time: str = ""
    tracks: List[Track] = field(default_factory=list)
    skipped: int = 0

    def _first_segment(self) -> Segment:
        if not self.tracks or not self.tracks[0].segments:
            return Segment()
        return self.tracks[0].segments[0]

    def trackpoints(self) -> TrackpointView:
        """Borrowed read-only view of the first segment's points."""
        return TrackpointView(self._first_segment().points)

    def trackpoints_copy(self) -> List[Trackpoint]:
        """Owned copy of the first segment's points."""
        return list(self._first_segment().points)

    def trackpoint_count(self) -> int:
        return len(self._first_segment().points)

    def all_trackpoints(self) -> List[Trackpoint]:
        """Points of every track and segment, in document order."""
        return [
            point
            for track in self.tracks
            for segment in track.segments
            for point in segment.points
        ]

    def release(self) -> None:
        """Drop the point storage of the first segment."""
        if self.tracks and self.tracks[0].segments:
            self.tracks[0].segments[0].points = []

    def error_count(self) -> int:
        """Number of skipped trackpoints (best-effort mode only)."""
        return self.skipped
