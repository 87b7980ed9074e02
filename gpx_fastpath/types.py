"""Type definitions for gpx-fastpath.

Example:
    >>> from gpx_fastpath.types import TrackStatistics
    >>> stats: TrackStatistics = {
    ...     "total_points": 2,
    ...     "skipped_points": 0,
    ...     "num_tracks": 1,
    ...     "num_segments": 1,
    ...     "total_distance_km": 0.11,
    ...     "total_ascent_m": 5.0,
    ...     "total_descent_m": 0.0,
    ... }
"""

from typing import TypedDict
from typing_extensions import NotRequired


class TrackStatistics(TypedDict):
    """Summary of a parsed document. Range keys are absent when it has no points."""

    total_points: int
    skipped_points: int
    num_tracks: int
    num_segments: int
    total_distance_km: float
    total_ascent_m: float
    total_descent_m: float
    min_lat: NotRequired[float]
    max_lat: NotRequired[float]
    min_lon: NotRequired[float]
    max_lon: NotRequired[float]
    min_elevation_m: NotRequired[float]
    max_elevation_m: NotRequired[float]


__all__ = [
    "TrackStatistics",
]
