"""Statistics for parsed GPX documents."""

from typing import Sequence

import numpy as np

from .constants import EARTH_RADIUS_KM
from .models import Document, Trackpoint
from .types import TrackStatistics

__all__ = [
    "to_array",
    "haversine_distances",
    "calculate_statistics",
]


def to_array(points: Sequence[Trackpoint]) -> np.ndarray:
    """
    Convert trackpoints to an (N, 3) float64 array of [lat, lon, ele] rows.

    Args:
        points: Trackpoints, e.g. document.trackpoints()

    Returns:
        NumPy array with one row per point
    """
    if len(points) == 0:
        return np.empty((0, 3), dtype=np.float64)
    return np.array([(p.lat, p.lon, p.ele) for p in points], dtype=np.float64)


def haversine_distances(lats: np.ndarray, lons: np.ndarray) -> np.ndarray:
    """Great circle distances in kilometers between consecutive points."""
    lat = np.radians(lats)
    lon = np.radians(lons)
    dlat = np.diff(lat)
    dlon = np.diff(lon)
    a = np.sin(dlat / 2) ** 2 + np.cos(lat[:-1]) * np.cos(lat[1:]) * np.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def calculate_statistics(document: Document) -> TrackStatistics:
    """
    Calculate distance, climbing and extent of all points in a document.

    Distances and elevation changes are summed per segment, so gaps between
    segments are not counted.

    Args:
        document: Parsed document

    Returns:
        TrackStatistics dict
    """
    segments = [segment for track in document.tracks for segment in track.segments]

    stats: TrackStatistics = {
        'total_points': sum(len(segment.points) for segment in segments),
        'skipped_points': document.error_count(),
        'num_tracks': len(document.tracks),
        'num_segments': len(segments),
        'total_distance_km': 0.0,
        'total_ascent_m': 0.0,
        'total_descent_m': 0.0,
    }

    arrays = [to_array(segment.points) for segment in segments if segment.points]
    if not arrays:
        return stats

    for arr in arrays:
        if len(arr) < 2:
            continue
        stats['total_distance_km'] += float(haversine_distances(arr[:, 0], arr[:, 1]).sum())
        climbs = np.diff(arr[:, 2])
        stats['total_ascent_m'] += float(climbs[climbs > 0].sum())
        stats['total_descent_m'] += float(-climbs[climbs < 0].sum())

    everything = np.vstack(arrays)
    stats['min_lat'] = float(everything[:, 0].min())
    stats['max_lat'] = float(everything[:, 0].max())
    stats['min_lon'] = float(everything[:, 1].min())
    stats['max_lon'] = float(everything[:, 1].max())
    stats['min_elevation_m'] = float(everything[:, 2].min())
    stats['max_elevation_m'] = float(everything[:, 2].max())

    return stats
