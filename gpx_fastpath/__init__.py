"""
GPX Fastpath

Fast extraction of trackpoint latitude, longitude and elevation from GPX data.
"""

__version__ = "1.0.0"

# Export key functions
from .parser import parse, parse_file
from .xml_parser import parse_xml
from .models import Document, Track, Segment, Trackpoint, TrackpointView
from .statistics import calculate_statistics, to_array
from .config import ParseConfig
from .validation import validate_gpx_file
from .exceptions import (
    GPXFastpathError,
    GPXReadError,
    GPXStructureError,
    TrackpointFieldError,
    InvalidNumberError,
    TrackpointError,
    NoTrackpointsError,
    ConfigurationError,
)

__all__ = [
    # Parsing
    "parse",
    "parse_file",
    "parse_xml",
    # Models
    "Document",
    "Track",
    "Segment",
    "Trackpoint",
    "TrackpointView",
    # Statistics
    "calculate_statistics",
    "to_array",
    # Configuration
    "ParseConfig",
    "validate_gpx_file",
    # Exceptions
    "GPXFastpathError",
    "GPXReadError",
    "GPXStructureError",
    "TrackpointFieldError",
    "InvalidNumberError",
    "TrackpointError",
    "NoTrackpointsError",
    "ConfigurationError",
]
