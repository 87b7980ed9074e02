"""Constants used throughout gpx-fastpath.

This module centralizes the tag vocabulary and the tuning numbers of the
trackpoint scanner. Keeping them in one place makes the relationships between
them visible:

Categories:
- Tag Vocabulary: Literal byte strings the scanner looks for
- Tag Locator: Skip-ahead stride after a mismatching '<'
- Size Estimation: Thresholds for the up-front allocation guess
- Segmenter: Close-tag search window and slack
- Field Extraction: Fixed skips used by the attribute and elevation parsers
- Statistics: Earth radius for distance sums
- File Handling: Extension and size warnings
- Environment: Configuration variable names
"""

# === Tag Vocabulary ===
TRKPT_OPEN_TAG = b"<trkpt"
TRKPT_CLOSE_TAG = b"</trkpt>"
ELE_OPEN_TAG = b"<ele>"
TAG_DELIMITER = b"<"

LAT_NAME = b"lat"
LON_NAME = b"lon"

DOUBLE_QUOTE = b'"'
SINGLE_QUOTE = b"'"

# === Tag Locator ===
# Shortest possible markup tag is "<a>", so the next tag start of well-formed
# data is never closer than this to a mismatching '<'.
TAG_SKIP_STRIDE = 3

# === Size Estimation ===
ESTIMATE_MIN_BUFFER = 500  # Below this size, assume a single point
ESTIMATE_MIN_TRKPT_LEN = 24  # Fallback per-point length in bytes
ESTIMATE_MIN_DISTANCE = 20  # Shorter tag distances are treated as degenerate
ESTIMATE_BIAS = 1.05  # Upward bias against under-allocating

# === Segmenter ===
WINDOW_MARGIN = len(TRKPT_CLOSE_TAG) + 2  # Window offset = point length - margin
CLOSE_TAG_SLACK = 20  # Allowed overshoot past the window before retrying
MIN_TRKPT_BYTES = len(TRKPT_OPEN_TAG) + len(TRKPT_CLOSE_TAG)

# === Field Extraction ===
ATTR_ASSIGN_SKIP = 1  # The '=' after an attribute name
# Shortest attribute portion that can carry both coordinates: lat="1"lon="2">
ELE_SEARCH_OFFSET = 15
SNIPPET_MAX_LEN = 80  # Span preview length in error messages

# === Statistics ===
EARTH_RADIUS_KM = 6371.0

# === File Handling ===
GPX_EXTENSION = ".gpx"
LARGE_FILE_WARNING_MB = 100  # Warn if input file exceeds this size
BYTES_PER_MB = 1024 * 1024

# === Environment ===
ENV_PARSER = "GPX_FASTPATH_PARSER"
ENV_IGNORE_ERRORS = "GPX_FASTPATH_IGNORE_ERRORS"
ENV_DEBUG = "GPX_FASTPATH_DEBUG"
PARSER_CHOICES = ("fast", "xml")
