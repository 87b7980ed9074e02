"""Custom exceptions for gpx-fastpath.

The hierarchy mirrors the four ways a parse can fail, so callers can branch on
the exception type instead of on message text:

- GPXReadError: the file could not be read
- GPXStructureError: no trackpoint data or undeterminable quote style
- TrackpointError: a single trackpoint failed in strict mode
- NoTrackpointsError: nothing was accepted, even in best-effort mode
"""

__all__ = [
    "GPXFastpathError",
    "GPXReadError",
    "GPXStructureError",
    "TrackpointFieldError",
    "InvalidNumberError",
    "TrackpointError",
    "NoTrackpointsError",
    "ConfigurationError",
]


class GPXFastpathError(Exception):
    """Base exception for all gpx-fastpath errors."""

    pass


class GPXReadError(GPXFastpathError):
    """Raised when a GPX file cannot be read."""

    def __init__(self, message: str, file_path: str = None):
        self.file_path = file_path
        if file_path:
            message = f"{file_path}: {message}"
        super().__init__(message)


class GPXStructureError(GPXFastpathError):
    """Raised when the document has no usable trackpoint structure."""

    def __init__(self, message: str, file_path: str = None):
        self.file_path = file_path
        if file_path:
            message = f"{file_path}: {message}"
        super().__init__(message)


class TrackpointFieldError(GPXFastpathError):
    """Raised by the field extractors when one value of a trackpoint is bad."""

    def __init__(self, message: str, field: str = None, snippet: str = None):
        self.field = field
        self.snippet = snippet
        if snippet:
            message = f"{message}: {snippet}"
        super().__init__(message)


class InvalidNumberError(TrackpointFieldError):
    """Raised when numeric text cannot be converted to a float."""

    def __init__(self, text: str, field: str = None):
        self.text = text
        super().__init__(f"invalid number {text!r}", field=field)


class TrackpointError(GPXFastpathError):
    """Raised in strict mode when a trackpoint cannot be parsed."""

    def __init__(self, ordinal: int, cause: TrackpointFieldError, file_path: str = None):
        self.ordinal = ordinal
        self.cause = cause
        self.field = cause.field
        self.file_path = file_path
        message = f"trackpoint {ordinal}: {cause}"
        if file_path:
            message = f"{file_path}: {message}"
        super().__init__(message)


class NoTrackpointsError(GPXFastpathError):
    """Raised when a parse accepted zero trackpoints."""

    def __init__(self, message: str = "no valid trackpoints found", skipped: int = 0, file_path: str = None):
        self.skipped = skipped
        self.file_path = file_path
        if skipped:
            message = f"{message} ({skipped} skipped)"
        if file_path:
            message = f"{file_path}: {message}"
        super().__init__(message)


class ConfigurationError(GPXFastpathError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, config_key: str = None):
        self.config_key = config_key
        if config_key:
            message = f"{message} (Key: {config_key})"
        super().__init__(message)
