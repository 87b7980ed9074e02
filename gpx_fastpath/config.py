"""Runtime configuration for gpx-fastpath.

Settings come from environment variables and can be overridden by command
line flags:

    GPX_FASTPATH_PARSER         "fast" (default) or "xml"
    GPX_FASTPATH_IGNORE_ERRORS  skip malformed trackpoints ("1", "true", ...)
    GPX_FASTPATH_DEBUG          enable debug logging
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import ENV_DEBUG, ENV_IGNORE_ERRORS, ENV_PARSER, PARSER_CHOICES
from .exceptions import ConfigurationError

__all__ = [
    "ParseConfig",
]

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"", "0", "false", "no", "off"}


def _env_flag(environ: Mapping[str, str], key: str) -> bool:
    value = environ.get(key, "").strip().lower()
    if value in _TRUE_WORDS:
        return True
    if value in _FALSE_WORDS:
        return False
    raise ConfigurationError(f"Invalid boolean value {value!r}", config_key=key)


@dataclass
class ParseConfig:
    """Parser selection and error mode."""

    use_xml_parser: bool = False
    ignore_errors: bool = False
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ParseConfig":
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            ConfigurationError: If a variable holds an unknown value
        """
        if environ is None:
            environ = os.environ

        parser = environ.get(ENV_PARSER, "fast").strip().lower() or "fast"
        if parser not in PARSER_CHOICES:
            raise ConfigurationError(
                f"Unknown parser {parser!r}, expected one of {', '.join(PARSER_CHOICES)}",
                config_key=ENV_PARSER,
            )

        return cls(
            use_xml_parser=parser == "xml",
            ignore_errors=_env_flag(environ, ENV_IGNORE_ERRORS),
            debug=_env_flag(environ, ENV_DEBUG),
        )
