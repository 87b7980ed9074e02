"""Decorators for performance monitoring.

@timed
------
Measures and logs function execution time. Automatically warns if a function
takes longer than 5 seconds, helping identify slow inputs.

Example:
    >>> @timed
    ... def parse_file(path):
    ...     ...
    >>> parse_file('ride.gpx')
    DEBUG: parse_file took 0.02s
"""

import time
import functools
from typing import Callable, Any, TypeVar
from .logger import logger

__all__ = [
    "timed",
]

F = TypeVar("F", bound=Callable[..., Any])

SLOW_CALL_SECONDS = 5.0


def timed(func: F) -> F:
    """Decorator to measure and log function execution time.

    Args:
        func: Function to time

    Returns:
        Wrapped function that logs execution time
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start_time

        logger.debug(f"{func.__name__} took {elapsed:.2f}s")

        if elapsed > SLOW_CALL_SECONDS:
            logger.warning(
                f"{func.__name__} took {elapsed:.2f}s (consider optimization)"
            )

        return result

    return wrapper
