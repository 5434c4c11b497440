"""
Lightweight timing utilities for CiteMatch.

Kept apart from the rest of the package so any module can time itself
without import cycles.
"""

import time
import logging
import functools
from typing import Callable


def timed(func: Callable) -> Callable:
    """
    Decorator to log the execution time of a function at DEBUG level.

    Example:
        @timed
        def match_in_directory():
            pass
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception:
            logging.debug(
                f"Function {func.__name__} failed after "
                f"{time.perf_counter() - start_time:.3f} seconds"
            )
            raise

        logging.debug(
            f"Function {func.__name__} execution time: "
            f"{time.perf_counter() - start_time:.3f} seconds"
        )
        return result

    return wrapper
