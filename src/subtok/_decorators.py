"""Decorators shared by the training entry points."""

import functools
import logging
import time
from typing import Callable

log = logging.getLogger(__name__)


def measure_time(func: Callable) -> Callable:
    """Log how long each call of ``func`` took and whether it raised."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        outcome = "failed"
        try:
            result = func(*args, **kwargs)
            outcome = "completed"
            return result
        finally:
            log.info(
                "%s %s in %.3f s",
                func.__qualname__,
                outcome,
                time.perf_counter() - start,
            )

    return wrapper
