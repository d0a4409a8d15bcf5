"""
Process-wide random source shared by every operator and worker thread.
"""

import random
import threading
from typing import Optional

from .errors import OutOfRangeError

_lock = threading.Lock()
_random = random.Random()


def seed(value: Optional[int] = None) -> None:
    with _lock:
        _random.seed(value)


def get_random_value(limit: int) -> int:
    """Uniform integer in [0, limit). A limit of 0 yields 0."""
    if limit < 0:
        raise OutOfRangeError(f"limit must be >= 0, got {limit}")
    if limit == 0:
        return 0
    with _lock:
        return _random.randrange(limit)
