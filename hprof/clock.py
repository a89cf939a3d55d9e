import time
from typing import Callable

# Any zero-argument callable returning integer nanoseconds can be used as a clock.
Clock = Callable[[], int]


def monotonic_ns() -> int:
    """Highest-resolution monotonic timestamp in nanoseconds."""
    return time.perf_counter_ns()
