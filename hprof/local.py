"""
One implicit profiler per thread.

The module-level functions forward to the calling thread's own `Profiler`,
created on first use and labelled with the thread's name. Threads never share
a profiler, so no locking is needed.
"""
import threading
from typing import Optional

from hprof.profiler import ProfileGuard, Profiler
from hprof.report import TreeReport

_local = threading.local()


def profiler() -> Profiler:
    """The calling thread's profiler, created on first use."""
    p = getattr(_local, "profiler", None)
    if p is None:
        p = Profiler(threading.current_thread().name)
        _local.profiler = p
    return p


def set_profiler(p: Optional[Profiler]):
    """Install `p` as the calling thread's profiler (None resets to a fresh one on next use)."""
    _local.profiler = p


def start_frame():
    profiler().start_frame()


def end_frame():
    profiler().end_frame()


def enter(name: str) -> ProfileGuard:
    return profiler().enter(name)


def enter_noguard(name: str):
    profiler().enter_noguard(name)


def leave():
    profiler().leave()


def report() -> Optional[TreeReport]:
    return profiler().report()


def print_timing(file=None) -> bool:
    return profiler().print_timing(file)
