"""
A real-time hierarchical profiler.

Callers bracket nested regions of work per frame; the profiler builds a timing
tree mirroring the call structure and reports every region's share of its
parent.
"""
from .clock import Clock, monotonic_ns
from .errors import (
    FrameBoundaryError,
    NoCompletedFrameError,
    ProfilerError,
    UnbalancedLeaveError,
)
from .node import TimerNode
from .profiler import ProfileGuard, Profiler
from .report import ReportRow, TreeReport, build_report, format_report
from .stack import FrameStack, StackEntry

__all__ = [
    # Core
    'Profiler',
    'ProfileGuard',
    'TimerNode',
    'FrameStack',
    'StackEntry',

    # Reporting
    'TreeReport',
    'ReportRow',
    'build_report',
    'format_report',

    # Clock
    'Clock',
    'monotonic_ns',

    # Errors
    'ProfilerError',
    'UnbalancedLeaveError',
    'FrameBoundaryError',
    'NoCompletedFrameError',
]
