"""
Frame runners driving a synthetic workload through a profiler.
"""
from .frame_runner import FrameRunner, GuardRunner, ImplicitRunner, NoGuardRunner
from .workload import Region, build_regions

RUNNER_REGISTRY = {
    'basic': NoGuardRunner,
    'noguard': NoGuardRunner,
    'explicit': GuardRunner,
    'implicit': ImplicitRunner
}

__all__ = [
    'FrameRunner',
    'GuardRunner',
    'NoGuardRunner',
    'ImplicitRunner',
    'Region',
    'build_regions'
]
