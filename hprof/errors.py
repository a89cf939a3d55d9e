"""Exception types raised by the profiler."""


class ProfilerError(Exception):
    """Base exception for the profiler."""


class UnbalancedLeaveError(ProfilerError):
    """Raised when a region is closed while no matching region is open."""


class FrameBoundaryError(ProfilerError):
    """Raised when a frame is started or ended while regions are still open."""

    def __init__(self, action: str, open_regions):
        self.action = action
        self.open_regions = tuple(open_regions)
        path = " > ".join(self.open_regions)
        super().__init__(f"{action} called with {len(self.open_regions)} open region(s): {path}")


class NoCompletedFrameError(ProfilerError):
    """Raised when frame data is requested before any frame has ended."""
