import logging
from typing import Optional

from hprof.clock import Clock, monotonic_ns
from hprof.errors import (
    FrameBoundaryError,
    NoCompletedFrameError,
    ProfilerError,
    UnbalancedLeaveError,
)
from hprof.node import TimerNode
from hprof.report import TreeReport, build_report
from hprof.stack import FrameStack, StackEntry

logger = logging.getLogger(__name__)


class ProfileGuard:
    """
    Closes the region opened by `Profiler.enter` when the guarded block exits.

    Use it as a context manager, or call `leave()` explicitly. It closes its
    region at most once: if the region was already closed through
    `Profiler.leave()`, the guard is detached and exiting does nothing.
    """
    def __init__(self, profiler: "Profiler", entry: Optional[StackEntry] = None):
        self.profiler = profiler
        self.entry = entry
        self.released = entry is None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.profiler._release(self, unwinding=exc_type is not None)
        return False

    def leave(self):
        self.profiler._release(self, unwinding=False)


class Profiler:
    """
    Hierarchical real-time profiler for one thread of execution.

    Regions are opened with `enter` / `enter_noguard` and closed with `leave`;
    nesting builds a tree of `TimerNode`s for the frame in progress. `end_frame`
    moves that tree to `last_completed_tree`, which is what reports read.

    A profiler is a single-writer object: give each thread its own instance.

    Args:
        root_label (str): Name of the frame root, used in report headers.
        clock (callable): Zero-argument callable returning monotonic ns.
        strict (bool): Raise on misuse (default). When False, misuse is
            logged as a warning and the profiler recovers as best it can.
        enabled (bool): Start enabled. A disabled profiler ignores all calls.
    """
    def __init__(self, root_label: str, clock: Optional[Clock] = None,
                 strict: bool = True, enabled: bool = True):
        self.root_label = root_label
        self.clock = clock or monotonic_ns
        self.strict = strict
        self.enabled = enabled

        self.stack = FrameStack()
        self.current_tree = TimerNode(root_label)
        self.last_completed_tree: Optional[TimerNode] = None
        self.frame_count = 0
        # regions entered before the first start_frame belong to an implicit frame
        self._frame_start = self.clock()

    def __repr__(self):
        return (f"Profiler(root_label={self.root_label!r}, depth={self.depth}, "
                f"frames={self.frame_count}, enabled={self.enabled})")

    @property
    def depth(self) -> int:
        """Number of currently open regions."""
        return len(self.stack)

    @property
    def has_completed_frame(self) -> bool:
        return self.last_completed_tree is not None

    # ------------------------------------------------------------------ #
    # Regions
    # ------------------------------------------------------------------ #
    def enter(self, name: str) -> ProfileGuard:
        """
        Enter region `name` and return a guard that leaves it on exit.

            with profiler.enter("physics"):
                ...
        """
        if not self.enabled:
            return ProfileGuard(self)
        entry = self.stack.open(self.current_tree, name, self.clock())
        entry.guard = ProfileGuard(self, entry)
        return entry.guard

    def enter_noguard(self, name: str):
        """Enter region `name`. The caller is responsible for the matching `leave()`."""
        if not self.enabled:
            return
        self.stack.open(self.current_tree, name, self.clock())

    def leave(self):
        """
        Leave the innermost open region.

        Raises:
            UnbalancedLeaveError: If no region is open (strict mode).
        """
        if not self.enabled:
            return
        if not self.stack:
            self._misuse(UnbalancedLeaveError("leave called with no open region"))
            return
        self.stack.close(self.clock())

    def _release(self, guard: ProfileGuard, unwinding: bool):
        if guard.released:
            return
        pos = self.stack.index_of(guard.entry)
        if pos < 0:
            guard.released = True
            return
        inner = self.stack.names()[pos + 1:]
        if inner:
            if self.strict and not unwinding:
                raise UnbalancedLeaveError(
                    f"region {guard.entry.node.name!r} closed while inner region(s) "
                    f"are still open: {' > '.join(inner)}")
            logger.warning("Closing %d unclosed region(s) inside %r: %s",
                           len(inner), guard.entry.node.name, " > ".join(inner))
        now = self.clock()
        for _ in range(len(inner) + 1):
            self.stack.close(now)

    # ------------------------------------------------------------------ #
    # Frames
    # ------------------------------------------------------------------ #
    def start_frame(self):
        """
        Begin a new frame with an empty tree.

        Raises:
            FrameBoundaryError: If regions are still open (strict mode). In
                non-strict mode the open regions are discarded.
        """
        if not self.enabled:
            return
        if self.stack:
            self._misuse(FrameBoundaryError("start_frame", self.stack.names()))
            self.stack.clear()
        self.current_tree = TimerNode(self.root_label)
        self._frame_start = self.clock()

    def end_frame(self):
        """
        Finish the frame and make its tree the last completed snapshot.

        Raises:
            FrameBoundaryError: If regions are still open (strict mode). The
                previous snapshot is kept in either mode.
        """
        if not self.enabled:
            return
        if self.stack:
            self._misuse(FrameBoundaryError("end_frame", self.stack.names()))
            return
        now = self.clock()
        root = self.current_tree
        root.self_duration = now - self._frame_start
        root.calls = 1

        self.last_completed_tree = root
        self.current_tree = TimerNode(self.root_label)
        self._frame_start = now
        self.frame_count += 1
        logger.debug("Frame %d of %r finished in %dns", self.frame_count, self.root_label, root.self_duration)

    # ------------------------------------------------------------------ #
    # Reporting
    # ------------------------------------------------------------------ #
    def snapshot(self) -> TimerNode:
        """
        Root of the last completed frame.

        Raises:
            NoCompletedFrameError: If no frame has ended yet.
        """
        if self.last_completed_tree is None:
            raise NoCompletedFrameError(f"no completed frame for {self.root_label!r}")
        return self.last_completed_tree

    def report(self) -> Optional[TreeReport]:
        """Structured report of the last completed frame, or None before the first one."""
        if self.last_completed_tree is None:
            return None
        return build_report(self.last_completed_tree, self.root_label)

    def print_timing(self, file=None) -> bool:
        """
        Print the last completed frame's timing tree.

        Args:
            file: Text stream to write to. Defaults to stdout.

        Returns:
            bool: False if there was no completed frame to print.
        """
        report = self.report()
        if report is None:
            logger.debug("No completed frame to print for %r", self.root_label)
            return False
        print(report.format(), end="", file=file)
        return True

    # ------------------------------------------------------------------ #
    # Enable / disable
    # ------------------------------------------------------------------ #
    def enable(self):
        self.enabled = True

    def disable(self):
        """All calls until `enable` will do nothing."""
        self.enabled = False

    def toggle(self):
        self.enabled = not self.enabled

    def _misuse(self, error: ProfilerError):
        if self.strict:
            raise error
        logger.warning("%s", error)
