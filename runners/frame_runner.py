import time

from hprof import local
from runners.workload import build_regions


class FrameRunner:
    """
    Runs a synthetic workload frame by frame under a profiler.

    Subclasses decide how regions are bracketed (`_run_region`).
    """
    def __init__(self, args, profiler, logger=None, sleep=None):
        """
        Initialize the runner.

        Args:
            args: Arguments with `frames`, `regions`, `print_timing`,
                `print_interval` and `log_interval`
            profiler: Profiler that records the frames
            logger: Optional `utils.logger.Logger` receiving each logged frame
            sleep: Function used to simulate work, taking seconds. Defaults to time.sleep
        """
        self.args = args
        self.profiler = profiler
        self.logger = logger
        self.sleep = sleep or time.sleep
        self.regions = build_regions(getattr(args, "regions", []))

    def run(self):
        """
        Run `args.frames` frames.

        Returns:
            TreeReport: Report of the last completed frame (None if no frame ran).
        """
        print_interval = getattr(self.args, "print_interval", 1) or 1
        log_interval = getattr(self.args, "log_interval", 1) or 1

        for frame in range(1, self.args.frames + 1):
            self._start_frame()
            for region in self.regions:
                self._run_region(region)
            self._end_frame()

            # this would usually depend on a debug flag
            if getattr(self.args, "print_timing", False) and frame % print_interval == 0:
                self.profiler.print_timing()

            if self.logger is not None and frame % log_interval == 0:
                self.logger.log_frame(self.profiler.report(), frame)

        return self.profiler.report()

    def _start_frame(self):
        self.profiler.start_frame()

    def _end_frame(self):
        self.profiler.end_frame()

    def _work(self, region):
        if region.sleep_ms > 0:
            self.sleep(region.sleep_ms / 1000.0)

    def _run_region(self, region):
        raise NotImplementedError


class GuardRunner(FrameRunner):
    """Brackets regions with `with profiler.enter(...)`."""
    def _run_region(self, region):
        with self.profiler.enter(region.name):
            self._work(region)
            for child in region.children:
                self._run_region(child)


class NoGuardRunner(FrameRunner):
    """Brackets regions with explicit `enter_noguard` / `leave` pairs."""
    def _run_region(self, region):
        self.profiler.enter_noguard(region.name)
        self._work(region)
        for child in region.children:
            self._run_region(child)
        self.profiler.leave()


class ImplicitRunner(FrameRunner):
    """
    Uses the calling thread's implicit profiler through `hprof.local`.

    A given profiler is installed as the thread's profiler so the frames it
    records stay inspectable by the caller. `run` must be called from the
    thread that created the runner.
    """
    def __init__(self, args, profiler=None, logger=None, sleep=None):
        if profiler is None:
            profiler = local.profiler()
        else:
            local.set_profiler(profiler)
        super().__init__(args, profiler, logger, sleep)

    def _start_frame(self):
        local.start_frame()

    def _end_frame(self):
        local.end_frame()

    def _run_region(self, region):
        with local.enter(region.name):
            self._work(region)
            for child in region.children:
                self._run_region(child)
