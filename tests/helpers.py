class FakeClock:
    """
    Manually advanced nanosecond clock.

    Time only moves when a test calls `advance`, so any number of reads
    between two advances return the same timestamp.
    """
    def __init__(self, start=1_000):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ns):
        self.now += ns
        return self.now


def run_region(profiler, clock, name, ns, children=()):
    """Enter `name`, spend `ns` of own time, run `children` as (name, ns, children) tuples, leave."""
    profiler.enter_noguard(name)
    clock.advance(ns)
    for child in children:
        run_region(profiler, clock, *child)
    profiler.leave()
