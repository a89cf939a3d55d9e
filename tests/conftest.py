import pytest

from hprof import Profiler
from hprof import local
from tests.helpers import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def profiler(clock):
    return Profiler("main loop", clock=clock)


@pytest.fixture
def lenient_profiler(clock):
    return Profiler("main loop", clock=clock, strict=False)


@pytest.fixture(autouse=True)
def _reset_thread_profiler():
    # each test starts with a fresh implicit profiler on the main thread
    local.set_profiler(None)
    yield
    local.set_profiler(None)
