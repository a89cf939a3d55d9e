import io

import pytest

from hprof.node import TimerNode
from hprof.report import build_report, format_report, percentage
from tests.helpers import run_region


@pytest.fixture
def completed(profiler, clock):
    """physics 60ns (collision 30ns inside), render 40ns; frame 100ns."""
    profiler.start_frame()
    run_region(profiler, clock, "physics", 30, [("collision", 30, ())])
    run_region(profiler, clock, "render", 40)
    profiler.end_frame()
    return profiler


def test_percentages_are_relative_to_parent(completed):
    report = completed.report()
    assert report.total_ns == 100
    assert report.get().percentage == 100.0
    assert report.get("physics").percentage == 60.0
    assert report.get("render").percentage == 40.0
    # 30ns of physics' 60ns, not 30% of the frame
    assert report.get("physics", "collision").percentage == 50.0


def test_golden_text(completed):
    out = io.StringIO()
    assert completed.print_timing(file=out) is True
    assert out.getvalue() == (
        "Timing information for main loop:\n"
        "  physics - 60ns (60.0%)\n"
        "    collision - 30ns (50.0%)\n"
        "  render - 40ns (40.0%)\n"
    )


def test_print_timing_defaults_to_stdout(completed, capsys):
    completed.print_timing()
    assert capsys.readouterr().out.startswith("Timing information for main loop:\n  physics - 60ns")


def test_reporting_is_idempotent(completed, capsys):
    first = completed.report()
    completed.print_timing()
    completed.print_timing()
    out = capsys.readouterr().out
    half = len(out) // 2

    assert completed.report() == first
    assert out[:half] == out[half:]
    assert completed.snapshot().children["physics"].self_duration == 60


def test_rows_carry_depth_path_and_calls(completed):
    rows = completed.report().rows
    assert [(r.path, r.depth, r.calls) for r in rows] == [
        ((), 0, 1),
        (("physics",), 1, 1),
        (("physics", "collision"), 2, 1),
        (("render",), 1, 1),
    ]


def test_to_records_skips_root(completed):
    records = completed.report().to_records()
    assert records[0] == {
        "path": "physics",
        "depth": 1,
        "duration_ns": 60,
        "percentage": 60.0,
        "calls": 1,
    }
    assert [r["path"] for r in records] == ["physics", "physics/collision", "render"]


def test_default_float_formatting():
    root = TimerNode("frame")
    root.self_duration = 3
    root.child("third").add_sample(1)
    assert format_report(root) == "Timing information for frame:\n  third - 1ns (33.33333333333333%)\n"


def test_build_report_label_override():
    root = TimerNode("root")
    root.self_duration = 10
    assert build_report(root, "physics thread").root_label == "physics thread"
    assert build_report(root).root_label == "root"


def test_percentage_above_hundred_is_reported_as_is():
    assert percentage(150, 100) == 150.0
