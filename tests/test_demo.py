import os

import pytest

import demo

CONFIG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "configs")


@pytest.fixture(autouse=True)
def _no_sleep(mocker, monkeypatch):
    # regions cost nothing; the tree shape is what matters here
    mocker.patch("runners.frame_runner.time.sleep")
    for key in ("HPROF_ENABLED", "HPROF_STRICT", "HPROF_ROOT_LABEL", "RUNS_DIR"):
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_parse_args_merges_yaml_and_cli():
    args = demo.parse_args(["--mode", "basic", "--config_dir", CONFIG_DIR, "--frames", "3", "--print_interval=2"])

    assert args.mode == "basic"
    assert args.frames == 3
    assert args.print_interval == 2
    assert args.root_label == "main loop"
    assert [r["name"] for r in args.regions] == ["setup", "physics", "render"]

def test_parse_args_env_overrides_yaml(monkeypatch):
    monkeypatch.setenv("HPROF_ROOT_LABEL", "render thread")
    args = demo.parse_args(["--config_dir", CONFIG_DIR])
    assert args.root_label == "render thread"

@pytest.mark.parametrize("mode", ["basic", "explicit", "noguard", "implicit"])
def test_main_runs_every_mode(mode, capsys):
    report = demo.main(["--mode", mode, "--config_dir", CONFIG_DIR, "--frames", "2"])

    out = capsys.readouterr().out
    assert out.count("Timing information for main loop:") == 2
    assert report.get("setup") is not None
    if mode != "basic":
        assert report.get("render", "gpu wait") is not None

def test_main_writes_csv(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("RUNS_DIR", str(tmp_path))
    demo.main(["--config_dir", CONFIG_DIR, "--frames", "3", "--save_csv", "true",
               "--print_timing", "false", "--run_name", "smoke"])

    run_dir = tmp_path / "main_loop" / "smoke"
    assert (run_dir / "progress.csv").exists()
    assert (run_dir / "cmd.txt").exists()
    assert f"Timings written to {run_dir}" in capsys.readouterr().out
