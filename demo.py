import argparse
import logging

from hprof import Profiler
from runners import RUNNER_REGISTRY
from utils.arg_tools import load_config, merge_cli
from utils.config import apply_env_overrides, load_profiler_env
from utils.logger import Logger


def _str2bool(value):
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def parse_args(argv=None):
    """
    CLI for the profiler demo.
    Additional flags are parsed from YAML and can be overridden via CLI.
    """
    p = argparse.ArgumentParser("Profile a synthetic frame loop.")
    p.add_argument("--mode", choices=sorted(RUNNER_REGISTRY),
                   default="explicit", help="Instrumentation style and workload")
    p.add_argument("--run_name", type=str, default=None,
                   help="Optional run name for logging")
    p.add_argument("--config", type=str, default=None,
                   help="Optional YAML file with overrides")
    p.add_argument("--config_dir", type=str, default="configs",
                   help="Directory holding base.yaml and modes/")

    # frame loop
    p.add_argument("--frames", type=int, default=1,
                   help="Number of frames to run")
    p.add_argument("--print_interval", type=int, default=1,
                   help="Frames between timing printouts")
    p.add_argument("--print_timing", type=_str2bool, default=True,
                   help="Print the timing tree every print_interval frames")

    # profiler
    p.add_argument("--root_label", type=str, default="main loop",
                   help="Label of the frame root")
    p.add_argument("--strict", type=_str2bool, default=True,
                   help="Raise on unbalanced enter/leave; false logs a warning instead")

    # logging
    p.add_argument("--log_interval", type=int, default=1,
                   help="Frames between logged reports")
    p.add_argument("--save_csv", type=_str2bool, default=False,
                   help="Write per-frame timings to progress.csv")
    p.add_argument("--use_tensorboard", type=_str2bool, default=False,
                   help="Write per-frame timings to TensorBoard")
    p.add_argument("--log_level", type=str, default="WARNING",
                   help="Level for library diagnostics")

    if argv is None:
        cli, unknown_cli = p.parse_known_args()
    else:
        cli, unknown_cli = p.parse_known_args(argv)
    cfg = load_config(cli.mode, cli.config, cli.config_dir) # load from YAML
    cfg = apply_env_overrides(cfg, load_profiler_env()) # override from .env
    return merge_cli(cfg, cli, unknown_cli, argv=argv) # override from CLI

def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    profiler = Profiler(args.root_label,
                        strict=args.strict,
                        enabled=getattr(args, "enabled", True))

    logger = None
    if args.save_csv or args.use_tensorboard:
        logger = Logger(run_name=args.run_name,
                        runs_root=getattr(args, "runs_root", None),
                        label=args.root_label,
                        save_csv=args.save_csv,
                        use_tensorboard=args.use_tensorboard,
                        config={k: v for k, v in vars(args).items() if k != "regions"})
        logger.add_run_command()

    runner = RUNNER_REGISTRY[args.mode](args, profiler, logger)
    report = runner.run()

    if logger is not None:
        logger.close()
        print(f"Timings written to {logger.dir_name}")
    return report


if __name__ == '__main__':
    main()
