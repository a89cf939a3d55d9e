import argparse
import os
import sys
from types import SimpleNamespace
from typing import Optional

import yaml

def load_config(mode: str, config_path: Optional[str], config_dir: str = "configs"):
    """
    Load the demo config from YAML files.

    Layering (lowest → highest): `base.yaml`, `modes/<mode>.yaml`, `config_path`.
    """
    cfg = {}

    # base defaults
    with open(os.path.join(config_dir, "base.yaml")) as f:
        cfg.update(yaml.safe_load(f) or {})

    # mode defaults (workload tree, instrumentation style)
    with open(os.path.join(config_dir, "modes", f"{mode}.yaml")) as f:
        cfg.update(yaml.safe_load(f) or {})

    # config overrides
    if config_path:
        with open(config_path) as f:
            cfg.update(yaml.safe_load(f) or {})

    return cfg

def merge_cli(
        cfg: dict,
        cli: argparse.Namespace,
        unknown_cli: list[str],
        argv: list[str] | None = None):
    """
    Merge precedence (lowest → highest):
      1. cfg dict   (already contains YAML values)
      2. explicit *known* CLI flags
      3. key/value pairs given in `unknown_cli`, as `--key value` or `--key=value`
    """
    if argv is None:                    # allows easier unit-testing
        argv = sys.argv[1:]

    explicit = _explicit_cli_keys(argv)

    # known flags first
    for k, v in vars(cli).items():
        if k in explicit or k not in cfg:
            cfg[k] = v

    # unknown flags come as ["--frames", "30", "--print_interval=10"]
    key = None
    for tok in unknown_cli:
        if tok.startswith("--"):
            key = tok.lstrip("-")
            if "=" in key:
                key, value = key.split("=", 1)
                cfg[key] = yaml.safe_load(value)
                key = None
        elif key is not None:
            cfg[key] = yaml.safe_load(tok)
    return SimpleNamespace(**cfg)

def _explicit_cli_keys(argv: list[str]) -> set[str]:
    """
    Return the set of `--flag` names that **actually appeared**
    on the command line (ignores values).
    """
    keys = set()
    for tok in argv:
        if tok.startswith("--"):
            key = tok.lstrip("-")
            # strip any trailing "=value" (handled by `prog --frames=30`)
            key = key.split("=", 1)[0]
            keys.add(key)
    return keys
