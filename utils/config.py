import os
from dotenv import load_dotenv

_TRUE = {"1", "true", "yes", "on"}


def _as_bool(value):
    if value is None:
        return None
    return value.strip().lower() in _TRUE


def load_profiler_env(dotenv_path=None):
    """Load profiler settings from `.env` / environment variables. Unset keys are None."""
    load_dotenv(dotenv_path, override=True)

    return {
        "enabled": _as_bool(os.getenv("HPROF_ENABLED")),
        "strict": _as_bool(os.getenv("HPROF_STRICT")),
        "root_label": os.getenv("HPROF_ROOT_LABEL"),
        "runs_root": os.getenv("RUNS_DIR"),
    }


def apply_env_overrides(cfg, env):
    """Overlay every environment setting that is set onto the `cfg` dict."""
    for key, value in env.items():
        if value is not None:
            cfg[key] = value
    return cfg
