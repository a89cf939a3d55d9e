"""
Utility functions for the project.

This module provides configuration loading, environment overrides and the
timing logger used by the demo runners.
"""
# Configuration utilities
from .arg_tools import load_config, merge_cli
from .config import apply_env_overrides, load_profiler_env

# Logging utilities
from .logger import Logger

__all__ = [
    # Configuration utilities
    'load_config',
    'merge_cli',
    'load_profiler_env',
    'apply_env_overrides',

    # Logging utilities
    'Logger'
]
