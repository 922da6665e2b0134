"""Centralized path management for svc.

State (launch records, default config) lives under a single base directory.
The base directory can be overridden with the SVC_HOME environment variable.

Default locations:
- Linux/macOS: ~/.svc
- Windows: %USERPROFILE%\\.svc
"""

import os
import sys
from pathlib import Path

ENV_VAR = "SVC_HOME"
CONFIG_ENV_VAR = "SVC_CONFIG"

CONFIG_FILENAMES = ("services.yaml", "services.toml")


def get_svc_home() -> Path:
    """Get the base directory for all svc data.

    Resolution order:
    1. SVC_HOME environment variable (if set)
    2. Platform default (~/.svc)
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()

    return Path.home() / ".svc"


def get_run_path() -> Path:
    """Get the directory holding launch records."""
    return get_svc_home() / "run"


def get_program_dir() -> Path:
    """Get the directory of the running svc program."""
    return Path(sys.argv[0]).resolve().parent


def get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    paths: list[Path] = []
    if env_config := os.environ.get(CONFIG_ENV_VAR):
        paths.append(Path(env_config))
    paths.extend(Path(name) for name in CONFIG_FILENAMES)
    home = get_svc_home()
    paths.extend(home / name for name in CONFIG_FILENAMES)
    # Older installs kept services.yaml beside the program itself
    paths.append(get_program_dir() / CONFIG_FILENAMES[0])
    return paths
