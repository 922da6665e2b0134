"""Configuration loading from YAML or TOML files."""

import logging
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from svc.config.models import SvcConfig
from svc.config.paths import get_default_config_paths
from svc.errors import SvcDecodeError

logger = logging.getLogger(__name__)


def find_config_path(path: Path | None = None) -> Path:
    """Resolve the config file to load.

    Args:
        path: Explicit path to config file. If None, searches default locations.

    Raises:
        FileNotFoundError: If no config file is found.
    """
    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return config_path

    default_paths = get_default_config_paths()
    for default_path in default_paths:
        expanded = default_path.expanduser()
        if expanded.exists():
            return expanded

    raise FileNotFoundError(
        f"No config file found. Searched: {', '.join(str(p) for p in default_paths)}"
    )


def _parse(config_path: Path) -> Any:
    try:
        if config_path.suffix == ".toml":
            with config_path.open("rb") as f:
                return tomllib.load(f)
        with config_path.open(encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise SvcDecodeError(f"Cannot parse {config_path}: {e}") from e


def load_config(path: Path | None = None) -> SvcConfig:
    """Load service configuration from a YAML or TOML file.

    Args:
        path: Explicit path to config file. If None, searches default locations.

    Returns:
        Validated SvcConfig instance.

    Raises:
        FileNotFoundError: If no config file is found.
        SvcDecodeError: If the file cannot be parsed or fails validation.
    """
    config_path = find_config_path(path)
    logger.debug("Loading config from %s", config_path)

    raw_config = _parse(config_path)
    if raw_config is None:
        raw_config = []

    try:
        return SvcConfig.model_validate(raw_config)
    except ValidationError as e:
        raise SvcDecodeError(f"Invalid config {config_path}: {e}") from e
