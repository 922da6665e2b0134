"""Configuration module for svc."""

from svc.config.loader import find_config_path, load_config
from svc.config.models import ServiceConfig, ServiceType, SvcConfig

__all__ = [
    "ServiceConfig",
    "ServiceType",
    "SvcConfig",
    "find_config_path",
    "load_config",
]
