"""Application configuration helpers."""

from __future__ import annotations

from .drive import DriveConfig, get_drive_config
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig
from .logging import configure_logging

__all__ = [
    "ConfigurationError",
    "DriveConfig",
    "RateLimit",
    "ResilienceConfig",
    "configure_logging",
    "get_drive_config",
]
