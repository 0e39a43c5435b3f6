"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a setting (usually a ``DRIVELISTING_*`` variable) is malformed."""
