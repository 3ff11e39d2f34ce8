"""Configuration error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""


class LocalConfigError(ConfigurationError):
    """The local ``config.json`` exists but cannot be used."""

    def __init__(self, path: Path, problem: str) -> None:
        super().__init__(f"Local config {path}: {problem}")
        self.path = path
        self.problem = problem
