"""
Comfydeck exceptions module.

Contains exception classes used across multiple modules to avoid circular dependencies.
"""

from pathlib import Path


class ComfydeckError(Exception):
    """Base class for Comfydeck errors."""

    pass


class ConfigError(ComfydeckError):
    """Exception raised when a configuration file cannot be read or is invalid."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration file {path}: {reason}")


class SelectionFileError(ComfydeckError):
    """Exception raised when the manual selection file is missing or malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load selection file {path}: {reason}")
