"""
Meshwork exception hierarchy.

All domain-specific exceptions inherit from MeshworkError, so callers can
catch any resolution failure with a single base class while still handling
individual kinds when needed.

Hierarchy::

    MeshworkError
    ├── ParseError              - malformed manifest, solution or launch settings
    ├── ConfigError             - malformed launch configuration values
    │   └── LaunchSettingsError - invalid launchSettings.json (also a ParseError)
    └── NotFoundError           - missing manifest/project/solution or service
"""

from __future__ import annotations

from pathlib import Path


class MeshworkError(Exception):
    """Base exception for all Meshwork errors."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- Parsing -----------------------------------------------------------------


class ParseError(MeshworkError):
    """Raised when a source file is not valid structured text or has the wrong shape."""

    def __init__(self, message: str, *, path: str | Path | None = None, line: int | None = None) -> None:
        location = ""
        if path is not None:
            location = f"{path}:{line}: " if line is not None else f"{path}: "
        super().__init__(f"{location}{message}", details={"path": str(path) if path else None, "line": line})
        self.path = Path(path) if path is not None else None
        self.line = line


# --- Configuration -----------------------------------------------------------


class ConfigError(MeshworkError):
    """Raised when launch configuration values cannot be used (e.g. a bad applicationUrl)."""


class LaunchSettingsError(ParseError, ConfigError):
    """Raised when a launchSettings.json file exists but cannot be read as a launch profile document."""


# --- Lookup ------------------------------------------------------------------


class NotFoundError(MeshworkError):
    """Raised when a referenced source file or service does not exist."""

    def __init__(self, message: str, *, path: str | Path | None = None) -> None:
        super().__init__(message, details={"path": str(path) if path else None})
        self.path = Path(path) if path is not None else None
