"""Exceptions raised by :mod:`appconfig`.

Every failure of :meth:`AppConfigManager.save` / :meth:`AppConfigManager.load`
surfaces as one of these. The original exception is chained (``__cause__``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class AppConfigError(Exception):
    """Base class for all appconfig errors."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class InvalidIdentifier(AppConfigError, ValueError):
    """An app/org name or filename is empty or not filesystem-safe."""


class DirectoryCreationFailed(AppConfigError):
    pass


class SerializationFailed(AppConfigError):
    pass


class WriteFailed(AppConfigError):
    pass


class ReadFailed(AppConfigError):
    pass


class DeserializationFailed(AppConfigError):
    """The config file exists but does not match the expected structure."""
