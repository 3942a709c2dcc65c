from __future__ import annotations

import contextlib
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Generic, Optional, TypeVar

from . import codec
from .cell import ConfigCell
from .errors import (
    DeserializationFailed,
    DirectoryCreationFailed,
    ReadFailed,
    SerializationFailed,
    WriteFailed,
)
from .paths import PlatformInfo, base_data_dir, config_dir, validate_identifier

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONFIG_FILENAME = "config.json"


@dataclass(frozen=True, eq=False)
class AppConfigManager(Generic[T]):
    """Persist one configuration value under the user's data directory.

    The file lives at ``<base data dir>/<org_name>/<app_name>/<filename>``.
    The path is recomputed on every call, so the same (org, app) pair always
    maps to the same file for a given platform and account.

    ``load()`` on a missing file leaves the cell as it is, so whatever the
    application put there (normally the type's default) stays in effect.

    With ``auto_save=True`` the manager saves when a ``with`` block around it
    exits without an exception.
    """

    cell: ConfigCell[T]
    app_name: str
    org_name: str
    filename: str = CONFIG_FILENAME
    platform: Optional[PlatformInfo] = None
    ignore_parse_errors: bool = False
    auto_save: bool = False

    def __post_init__(self) -> None:
        validate_identifier(self.app_name, "app_name")
        validate_identifier(self.org_name, "org_name")
        validate_identifier(self.filename, "filename")

    # Builders ------------------------------------------------------------
    def with_app_name(self, value: str) -> "AppConfigManager[T]":
        return replace(self, app_name=value)

    def with_org_name(self, value: str) -> "AppConfigManager[T]":
        return replace(self, org_name=value)

    def with_filename(self, value: str) -> "AppConfigManager[T]":
        return replace(self, filename=value)

    def with_ignore_parse_errors(self, value: bool) -> "AppConfigManager[T]":
        return replace(self, ignore_parse_errors=value)

    def with_auto_save(self, value: bool) -> "AppConfigManager[T]":
        return replace(self, auto_save=value)

    # Paths ---------------------------------------------------------------
    @property
    def data(self) -> ConfigCell[T]:
        return self.cell

    def directory(self) -> Path:
        platform = self.platform if self.platform is not None else PlatformInfo.current()
        return config_dir(base_data_dir(platform), self.org_name, self.app_name)

    def path(self) -> Path:
        return self.directory() / self.filename

    # Persistence ---------------------------------------------------------
    def save(self) -> Path:
        """Write the current value to disk and return the file path.

        The value is encoded in memory first, then written to a temporary
        sibling and moved into place, so the file is never half-written.
        """

        directory = self.directory()
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationFailed(f"Cannot create config directory {directory}: {e}", directory) from e

        path = directory / self.filename
        # to_dict hooks are user code and may raise anything.
        try:
            payload = codec.encode(self.cell.get())
        except Exception as e:
            raise SerializationFailed(f"Cannot encode config for {path}: {e}", path) from e

        tmp = path.with_name(path.name + ".tmp")
        try:
            tmp.write_bytes(payload)
            os.replace(tmp, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise WriteFailed(f"Cannot write config file {path}: {e}", path) from e

        logger.debug("Saved config (%d bytes) to %s", len(payload), path)
        return path

    def load(self) -> bool:
        """Replace the cell's value with the file's content.

        Returns False (and leaves the cell alone) when there is no file yet.
        On any error the cell is left unchanged.
        """

        path = self.path()
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            logger.debug("No config file at %s; keeping current values", path)
            return False
        except OSError as e:
            raise ReadFailed(f"Cannot read config file {path}: {e}", path) from e

        # from_dict hooks are user code and may raise anything.
        try:
            value = codec.decode(raw, self.cell.value_type)
        except Exception as e:
            if self.ignore_parse_errors:
                logger.warning("Ignoring unparseable config file %s: %s", path, e)
                return False
            raise DeserializationFailed(f"Invalid config file {path}: {e}", path) from e

        self.cell.set(value)
        logger.debug("Loaded config from %s", path)
        return True

    # Context manager -----------------------------------------------------
    def __enter__(self) -> "AppConfigManager[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.auto_save and exc_type is None:
            self.save()
