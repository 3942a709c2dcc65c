from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .errors import InvalidIdentifier

LINUX = "linux"
MACOS = "macos"
WINDOWS = "windows"


def _system_from_sys_platform(name: str) -> str:
    if name.startswith(("win32", "cygwin")):
        return WINDOWS
    if name == "darwin":
        return MACOS
    return LINUX


@dataclass(frozen=True)
class PlatformInfo:
    """The inputs needed to locate the per-user data directory.

    Tests build one by hand; ``PlatformInfo.current()`` snapshots the running
    process.
    """

    system: str
    environ: Mapping[str, str] = field(default_factory=dict, hash=False)
    home: Path = field(default_factory=Path.home)

    @classmethod
    def current(cls) -> "PlatformInfo":
        return cls(
            system=_system_from_sys_platform(sys.platform),
            environ=dict(os.environ),
            home=Path.home(),
        )


def base_data_dir(platform: PlatformInfo) -> Path:
    """Return the platform's per-user data root.

    Linux:   $XDG_DATA_HOME, else ~/.local/share
    macOS:   ~/Library/Application Support
    Windows: %LOCALAPPDATA%, else ~/AppData/Local
    """

    home = Path(platform.home)
    if platform.system == WINDOWS:
        local = platform.environ.get("LOCALAPPDATA")
        if local:
            return Path(local)
        return home / "AppData" / "Local"
    if platform.system == MACOS:
        return home / "Library" / "Application Support"

    # XDG says relative values are invalid and must be ignored.
    xdg = platform.environ.get("XDG_DATA_HOME")
    if xdg and os.path.isabs(xdg):
        return Path(xdg)
    return home / ".local" / "share"


def validate_identifier(value: object, what: str) -> str:
    if not isinstance(value, str):
        raise InvalidIdentifier(f"{what} must be a string, got {type(value).__name__}")
    if not value.strip():
        raise InvalidIdentifier(f"{what} must not be empty")
    if value in (".", ".."):
        raise InvalidIdentifier(f"{what} must not be {value!r}")
    # Windows reserves <>:"|?* (":" also opens an alternate data stream).
    forbidden = {"/", "\\", "\x00", "<", ">", ":", "\"", "|", "?", "*", os.sep}
    if os.altsep:
        forbidden.add(os.altsep)
    bad = sorted(ch for ch in forbidden if ch in value)
    if bad:
        raise InvalidIdentifier(f"{what} contains forbidden characters {bad!r}: {value!r}")
    return value


def config_dir(base: Path, org_name: str, app_name: str) -> Path:
    return Path(base) / org_name / app_name
