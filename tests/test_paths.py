from __future__ import annotations

from pathlib import Path

import pytest

from appconfig.errors import InvalidIdentifier
from appconfig.paths import PlatformInfo, _system_from_sys_platform, base_data_dir, validate_identifier


def test_linux_prefers_xdg_data_home(tmp_path: Path) -> None:
    p = PlatformInfo("linux", {"XDG_DATA_HOME": str(tmp_path / "xdg")}, tmp_path / "home")
    assert base_data_dir(p) == tmp_path / "xdg"


def test_linux_falls_back_to_local_share(tmp_path: Path) -> None:
    home = tmp_path / "home"
    assert base_data_dir(PlatformInfo("linux", {}, home)) == home / ".local" / "share"
    # Empty and relative values are ignored.
    assert base_data_dir(PlatformInfo("linux", {"XDG_DATA_HOME": ""}, home)) == home / ".local" / "share"
    assert base_data_dir(PlatformInfo("linux", {"XDG_DATA_HOME": "rel/dir"}, home)) == home / ".local" / "share"


def test_macos_uses_application_support(tmp_path: Path) -> None:
    p = PlatformInfo("macos", {"XDG_DATA_HOME": "/ignored"}, tmp_path)
    assert base_data_dir(p) == tmp_path / "Library" / "Application Support"


def test_windows_uses_local_app_data(tmp_path: Path) -> None:
    p = PlatformInfo("windows", {"LOCALAPPDATA": r"C:\Users\Alice\AppData\Local"}, tmp_path)
    assert base_data_dir(p) == Path(r"C:\Users\Alice\AppData\Local")
    assert base_data_dir(PlatformInfo("windows", {}, tmp_path)) == tmp_path / "AppData" / "Local"


def test_sys_platform_mapping() -> None:
    assert _system_from_sys_platform("win32") == "windows"
    assert _system_from_sys_platform("cygwin") == "windows"
    assert _system_from_sys_platform("darwin") == "macos"
    assert _system_from_sys_platform("linux") == "linux"
    assert _system_from_sys_platform("freebsd13") == "linux"


@pytest.mark.parametrize(
    "bad",
    ["", "   ", ".", "..", "a/b", "a\\b", "nul\x00", "c:stream", "a<b", "a>b", "say\"hi\"", "a|b", "why?", "star*", 42, None],
)
def test_validate_identifier_rejects(bad) -> None:
    with pytest.raises(InvalidIdentifier):
        validate_identifier(bad, "app_name")


def test_validate_identifier_accepts_plain_names() -> None:
    assert validate_identifier("sumibi-yakitori", "org_name") == "sumibi-yakitori"
    assert validate_identifier("My App 2", "app_name") == "My App 2"
