from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pytest

from appconfig import ConfigCell


@dataclass
class _Prefs:
    theme: str = "dark"
    recent: List[str] = field(default_factory=list)


def test_default_builds_type_default() -> None:
    cell = ConfigCell.default(_Prefs)
    assert cell.get() == _Prefs()
    assert cell.value_type is _Prefs


def test_set_is_visible_to_every_holder() -> None:
    cell = ConfigCell(_Prefs())
    other = cell
    cell.set(_Prefs(theme="light"))
    assert other.value.theme == "light"


def test_update_replaces_fields() -> None:
    cell = ConfigCell(_Prefs(recent=["a"]))
    cell.update(theme="solarized")
    assert cell.value == _Prefs(theme="solarized", recent=["a"])


def test_update_requires_dataclass() -> None:
    cell = ConfigCell({"theme": "dark"})
    with pytest.raises(TypeError):
        cell.update(theme="light")
