from __future__ import annotations

import dataclasses
from typing import Any, Generic, Optional, Type, TypeVar

T = TypeVar("T")


class ConfigCell(Generic[T]):
    """Shared, mutable handle to a configuration value.

    The application and :class:`~appconfig.manager.AppConfigManager` hold the
    same cell. Loading replaces what the cell holds, never the cell itself, so
    every holder sees the new value.

    There is no locking. If several threads touch the cell, synchronize
    around ``save()``/``load()`` yourself.
    """

    def __init__(self, value: T, value_type: Optional[Type[T]] = None) -> None:
        self._value = value
        self.value_type: Type[T] = value_type if value_type is not None else type(value)

    @classmethod
    def default(cls, value_type: Type[T]) -> "ConfigCell[T]":
        return cls(value_type(), value_type)

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self._value = value

    def update(self, **changes: Any) -> None:
        """Replace the held dataclass value with a copy carrying ``changes``."""
        if not dataclasses.is_dataclass(self._value):
            raise TypeError(f"update() needs a dataclass value, got {type(self._value).__name__}")
        self._value = dataclasses.replace(self._value, **changes)

    def __repr__(self) -> str:
        return f"ConfigCell({self._value!r})"
