"""JSON encoding for configuration values.

Values are flattened to plain JSON trees (``to_plain``) and rebuilt from the
target type's annotations (``from_plain``). Supported shapes:
  * dataclasses (recursively, driven by their type hints)
  * classes with ``to_dict()`` / ``from_dict(data)``
  * dict (str keys), list, tuple, set/frozenset (stored as sorted arrays), Optional/Union, Enum, Path
  * str, int, float, bool, None

Encoded output is key-sorted, so identical values give identical bytes.
"""

from __future__ import annotations

import dataclasses
import json
import types
import typing
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union, get_args, get_origin, get_type_hints

_UNION_TYPES: tuple = (Union,)
if hasattr(types, "UnionType"):
    _UNION_TYPES = (Union, types.UnionType)

_NONE_TYPE = type(None)


def to_plain(value: Any) -> Any:
    """Convert ``value`` into a tree of JSON-compatible builtins."""

    if hasattr(value, "to_dict") and not isinstance(value, type):
        return to_plain(value.to_dict())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    # Enum before str/int: str- and int-Enums are also instances of those.
    if isinstance(value, Enum):
        return to_plain(value.value)
    if isinstance(value, Path):
        return str(value)
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, dict):
        out: Dict[str, Any] = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError(f"Config dict keys must be str, got {type(k).__name__}")
            out[k] = to_plain(v)
        return out
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, (set, frozenset)):
        # Sorted so repeated saves stay byte-identical under hash randomisation.
        return sorted((to_plain(v) for v in value), key=lambda v: json.dumps(v, sort_keys=True))
    raise TypeError(f"Unsupported config value type: {type(value).__name__}")


def _field_types(tp: type) -> Dict[str, Any]:
    try:
        return get_type_hints(tp)
    except NameError:
        # String annotations naming function-local classes cannot be evaluated;
        # keep whatever field types are real objects.
        return {f.name: f.type for f in dataclasses.fields(tp)}


def _from_dataclass(data: Any, tp: type) -> Any:
    if not isinstance(data, dict):
        raise TypeError(f"Expected an object for {tp.__name__}, got {type(data).__name__}")
    hints = _field_types(tp)
    kwargs = {}
    for f in dataclasses.fields(tp):
        # Missing keys keep the dataclass default; unknown keys are ignored.
        if f.init and f.name in data:
            ftype = hints.get(f.name, Any)
            if isinstance(ftype, str):
                raise TypeError(f"Cannot resolve annotation {ftype!r} of {tp.__name__}.{f.name}")
            kwargs[f.name] = from_plain(data[f.name], ftype)
    return tp(**kwargs)


def _from_union(data: Any, args: tuple) -> Any:
    if data is None and _NONE_TYPE in args:
        return None
    errors = []
    for arg in args:
        if arg is _NONE_TYPE:
            continue
        try:
            return from_plain(data, arg)
        except (TypeError, ValueError) as e:
            errors.append(str(e))
    raise TypeError(f"Value {data!r} matches no member of the union: {'; '.join(errors)}")


def _from_tuple(data: Any, args: tuple) -> tuple:
    if not isinstance(data, (list, tuple)):
        raise TypeError(f"Expected an array, got {type(data).__name__}")
    if not args:
        return tuple(data)
    if len(args) == 2 and args[1] is Ellipsis:
        return tuple(from_plain(x, args[0]) for x in data)
    if len(args) != len(data):
        raise ValueError(f"Expected {len(args)} items, got {len(data)}")
    return tuple(from_plain(x, a) for x, a in zip(data, args))


def from_plain(data: Any, tp: Any) -> Any:
    """Rebuild a value of type ``tp`` from a plain JSON tree.

    Raises ``TypeError``/``ValueError`` when ``data`` does not fit ``tp``.
    """

    if tp is Any or tp is object:
        return data

    origin = get_origin(tp)
    args = get_args(tp)

    if origin in _UNION_TYPES:
        return _from_union(data, args)
    if origin is tuple:
        return _from_tuple(data, args)
    if origin is list:
        if not isinstance(data, list):
            raise TypeError(f"Expected an array, got {type(data).__name__}")
        item_tp = args[0] if args else Any
        return [from_plain(x, item_tp) for x in data]
    if origin in (set, frozenset):
        if not isinstance(data, list):
            raise TypeError(f"Expected an array, got {type(data).__name__}")
        item_tp = args[0] if args else Any
        return origin(from_plain(x, item_tp) for x in data)
    if origin is dict:
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object, got {type(data).__name__}")
        val_tp = args[1] if len(args) == 2 else Any
        return {k: from_plain(v, val_tp) for k, v in data.items()}
    if origin is typing.Literal:
        if data not in args:
            raise ValueError(f"{data!r} is not one of {args!r}")
        return data

    if not isinstance(tp, type):
        raise TypeError(f"Unsupported config field type: {tp!r}")

    if hasattr(tp, "from_dict"):
        return tp.from_dict(data)
    if dataclasses.is_dataclass(tp):
        return _from_dataclass(data, tp)
    if issubclass(tp, Enum):
        return tp(data)
    if tp is Path:
        if not isinstance(data, str):
            raise TypeError(f"Expected a path string, got {type(data).__name__}")
        return Path(data)
    if tp is _NONE_TYPE:
        if data is not None:
            raise TypeError(f"Expected null, got {type(data).__name__}")
        return None
    if tp is float:
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            raise TypeError(f"Expected a number, got {type(data).__name__}")
        return float(data)
    if tp is int:
        if isinstance(data, bool) or not isinstance(data, int):
            raise TypeError(f"Expected an integer, got {type(data).__name__}")
        return data
    if tp in (str, bool):
        if not isinstance(data, tp):
            raise TypeError(f"Expected {tp.__name__}, got {type(data).__name__}")
        return data
    if tp in (dict, list):
        if not isinstance(data, tp):
            raise TypeError(f"Expected {tp.__name__}, got {type(data).__name__}")
        return data
    if tp in (set, frozenset):
        if not isinstance(data, list):
            raise TypeError(f"Expected an array, got {type(data).__name__}")
        return tp(data)
    if tp is tuple:
        return _from_tuple(data, ())
    raise TypeError(f"Unsupported config field type: {tp.__name__}")


def encode(value: Any) -> bytes:
    txt = json.dumps(to_plain(value), indent=2, sort_keys=True, ensure_ascii=False, allow_nan=False)
    return (txt + "\n").encode("utf-8")


def decode(raw: bytes, tp: Any) -> Any:
    # UnicodeDecodeError and JSONDecodeError are both ValueError subclasses.
    data = json.loads(raw.decode("utf-8"))
    return from_plain(data, tp)
