"""Shape checks for decoded JSON and TOML.

Payloads from GitHub and from ``ghrel.toml`` are ``object`` until proven
otherwise. Each getter returns None when the key is missing or has the wrong
type, so parsers can skip malformed entries instead of failing on them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeGuard, cast

type StrDict = dict[str, object]
type ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    return isinstance(obj, dict) and all(
        isinstance(key, str) for key in cast(dict[object, object], obj)
    )


def as_str_dict(obj: object) -> StrDict | None:
    return obj if is_str_dict(obj) else None


def as_obj_list(obj: object) -> ObjList | None:
    return cast(ObjList, obj) if isinstance(obj, list) else None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Stripped string value; blank strings count as missing."""
    value = table.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def get_int(table: Mapping[str, object], key: str) -> int | None:
    # JSON true/false decode to bool, which is an int subclass.
    value = table.get(key)
    return value if isinstance(value, int) and not isinstance(value, bool) else None


def get_float(table: Mapping[str, object], key: str) -> float | None:
    value = table.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def get_list(table: Mapping[str, object], key: str) -> ObjList | None:
    return as_obj_list(table.get(key))
