"""Key ordering, object sorting and structural equality of JSON values."""

from __future__ import annotations

import string
from enum import Enum, auto
from typing import Any

__all__ = ["compare_keys", "sort_object", "json_equal"]

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _fold(key: str, case_sensitive: bool) -> str:
    return key if case_sensitive else key.translate(_ASCII_LOWER)


def compare_keys(first: str, second: str, case_sensitive: bool = False) -> int:
    """Order two member names: negative, zero or positive.

    Without ``case_sensitive`` ASCII letters compare as lower case.
    """
    a = _fold(first, case_sensitive)
    b = _fold(second, case_sensitive)
    return (a > b) - (a < b)


def sort_object(obj: dict, case_sensitive: bool = False) -> None:
    """Reorder the members of ``obj`` in place by name."""
    if not isinstance(obj, dict):
        raise TypeError(f"expected a JSON object, got {type(obj).__name__}")
    ordered = sorted(obj.items(), key=lambda item: _fold(item[0], case_sensitive))
    obj.clear()
    obj.update(ordered)


class _Kind(Enum):
    NULL = auto()
    TRUE = auto()
    FALSE = auto()
    NUMBER = auto()
    STRING = auto()
    ARRAY = auto()
    OBJECT = auto()


def _kind(value: Any) -> _Kind:
    if value is None:
        return _Kind.NULL
    if value is True:
        return _Kind.TRUE
    if value is False:
        return _Kind.FALSE
    if isinstance(value, (int, float)):
        return _Kind.NUMBER
    if isinstance(value, str):
        return _Kind.STRING
    if isinstance(value, list):
        return _Kind.ARRAY
    if isinstance(value, dict):
        return _Kind.OBJECT
    raise TypeError(f"{type(value).__name__} is not a JSON value")


def json_equal(first: Any, second: Any, case_sensitive: bool = False) -> bool:
    """Return whether two JSON values are structurally equal.

    Member order is ignored; member names are matched ignoring ASCII case
    unless ``case_sensitive`` is true. String values always compare exactly.
    """
    kind = _kind(first)
    if kind is not _kind(second):
        return False
    if kind in (_Kind.NUMBER, _Kind.STRING):
        return first == second
    if kind is _Kind.ARRAY:
        return len(first) == len(second) and all(
            json_equal(a, b, case_sensitive) for a, b in zip(first, second)
        )
    if kind is _Kind.OBJECT:
        if len(first) != len(second):
            return False

        def by_name(item: tuple[str, Any]) -> str:
            return _fold(item[0], case_sensitive)

        pairs = zip(sorted(first.items(), key=by_name), sorted(second.items(), key=by_name))
        return all(
            compare_keys(key_a, key_b, case_sensitive) == 0
            and json_equal(value_a, value_b, case_sensitive)
            for (key_a, value_a), (key_b, value_b) in pairs
        )
    return True