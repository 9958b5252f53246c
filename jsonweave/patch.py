"""JSON Patch: applying and generating lists of patch operations.

Documents are plain Python values (``dict``, ``list``, ``str``, numbers,
``bool`` and ``None``). Patches are dicts with ``op``, ``path`` and, where the
operation needs them, ``value`` or ``from`` members.
"""

from __future__ import annotations

import copy
from collections import deque
from enum import Enum
from functools import cmp_to_key
from typing import Any, Iterator

from .compare import compare_keys, json_equal
from .pointer import (
    PointerError,
    encode_token,
    get_pointer,
    parse_array_index,
    split_pointer,
)

__all__ = [
    "PatchError",
    "Operation",
    "apply_patch",
    "apply_patches",
    "make_patch",
    "add_patch",
    "generate_patches",
]

_MISSING: Any = object()


class PatchError(ValueError):
    """Raised when a patch cannot be applied.

    ``code`` tells the kind of failure: 1 malformed patch list or failed
    test, 2 missing path, 3 unknown operation, 4 missing ``from``,
    5 ``from`` does not resolve, 7 missing ``value``, 9 target parent not
    found, 10 array index past the end, 11 invalid array index,
    13 nothing to remove or replace.
    """

    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.code = code


class Operation(str, Enum):
    """The operations of a JSON patch."""

    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"


def _find_member(obj: dict, name: str, case_sensitive: bool) -> str | None:
    for key in obj:
        if compare_keys(key, name, case_sensitive) == 0:
            return key
    return None


def _get(patch: Any, name: str, case_sensitive: bool) -> Any:
    if not isinstance(patch, dict):
        return _MISSING
    key = _find_member(patch, name, case_sensitive)
    return _MISSING if key is None else patch[key]


def _resolve(document: Any, pointer: str, case_sensitive: bool) -> Any:
    try:
        return get_pointer(document, pointer, case_sensitive)
    except PointerError:
        return _MISSING


def _detach(document: Any, path: str, case_sensitive: bool) -> Any:
    try:
        parent_path, token = split_pointer(path)
        parent = get_pointer(document, parent_path, case_sensitive)
    except PointerError:
        return _MISSING
    if isinstance(parent, list):
        try:
            index = parse_array_index(token)
        except PointerError:
            return _MISSING
        return parent.pop(index) if index < len(parent) else _MISSING
    if isinstance(parent, dict):
        key = _find_member(parent, token, case_sensitive)
        return _MISSING if key is None else parent.pop(key)
    return _MISSING


def _insert(document: Any, path: str, value: Any, case_sensitive: bool) -> None:
    try:
        parent_path, token = split_pointer(path)
        parent = get_pointer(document, parent_path, case_sensitive)
    except PointerError as exc:
        raise PatchError(f"cannot find the parent of {path!r}", 9) from exc
    if isinstance(parent, list):
        if token == "-":
            parent.append(value)
            return
        try:
            index = parse_array_index(token)
        except PointerError as exc:
            raise PatchError(f"invalid array index in {path!r}", 11) from exc
        if index > len(parent):
            raise PatchError(f"array index in {path!r} is past the end", 10)
        parent.insert(index, value)
    elif isinstance(parent, dict):
        key = _find_member(parent, token, case_sensitive)
        if key is not None:
            del parent[key]
        parent[token] = value
    else:
        raise PatchError(f"the parent of {path!r} is not a container", 9)


def _decode_operation(patch: Any, case_sensitive: bool) -> Operation:
    name = _get(patch, "op", case_sensitive)
    if not isinstance(name, str):
        raise PatchError("patch has no string 'op'", 3)
    try:
        return Operation(name)
    except ValueError as exc:
        raise PatchError(f"unknown operation {name!r}", 3) from exc


def _require_value(patch: Any, case_sensitive: bool) -> Any:
    value = _get(patch, "value", case_sensitive)
    if value is _MISSING:
        raise PatchError("patch has no 'value'", 7)
    return copy.deepcopy(value)


def apply_patch(document: Any, patch: Any, case_sensitive: bool = False) -> Any:
    """Apply one patch operation and return the resulting document.

    Containers are changed in place; the return value differs from
    ``document`` only when the whole document is replaced or removed
    (removal gives ``None``).
    """
    path = _get(patch, "path", case_sensitive)
    if not isinstance(path, str):
        raise PatchError("patch has no string 'path'", 2)

    operation = _decode_operation(patch, case_sensitive)
    if operation is Operation.TEST:
        actual = _resolve(document, path, case_sensitive)
        expected = _get(patch, "value", case_sensitive)
        if (
            actual is _MISSING
            or expected is _MISSING
            or not json_equal(actual, expected, case_sensitive)
        ):
            raise PatchError(f"test failed at {path!r}", 1)
        return document

    if path == "":
        if operation is Operation.REMOVE:
            return None
        if operation in (Operation.REPLACE, Operation.ADD):
            return _require_value(patch, case_sensitive)

    if operation in (Operation.REMOVE, Operation.REPLACE):
        if _detach(document, path, case_sensitive) is _MISSING:
            raise PatchError(f"nothing to {operation.value} at {path!r}", 13)
        if operation is Operation.REMOVE:
            return document

    if operation in (Operation.MOVE, Operation.COPY):
        source = _get(patch, "from", case_sensitive)
        if not isinstance(source, str):
            raise PatchError("patch has no string 'from'", 4)
        if operation is Operation.MOVE:
            value = _detach(document, source, case_sensitive)
        else:
            value = _resolve(document, source, case_sensitive)
        if value is _MISSING:
            raise PatchError(f"nothing found at {source!r}", 5)
        if operation is Operation.COPY:
            value = copy.deepcopy(value)
    else:
        value = _require_value(patch, case_sensitive)

    _insert(document, path, value, case_sensitive)
    return document


def apply_patches(document: Any, patches: Any, case_sensitive: bool = False) -> Any:
    """Apply a list of patch operations in order and return the result.

    Stops at the first failing operation; earlier changes are kept.
    """
    if not isinstance(patches, list):
        raise PatchError("patches must be a JSON array", 1)
    for patch in patches:
        document = apply_patch(document, patch, case_sensitive)
    return document


def make_patch(operation: Operation | str, path: str, value: Any = _MISSING) -> dict:
    """Build a patch operation; ``value`` is copied when given."""
    name = operation.value if isinstance(operation, Operation) else operation
    patch: dict[str, Any] = {"op": name, "path": path}
    if value is not _MISSING:
        patch["value"] = copy.deepcopy(value)
    return patch


def add_patch(
    patches: list, operation: Operation | str, path: str, value: Any = _MISSING
) -> None:
    """Append a new patch operation to ``patches``."""
    patches.append(make_patch(operation, path, value))


def _align(
    source: dict, target: dict, case_sensitive: bool
) -> Iterator[tuple[str | None, str | None]]:
    order = cmp_to_key(lambda a, b: compare_keys(a, b, case_sensitive))
    old = deque(sorted(source, key=order))
    new = deque(sorted(target, key=order))
    while old or new:
        if not new or (old and compare_keys(old[0], new[0], case_sensitive) < 0):
            yield old.popleft(), None
        elif not old or compare_keys(old[0], new[0], case_sensitive) > 0:
            yield None, new.popleft()
        else:
            yield old.popleft(), new.popleft()


def _diff(patches: list, path: str, source: Any, target: Any, case_sensitive: bool) -> None:
    if isinstance(source, list) and isinstance(target, list):
        for index, (old, new) in enumerate(zip(source, target)):
            _diff(patches, f"{path}/{index}", old, new, case_sensitive)
        common = min(len(source), len(target))
        for _ in range(len(source) - common):
            add_patch(patches, Operation.REMOVE, f"{path}/{common}")
        for item in target[common:]:
            add_patch(patches, Operation.ADD, f"{path}/-", item)
    elif isinstance(source, dict) and isinstance(target, dict):
        for old_key, new_key in _align(source, target, case_sensitive):
            if new_key is None:
                add_patch(patches, Operation.REMOVE, f"{path}/{encode_token(old_key)}")
            elif old_key is None:
                add_patch(
                    patches, Operation.ADD, f"{path}/{encode_token(new_key)}", target[new_key]
                )
            else:
                _diff(
                    patches,
                    f"{path}/{encode_token(old_key)}",
                    source[old_key],
                    target[new_key],
                    case_sensitive,
                )
    elif not json_equal(source, target, case_sensitive):
        add_patch(patches, Operation.REPLACE, path, target)


def generate_patches(source: Any, target: Any, case_sensitive: bool = False) -> list:
    """Return a list of patch operations that turns ``source`` into ``target``."""
    patches: list = []
    _diff(patches, "", source, target, case_sensitive)
    return patches