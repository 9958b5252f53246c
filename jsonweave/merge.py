"""JSON Merge Patch: applying and generating merge patches."""

from __future__ import annotations

import copy
from collections import deque
from functools import cmp_to_key
from typing import Any, Iterator

from .compare import compare_keys, json_equal

__all__ = ["merge_patch", "generate_merge_patch"]


def _find_member(obj: dict, name: str, case_sensitive: bool) -> str | None:
    for key in obj:
        if compare_keys(key, name, case_sensitive) == 0:
            return key
    return None


def merge_patch(target: Any, patch: Any, case_sensitive: bool = False) -> Any:
    """Apply a merge patch to ``target`` and return the result.

    When both are objects ``target`` is changed in place and returned.
    A ``None`` member in the patch removes the matching member.
    """
    if not isinstance(patch, dict):
        return copy.deepcopy(patch)
    if not isinstance(target, dict):
        target = {}
    for name, value in patch.items():
        key = _find_member(target, name, case_sensitive)
        if value is None:
            if key is not None:
                del target[key]
            continue
        current = target.pop(key) if key is not None else None
        target[name] = merge_patch(current, value, case_sensitive)
    return target


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


def generate_merge_patch(source: Any, target: Any, case_sensitive: bool = False) -> Any:
    """Return a merge patch that turns ``source`` into ``target``.

    Two objects without differences give an empty patch ``{}``.
    """
    if not (isinstance(source, dict) and isinstance(target, dict)):
        return copy.deepcopy(target)
    patch: dict[str, Any] = {}
    for old_key, new_key in _align(source, target, case_sensitive):
        if new_key is None:
            patch[old_key] = None
        elif old_key is None:
            patch[new_key] = copy.deepcopy(target[new_key])
        elif not json_equal(source[old_key], target[new_key], case_sensitive):
            patch[new_key] = generate_merge_patch(
                source[old_key], target[new_key], case_sensitive
            )
    return patch