"""JSON Pointer helpers for documents made of plain Python values.

Documents are built from ``dict``, ``list``, ``str``, ``int``, ``float``,
``bool`` and ``None``.
"""

from __future__ import annotations

from typing import Any, Iterator

from .compare import compare_keys

__all__ = [
    "PointerError",
    "encode_token",
    "decode_token",
    "parse_array_index",
    "split_pointer",
    "get_pointer",
    "find_pointer",
]


class PointerError(LookupError):
    """Raised when a JSON pointer is malformed or does not resolve."""


def encode_token(token: str) -> str:
    """Escape ``~`` as ``~0`` and ``/`` as ``~1`` for use in a pointer."""
    return token.replace("~", "~0").replace("/", "~1")


def decode_token(token: str) -> str:
    """Undo the ``~0`` and ``~1`` escapes of a single pointer token."""
    decoded = []
    chars = iter(token)
    for char in chars:
        if char != "~":
            decoded.append(char)
            continue
        escape = next(chars, "")
        if escape == "0":
            decoded.append("~")
        elif escape == "1":
            decoded.append("/")
        else:
            raise PointerError(f"invalid escape sequence in token {token!r}")
    return "".join(decoded)


def parse_array_index(token: str) -> int:
    """Parse a pointer token as an array index; leading zeroes are rejected."""
    if not token or not token.isascii() or not token.isdigit():
        raise PointerError(f"{token!r} is not an array index")
    if len(token) > 1 and token[0] == "0":
        raise PointerError(f"array index {token!r} has leading zeroes")
    return int(token)


def split_pointer(pointer: str) -> tuple[str, str]:
    """Split a pointer into its parent pointer and its decoded last token."""
    parent, separator, child = pointer.rpartition("/")
    if not separator:
        raise PointerError(f"pointer {pointer!r} has no parent")
    return parent, decode_token(child)


def _tokens(pointer: str) -> list[str]:
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise PointerError(f"pointer {pointer!r} must start with '/'")
    return [decode_token(token) for token in pointer[1:].split("/")]


def _find_key(obj: dict, name: str, case_sensitive: bool) -> str:
    if case_sensitive and name in obj:
        return name
    for key in obj:
        if compare_keys(key, name, case_sensitive) == 0:
            return key
    raise PointerError(f"object has no member {name!r}")


def get_pointer(document: Any, pointer: str, case_sensitive: bool = False) -> Any:
    """Return the value that ``pointer`` refers to inside ``document``.

    Object member names are matched ignoring ASCII case unless
    ``case_sensitive`` is true.
    """
    current = document
    for token in _tokens(pointer):
        if isinstance(current, list):
            index = parse_array_index(token)
            if index >= len(current):
                raise PointerError(f"array index {index} is out of range")
            current = current[index]
        elif isinstance(current, dict):
            current = current[_find_key(current, token, case_sensitive)]
        else:
            raise PointerError(f"cannot descend into a scalar with {token!r}")
    return current


def _children(node: Any) -> Iterator[tuple[str, Any]]:
    if isinstance(node, dict):
        for key, value in node.items():
            yield encode_token(key), value
    elif isinstance(node, list):
        for index, value in enumerate(node):
            yield str(index), value


def _search(node: Any, target: Any) -> str | None:
    if node is target:
        return ""
    for token, child in _children(node):
        found = _search(child, target)
        if found is not None:
            return f"/{token}{found}"
    return None


def find_pointer(document: Any, target: Any) -> str:
    """Return the pointer from ``document`` to the object ``target``.

    The search is depth first and matches by identity.
    """
    found = _search(document, target)
    if found is None:
        raise PointerError("target is not part of the document")
    return found