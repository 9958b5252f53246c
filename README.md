# jsonweave

Tools for working with JSON documents held as ordinary Python values
(`dict`, `list`, `str`, `int`, `float`, `bool`, `None`):

- **JSON Pointer** (RFC 6901): look up a value by pointer, or find the
  pointer that leads to a value (`jsonweave.pointer`).
- **JSON Patch** (RFC 6902): apply a list of `add`, `remove`, `replace`,
  `move`, `copy` and `test` operations, or generate such a list from two
  documents (`jsonweave.patch`).
- **JSON Merge Patch** (RFC 7396): merge a patch into a document, or
  generate the merge patch that turns one document into another
  (`jsonweave.merge`).
- **Comparison**: structural equality and ordering of object members
  (`jsonweave.compare`).

Object member names are matched ignoring ASCII case by default; every
lookup and comparison function takes a `case_sensitive` flag to switch to
exact matching. String *values* always compare exactly.

## Installation

```
pip install jsonweave
```

## JSON Pointer

```python
from jsonweave.pointer import get_pointer, find_pointer, PointerError

doc = {"foo": ["bar", "baz"], "a/b": 1, "m~n": 8}

get_pointer(doc, "/foo/0")    # "bar"
get_pointer(doc, "/a~1b")     # 1
get_pointer(doc, "/m~0n")     # 8
get_pointer(doc, "")          # doc itself

numbers = doc["foo"]
find_pointer(doc, numbers)    # "/foo"
```

- `get_pointer(document, pointer, case_sensitive=False)` raises
  `PointerError` (a `LookupError`) when the pointer is malformed or does
  not resolve.
- `find_pointer(document, target)` searches depth first and matches by
  identity (`is`), so `target` must be an object inside `document`; it
  raises `PointerError` when it is not found.
- `encode_token` and `decode_token` escape and unescape a single reference
  token (`~` as `~0`, `/` as `~1`).
- `parse_array_index` turns a token into an array index, rejecting
  leading zeroes and non-digits.
- `split_pointer` splits a pointer into its parent pointer and its decoded
  last token.

## JSON Patch

```python
from jsonweave.patch import apply_patches, generate_patches, PatchError

doc = {"name": "widget", "tags": ["a"]}
patches = [
    {"op": "replace", "path": "/name", "value": "gadget"},
    {"op": "add", "path": "/tags/-", "value": "b"},
]
doc = apply_patches(doc, patches)
# {"name": "gadget", "tags": ["a", "b"]}

generate_patches({"x": 1}, {"x": 2, "y": 3})
# [{"op": "replace", "path": "/x", "value": 2},
#  {"op": "add", "path": "/y", "value": 3}]
```

- `apply_patch` applies one operation and `apply_patches` a list of them.
  Containers are changed in place and the resulting document is returned.
  An operation on the root path `""` replaces the document as a whole
  (`remove` gives `None`), so always use the returned value.
- `apply_patches` stops at the first failing operation; changes made by
  earlier operations are kept.
- A malformed or failing patch raises `PatchError` (a `ValueError`). Its
  `code` attribute tells the kind of failure, for example `1` for a failed
  `test` or a patch list that is not a list, `3` for an unknown operation,
  `7` for a missing `value` and `13` for nothing to remove or replace.
- `Operation` is a string enum of the six operation names.
- `make_patch(operation, path, value)` builds one operation (the value is
  copied and may be left out); `add_patch(patches, operation, path, value)`
  appends one to a list.
- `generate_patches(source, target, case_sensitive=False)` compares arrays
  position by position, removes surplus items from the end and appends new
  ones with `/-`; objects are compared member by member.

## JSON Merge Patch

```python
from jsonweave.merge import merge_patch, generate_merge_patch

merge_patch({"a": "b", "b": "c"}, {"a": None})
# {"b": "c"}

generate_merge_patch({"a": "b"}, {"a": "c"})
# {"a": "c"}

generate_merge_patch({"a": 1}, {"a": 1})
# {}
```

`merge_patch` changes an object target in place and returns it; a patch
that is not an object replaces the target with a copy of the patch.
`generate_merge_patch` returns an empty object `{}` for two equal objects,
and a copy of the target when either side is not an object.

## Comparing documents

```python
from jsonweave.compare import json_equal, sort_object, compare_keys

json_equal({"a": 1, "b": [1, 2]}, {"b": [1, 2], "a": 1})   # True

obj = {"b": 1, "a": 2}
sort_object(obj)       # reorders in place, returns None
obj                    # {"a": 2, "b": 1}

compare_keys("A", "a")                        # 0
compare_keys("A", "a", case_sensitive=True)   # negative
```

## What this package does not do

jsonweave works only on Python values that are already loaded. It does
not read or write JSON text (use the standard `json` module for that),
and it has no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```