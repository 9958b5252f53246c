import copy

import pytest

from jsonweave.compare import json_equal
from jsonweave.patch import (
    Operation,
    PatchError,
    add_patch,
    apply_patch,
    apply_patches,
    generate_patches,
    make_patch,
)

SPEC_CASES = [
    {
        "comment": "add an object member",
        "doc": {"foo": "bar"},
        "patch": [{"op": "add", "path": "/baz", "value": "qux"}],
        "expected": {"baz": "qux", "foo": "bar"},
    },
    {
        "comment": "add an array element",
        "doc": {"foo": ["bar", "baz"]},
        "patch": [{"op": "add", "path": "/foo/1", "value": "qux"}],
        "expected": {"foo": ["bar", "qux", "baz"]},
    },
    {
        "comment": "remove an object member",
        "doc": {"baz": "qux", "foo": "bar"},
        "patch": [{"op": "remove", "path": "/baz"}],
        "expected": {"foo": "bar"},
    },
    {
        "comment": "remove an array element",
        "doc": {"foo": ["bar", "qux", "baz"]},
        "patch": [{"op": "remove", "path": "/foo/1"}],
        "expected": {"foo": ["bar", "baz"]},
    },
    {
        "comment": "replace a value",
        "doc": {"baz": "qux", "foo": "bar"},
        "patch": [{"op": "replace", "path": "/baz", "value": "boo"}],
        "expected": {"baz": "boo", "foo": "bar"},
    },
    {
        "comment": "move a value",
        "doc": {"foo": {"bar": "baz", "waldo": "fred"}, "qux": {"corge": "grault"}},
        "patch": [{"op": "move", "from": "/foo/waldo", "path": "/qux/thud"}],
        "expected": {"foo": {"bar": "baz"}, "qux": {"corge": "grault", "thud": "fred"}},
    },
    {
        "comment": "move an array element",
        "doc": {"foo": ["all", "grass", "cows", "eat"]},
        "patch": [{"op": "move", "from": "/foo/1", "path": "/foo/3"}],
        "expected": {"foo": ["all", "cows", "eat", "grass"]},
    },
    {
        "comment": "test a value success",
        "doc": {"baz": "qux", "foo": ["a", 2, "c"]},
        "patch": [
            {"op": "test", "path": "/baz", "value": "qux"},
            {"op": "test", "path": "/foo/1", "value": 2},
        ],
        "expected": {"baz": "qux", "foo": ["a", 2, "c"]},
    },
    {
        "comment": "test a value error",
        "doc": {"baz": "qux"},
        "patch": [{"op": "test", "path": "/baz", "value": "bar"}],
        "error": "string not equivalent",
    },
    {
        "comment": "add a nested member object",
        "doc": {"foo": "bar"},
        "patch": [{"op": "add", "path": "/child", "value": {"grandchild": {}}}],
        "expected": {"foo": "bar", "child": {"grandchild": {}}},
    },
    {
        "comment": "ignore unrecognized elements",
        "doc": {"foo": "bar"},
        "patch": [{"op": "add", "path": "/baz", "value": "qux", "xyz": 123}],
        "expected": {"foo": "bar", "baz": "qux"},
    },
    {
        "comment": "add to a nonexistent target",
        "doc": {"foo": "bar"},
        "patch": [{"op": "add", "path": "/baz/bat", "value": "qux"}],
        "error": "add to a non-existent target",
    },
    {
        "comment": "~ escape ordering",
        "doc": {"/": 9, "~1": 10},
        "patch": [{"op": "test", "path": "/~01", "value": 10}],
        "expected": {"/": 9, "~1": 10},
    },
    {
        "comment": "comparing strings and numbers",
        "doc": {"/": 9, "~1": 10},
        "patch": [{"op": "test", "path": "/~01", "value": "10"}],
        "error": "number is not equal to string",
    },
    {
        "comment": "add an array value",
        "doc": {"foo": ["bar"]},
        "patch": [{"op": "add", "path": "/foo/-", "value": ["abc", "def"]}],
        "expected": {"foo": ["bar", ["abc", "def"]]},
    },
]


@pytest.mark.parametrize("case", SPEC_CASES, ids=[c["comment"] for c in SPEC_CASES])
def test_apply_spec_case(case):
    document = copy.deepcopy(case["doc"])
    if "error" in case:
        with pytest.raises(PatchError):
            apply_patches(document, case["patch"], True)
    else:
        result = apply_patches(document, case["patch"], True)
        assert json_equal(result, case["expected"], True)
        assert result == case["expected"]


@pytest.mark.parametrize(
    "case",
    [c for c in SPEC_CASES if "expected" in c],
    ids=[c["comment"] for c in SPEC_CASES if "expected" in c],
)
def test_generated_patch_round_trip(case):
    patches = generate_patches(case["doc"], case["expected"], True)
    result = apply_patches(copy.deepcopy(case["doc"]), patches, True)
    assert json_equal(result, case["expected"], True)


def test_replace_root():
    result = apply_patch({"a": 1}, {"op": "replace", "path": "", "value": [1, 2]})
    assert result == [1, 2]


def test_add_root_copies_value():
    value = {"x": [1]}
    result = apply_patch(None, {"op": "add", "path": "", "value": value})
    assert result == {"x": [1]}
    assert result is not value


def test_remove_root():
    assert apply_patch({"a": 1}, {"op": "remove", "path": ""}) is None


def test_copy_duplicates_value():
    result = apply_patch({"a": [1]}, {"op": "copy", "from": "/a", "path": "/b"})
    assert result == {"a": [1], "b": [1]}
    assert result["a"] is not result["b"]


def test_move_object_member():
    assert apply_patch({"a": 1}, {"op": "move", "from": "/a", "path": "/b"}) == {"b": 1}


def test_add_replaces_existing_member():
    assert apply_patch({"a": 1}, {"op": "add", "path": "/a", "value": 2}) == {"a": 2}


def test_add_at_end_index():
    assert apply_patch([1, 2], {"op": "add", "path": "/2", "value": 3}) == [1, 2, 3]


def test_case_insensitive_replace():
    result = apply_patch({"Foo": 1}, {"op": "replace", "path": "/foo", "value": 2})
    assert result == {"foo": 2}


def test_case_sensitive_replace_fails():
    with pytest.raises(PatchError) as info:
        apply_patch({"Foo": 1}, {"op": "replace", "path": "/foo", "value": 2}, True)
    assert info.value.code == 13


def test_member_names_of_patch_ignore_case():
    patch = {"OP": "add", "PATH": "/x", "VALUE": 1}
    assert apply_patch({}, patch) == {"x": 1}
    with pytest.raises(PatchError) as info:
        apply_patch({}, patch, True)
    assert info.value.code == 2


@pytest.mark.parametrize(
    "document, patch, code",
    [
        ({}, {"op": "add", "value": 1}, 2),
        ({}, {"op": "frobnicate", "path": "/a"}, 3),
        ({"a": 1}, {"op": "move", "path": "/b"}, 4),
        ({"a": 1}, {"op": "copy", "from": "/zz", "path": "/b"}, 5),
        ({"a": 1}, {"op": "add", "path": "/b"}, 7),
        ({"a": 1}, {"op": "add", "path": "/x/y", "value": 1}, 9),
        ({"a": 1}, {"op": "add", "path": "/a/y", "value": 1}, 9),
        ([1, 2], {"op": "add", "path": "/3", "value": 1}, 10),
        ([1, 2], {"op": "add", "path": "/01", "value": 1}, 11),
        ({"a": 1}, {"op": "remove", "path": "/b"}, 13),
        ([1], {"op": "remove", "path": "/1"}, 13),
        ({"a": 1}, {"op": "test", "path": "/a", "value": 2}, 1),
    ],
)
def test_error_codes(document, patch, code):
    with pytest.raises(PatchError) as info:
        apply_patch(document, patch)
    assert info.value.code == code


def test_patches_must_be_a_list():
    with pytest.raises(PatchError) as info:
        apply_patches({}, {"op": "add", "path": "/a", "value": 1})
    assert info.value.code == 1


def test_patches_stop_at_first_failure():
    document = {"a": 1}
    patches = [
        {"op": "add", "path": "/b", "value": 2},
        {"op": "remove", "path": "/zz"},
        {"op": "add", "path": "/c", "value": 3},
    ]
    with pytest.raises(PatchError):
        apply_patches(document, patches)
    assert document == {"a": 1, "b": 2}


def test_make_patch_copies_value():
    value = [1]
    patch = make_patch(Operation.ADD, "/a", value)
    value.append(2)
    assert patch == {"op": "add", "path": "/a", "value": [1]}


def test_add_patch_appends():
    patches = []
    add_patch(patches, "remove", "/a")
    add_patch(patches, Operation.ADD, "/b", None)
    assert patches == [
        {"op": "remove", "path": "/a"},
        {"op": "add", "path": "/b", "value": None},
    ]


def test_generate_array_shrink_and_grow():
    assert generate_patches([1, 2, 3], [1]) == [
        {"op": "remove", "path": "/1"},
        {"op": "remove", "path": "/1"},
    ]
    assert generate_patches([1], [1, 2]) == [{"op": "add", "path": "/-", "value": 2}]


def test_generate_object_differences():
    assert generate_patches({"a": 1, "b": 2}, {"b": 3, "c": 4}) == [
        {"op": "remove", "path": "/a"},
        {"op": "replace", "path": "/b", "value": 3},
        {"op": "add", "path": "/c", "value": 4},
    ]


def test_generate_escapes_names():
    assert generate_patches({"a/b": 1}, {"a/b": 2}) == [
        {"op": "replace", "path": "/a~1b", "value": 2}
    ]


def test_generate_type_change_replaces():
    assert generate_patches(1, "1") == [{"op": "replace", "path": "", "value": "1"}]


def test_generate_nothing_for_equal_documents():
    assert generate_patches({"a": [1, {"b": None}]}, {"a": [1, {"b": None}]}) == []
    assert generate_patches(1, 1.0) == []