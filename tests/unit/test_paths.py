import pytest
from bplus_research.retrieval.paths import ABSENT, extract, is_absent, split_path

REDDIT_SHAPE = {"data": {"children": [{"data": {"title": "X"}}]}}


def test_empty_path_returns_root_array_unchanged():
    """
    WHY: Some APIs (TVMaze) answer with a bare JSON array; an empty results path must select it.
    HOW: Extract "" from a list document.
    EXPECTED: The very same list object comes back.
    """
    doc = [{"score": 1}, {"score": 2}]
    assert extract(doc, "") is doc


def test_nested_results_and_item_paths():
    """
    WHY: Wrapper objects are the norm (Reddit nests items under data.children, fields under data).
    HOW: Apply results path "data.children", then "data.title" to the single element.
    EXPECTED: A one-element list, and "X" for the title.
    """
    items = extract(REDDIT_SHAPE, "data.children")
    assert isinstance(items, list)
    assert len(items) == 1
    assert extract(items[0], "data.title") == "X"


def test_missing_intermediate_key_is_absent():
    """
    WHY: Absent must be distinguishable from an empty string so callers can tell "not there" from "blank".
    HOW: Follow a path through a key that does not exist, and separately extract a real empty string.
    EXPECTED: ABSENT for the first, "" for the second, and the two are not equal.
    """
    missing = extract(REDDIT_SHAPE, "data.nope.title")
    empty = extract({"title": ""}, "title")

    assert missing is ABSENT
    assert is_absent(missing)
    assert empty == ""
    assert missing != empty
    assert not is_absent(empty)


def test_path_through_non_container_is_absent():
    """
    WHY: A path that runs into a string or number must stop, not raise.
    HOW: Descend past a string leaf.
    EXPECTED: ABSENT.
    """
    assert extract({"a": "text"}, "a.b") is ABSENT
    assert extract(42, "a") is ABSENT


def test_null_is_absent():
    """
    WHY: JSON null carries no value for a field; it is treated like a missing key.
    HOW: Extract a key whose value is None, and a path whose intermediate is None.
    EXPECTED: ABSENT in both cases.
    """
    assert extract({"a": None}, "a") is ABSENT
    assert extract({"a": None}, "a.b") is ABSENT
    assert extract(None, "") is ABSENT


def test_segments_never_index_arrays():
    """
    WHY: Positional access is not part of the path language; "0" is a key name, not an index.
    HOW: Use "items.0.title" on a document whose items are a list.
    EXPECTED: ABSENT.
    """
    doc = {"items": [{"title": "first"}]}
    assert extract(doc, "items.0.title") is ABSENT


def test_numeric_string_key_on_mapping_is_followed():
    doc = {"items": {"0": {"title": "first"}}}
    assert extract(doc, "items.0.title") == "first"


@pytest.mark.parametrize("path,expected", [
    ("", []),
    ("a", ["a"]),
    ("a.b.c", ["a", "b", "c"]),
])
def test_split_path(path, expected):
    assert split_path(path) == expected


def test_absent_is_falsy_singleton():
    assert not ABSENT
    assert repr(ABSENT) == "ABSENT"
    assert type(ABSENT)() is ABSENT
