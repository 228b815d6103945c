from bplus_research.retrieval.introspect import describe_first_item, describe_root, format_introspection
from bplus_research.schemas.providers import ProviderSpec

TVMAZE_RESPONSE = [
    {"score": 0.9, "show": {"name": "The Office", "url": "https://www.tvmaze.com/shows/526"}},
    {"score": 0.7, "show": {"name": "The Office (UK)", "url": "https://www.tvmaze.com/shows/530"}},
]


def make_spec(results_path: str) -> ProviderSpec:
    return ProviderSpec(
        name="probe",
        url_template="https://api.example.com/?q={query}",
        results_path=results_path,
    )


def test_root_array_lists_first_item_keys():
    """
    WHY: Operators add root-array APIs like TVMaze and need to know what an item looks like.
    HOW: Describe the TVMaze-style response with an empty results path.
    EXPECTED: The keys of the first element, in order.
    """
    assert describe_first_item(make_spec(""), TVMAZE_RESPONSE) == ["score", "show"]


def test_nested_results_path():
    doc = {"data": {"children": [{"kind": "t3", "data": {}}]}}
    assert describe_first_item(make_spec("data.children"), doc) == ["kind", "data"]


def test_absent_or_non_array_gives_no_keys():
    """
    WHY: The introspector is an aid, never a source of errors.
    HOW: Describe with a missing path, a path to an object, and an empty array.
    EXPECTED: An empty list each time.
    """
    assert describe_first_item(make_spec("missing"), {"results": []}) == []
    assert describe_first_item(make_spec("meta"), {"meta": {"a": 1}}) == []
    assert describe_first_item(make_spec(""), []) == []


def test_first_item_not_an_object_gives_no_keys():
    assert describe_first_item(make_spec(""), ["a", "b"]) == []


def test_does_not_mutate_response():
    doc = [{"b": 1, "a": 2}]
    describe_first_item(make_spec(""), doc)
    assert doc == [{"b": 1, "a": 2}]


def test_describe_root():
    assert describe_root({"query": {}, "batchcomplete": ""}) == ["query", "batchcomplete"]
    assert describe_root([1, 2]) == []


def test_format_introspection_variants():
    assert format_introspection(make_spec(""), TVMAZE_RESPONSE) == "[probe] first item keys at '': score, show"
    assert "top-level keys: data" in format_introspection(make_spec("results"), {"data": []})
    assert "no top-level keys" in format_introspection(make_spec("results"), "plain string")
