import httpx
import pytest
from bplus_research.retrieval.suggest import SUGGEST_SOURCES, SuggestSource, rank_suggestions, suggest

DDG, BRAVE, QWANT, WIKI = SUGGEST_SOURCES


def test_rank_by_agreement_then_first_seen():
    batches = [["rust async", "rust book"], ["rust book", "rust lang"], ["rust lang", "rust book"]]
    assert rank_suggestions(batches) == ["rust book", "rust lang", "rust async"]


def test_rank_limit():
    assert rank_suggestions([[str(i) for i in range(20)]], limit=10) == [str(i) for i in range(10)]


def test_opensearch_parse():
    assert DDG.parse(["rust", ["rust book", "rust lang"]]) == ["rust book", "rust lang"]
    assert DDG.parse({"unexpected": True}) == []
    assert DDG.parse(["rust"]) == []


def test_qwant_parse():
    doc = {"status": "success", "data": {"items": [{"value": "rust book"}, {"value": ""}, {"other": 1}]}}
    assert QWANT.parse(doc) == ["rust book"]
    assert QWANT.parse({"status": "error"}) == []


def test_source_url_encodes_query():
    assert "q=c%2B%2B" in BRAVE.build_url("c++")
    assert WIKI.build_url("a b").endswith("search=a%20b")


@pytest.mark.asyncio
async def test_suggest_merges_sources_and_tolerates_failures(route_transport):
    """
    WHY: Autocomplete must keep working when some endpoints are down.
    HOW: One source answers, one returns 500, one returns HTML, one agrees with the first.
    EXPECTED: Suggestions from the working sources, shared ones ranked first.
    """
    sources = [
        SuggestSource(name="a", url_template="https://a.example/?q={query}", opensearch=True),
        SuggestSource(name="b", url_template="https://b.example/?q={query}", opensearch=True),
        SuggestSource(name="c", url_template="https://c.example/?q={query}", opensearch=True),
        SuggestSource(name="d", url_template="https://d.example/?q={query}", results_path="items", value_path="text"),
    ]
    transport = route_transport({
        "a.example": lambda r: httpx.Response(200, json=["ru", ["ruby", "rust"]]),
        "b.example": lambda r: httpx.Response(500),
        "c.example": lambda r: httpx.Response(200, text="<html>"),
        "d.example": lambda r: httpx.Response(200, json={"items": [{"text": "rust"}]}),
    })

    assert await suggest("ru", sources=sources, transport=transport) == ["rust", "ruby"]


@pytest.mark.asyncio
async def test_blank_query_makes_no_requests():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=["", []])

    assert await suggest("   ", transport=httpx.MockTransport(handler)) == []
    assert calls == []
