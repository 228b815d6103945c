from bplus_research.rendering.context import NO_RESULTS_TEXT, SEPARATOR, provider_status, render_context, render_item
from bplus_research.schemas.results import ResultItem, ResultSet


def test_render_numbers_follow_result_order():
    """
    WHY: A model citing [2] must point at results[1].
    HOW: Render two items.
    EXPECTED: Blocks numbered 1 and 2 in order, joined by the separator.
    """
    result_set = ResultSet(
        query="rust",
        results=[
            ResultItem(source="wikipedia", title="Rust", url="https://en.wikipedia.org/?curid=1", content="A language"),
            ResultItem(source="reddit", title="Async", url="https://www.reddit.com/r/rust/1"),
        ],
        succeeded=["wikipedia", "reddit"],
    )

    text = render_context(result_set)

    assert text.startswith('Search Results for "rust":')
    first, second = text.split(SEPARATOR)
    assert "[1] (wikipedia) Rust" in first
    assert "Snippet: A language" in first
    assert second.startswith("[2] (reddit) Async\nURL: https://www.reddit.com/r/rust/1")
    assert text.endswith("Answered by: wikipedia, reddit")


def test_item_without_title_uses_url_and_skips_empty_lines():
    text = render_item(3, ResultItem(source="x", url="https://x.example"))
    assert text == "[3] (x) https://x.example\nURL: https://x.example"


def test_no_results_names_failed_providers():
    result_set = ResultSet(query="q", failures={"reddit": "timeout: no answer within 12.0s"})
    text = render_context(result_set)
    assert text.startswith(NO_RESULTS_TEXT)
    assert "Unavailable: reddit (timeout: no answer within 12.0s)" in text


def test_no_results_and_no_providers():
    assert render_context(ResultSet(query="q")) == NO_RESULTS_TEXT


def test_provider_status_both_parts():
    result_set = ResultSet(succeeded=["a"], failures={"b": "network: refused", "c": "http_status: HTTP 500"})
    assert provider_status(result_set) == "Answered by: a | Unavailable: b (network: refused); c (http_status: HTTP 500)"
