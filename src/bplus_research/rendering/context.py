"""Citation text for the language-model context.

Deterministic renderer: numbering follows ResultSet order, so [n] in a
model answer maps straight back to results[n - 1].
"""

from typing import List
from ..schemas.results import ResultItem, ResultSet

NO_RESULTS_TEXT = "No search results found to summarize."
SEPARATOR = "\n\n---\n\n"


def render_item(index: int, item: ResultItem) -> str:
    lines = [f"[{index}] ({item.source}) {item.title or item.url}"]
    if item.url:
        lines.append(f"URL: {item.url}")
    if item.content:
        lines.append(f"Snippet: {item.content}")
    return "\n".join(lines)


def provider_status(result_set: ResultSet) -> str:
    parts: List[str] = []
    if result_set.succeeded:
        parts.append(f"Answered by: {', '.join(result_set.succeeded)}")
    if result_set.failures:
        failed = "; ".join(f"{name} ({reason})" for name, reason in result_set.failures.items())
        parts.append(f"Unavailable: {failed}")
    return " | ".join(parts)


def render_context(result_set: ResultSet) -> str:
    """
    Builds the numbered citation block for a prompt.
    Providers that failed are still named so the model can say what is missing.
    """
    status = provider_status(result_set)
    if not result_set.results:
        return "\n".join(filter(None, [NO_RESULTS_TEXT, status]))

    blocks = [render_item(i, item) for i, item in enumerate(result_set.results, start=1)]
    text = f"Search Results for \"{result_set.query}\":\n\n" + SEPARATOR.join(blocks)
    if status:
        text += f"\n\n{status}"
    return text
