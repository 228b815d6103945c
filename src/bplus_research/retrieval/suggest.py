"""Search-as-you-type suggestions.

Asks several public autocomplete endpoints at once and ranks the
suggestions by how many sources agree on them.
"""

import asyncio
from collections import Counter
from typing import Any, List, Optional, Sequence
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from .paths import extract
from .extract import as_text
from ..config import get_settings
from ..log import get_logger
from ..schemas.providers import QUERY_MARKER

settings = get_settings()
logger = get_logger("suggest")


class SuggestSource(BaseModel):
    name: str
    url_template: str
    # OpenSearch responses look like [query, [suggestion, ...]]
    opensearch: bool = False
    results_path: str = ""
    value_path: str = ""

    def build_url(self, query: str) -> str:
        return self.url_template.replace(QUERY_MARKER, quote(query, safe=""))

    def parse(self, document: Any) -> List[str]:
        if self.opensearch:
            if isinstance(document, list) and len(document) > 1 and isinstance(document[1], list):
                elements = document[1]
            else:
                return []
        else:
            elements = extract(document, self.results_path)
            if not isinstance(elements, list):
                return []

        suggestions = []
        for element in elements:
            text = as_text(extract(element, self.value_path))
            if text:
                suggestions.append(text)
        return suggestions


SUGGEST_SOURCES = [
    SuggestSource(name="ddg", url_template="https://duckduckgo.com/ac/?type=list&q={query}", opensearch=True),
    SuggestSource(name="brave", url_template="https://search.brave.com/api/suggest?q={query}", opensearch=True),
    SuggestSource(
        name="qwant",
        url_template="https://api.qwant.com/v3/suggest?q={query}&locale=en_US&version=2",
        results_path="data.items",
        value_path="value",
    ),
    SuggestSource(
        name="wiki",
        url_template="https://en.wikipedia.org/w/api.php?action=opensearch&format=json&formatversion=2&namespace=0&limit=10&search={query}",
        opensearch=True,
    ),
]


def rank_suggestions(batches: Sequence[List[str]], limit: int = 10) -> List[str]:
    """Most frequent first; ties keep the order in which they were first seen."""
    counts = Counter()
    order = []
    for batch in batches:
        for suggestion in batch:
            if suggestion not in counts:
                order.append(suggestion)
            counts[suggestion] += 1
    ranked = sorted(order, key=lambda s: counts[s], reverse=True)
    return ranked[:limit]


async def _fetch_source(client: httpx.AsyncClient, source: SuggestSource, query: str, timeout: float) -> List[str]:
    try:
        resp = await asyncio.wait_for(
            client.get(source.build_url(query), headers={"User-Agent": settings.USER_AGENT}),
            timeout=timeout,
        )
        resp.raise_for_status()
        return source.parse(resp.json())
    except (httpx.HTTPError, ValueError, asyncio.TimeoutError) as e:
        logger.debug(f"Suggest source {source.name} failed: {type(e).__name__}: {e}")
        return []


async def suggest(
    query: str,
    sources: Optional[Sequence[SuggestSource]] = None,
    timeout: float = 5.0,
    limit: int = 10,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[str]:
    if not query.strip():
        return []
    sources = SUGGEST_SOURCES if sources is None else sources
    async with httpx.AsyncClient(transport=transport, follow_redirects=True) as client:
        batches = await asyncio.gather(*(_fetch_source(client, s, query, timeout) for s in sources))
    return rank_suggestions(batches, limit)
