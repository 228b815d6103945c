"""
Aggregator - concurrent fan-out of one query across all enabled providers.

Each provider runs as its own task and returns its own outcome (a
ProviderResponse or a ProviderError). Nothing is merged until every task
has settled, so result order depends only on declaration order and never
on which provider answered first.
"""

import asyncio
import concurrent.futures
from typing import List, Optional, Sequence, Union

import httpx

from ..config import get_settings
from ..log import get_logger
from ..mlops.tracing import tracer
from ..retrieval.errors import InvalidShapeError, ProviderError
from ..retrieval.extract import missing_fields
from ..retrieval.fetch import ProviderClient, ProviderResponse
from ..retrieval.introspect import format_introspection
from ..retrieval.url import normalize_url
from ..schemas.providers import ProviderSpec
from ..schemas.results import ResultItem, ResultSet

settings = get_settings()
logger = get_logger("aggregate")

Outcome = Union[ProviderResponse, ProviderError]


def failure_key(spec: ProviderSpec) -> str:
    return spec.name or "<unnamed>"


def run_blocking(coro):
    """
    Runs a coroutine to completion from synchronous code.

    Uses a separate thread with its own loop when called from inside a
    running event loop.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(asyncio.run, coro).result()


class Aggregator:
    """
    Example usage:
        aggregator = Aggregator()
        result = aggregator.search_sync("rust async runtimes", specs)
        for item in result.results:
            print(f"[{item.source}] {item.title} {item.url}")
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            transport: Optional httpx transport, mainly for tests
        """
        self.transport = transport

    def active_specs(self, specs: Sequence[ProviderSpec]) -> List[ProviderSpec]:
        """Enabled specs in declaration order; a repeated name keeps its first declaration."""
        active = []
        seen = set()
        for spec in specs:
            if not spec.enabled:
                continue
            if spec.name in seen:
                logger.warning(f"Duplicate provider name '{spec.name}' ignored, first declaration wins")
                continue
            seen.add(spec.name)
            active.append(spec)
        return active

    async def search(
        self,
        query: str,
        specs: Sequence[ProviderSpec],
        per_provider_timeout: Optional[float] = None,
        max_results: Optional[int] = None,
        timeframe: Optional[str] = None,
    ) -> ResultSet:
        """
        Query every enabled provider concurrently and merge the results.

        Args:
            query: Search terms
            specs: Ordered provider snapshot
            per_provider_timeout: Deadline in seconds applied to each provider
            max_results: Optional cap applied after deduplication
            timeframe: Optional "day", "week" or "month" for providers that support it

        Returns:
            ResultSet; provider failures are reported in `failures`, never raised
        """
        timeout = settings.PROVIDER_TIMEOUT_SECONDS if per_provider_timeout is None else per_provider_timeout
        active = self.active_specs(specs)
        if not active:
            logger.info("No enabled providers, returning empty result set")
            return ResultSet(query=query)

        logger.info(f"Searching {len(active)} provider(s) for '{query[:80]}' (timeout {timeout:g}s)")

        with tracer.span("aggregate.search", span_type="RETRIEVER", inputs={"query": query, "timeframe": timeframe}):
            async with httpx.AsyncClient(transport=self.transport, follow_redirects=True) as http:
                client = ProviderClient(http)
                outcomes = await asyncio.gather(
                    *(self._run_one(client, spec, query, timeout, timeframe) for spec in active)
                )

            result = self.merge(query, active, outcomes, max_results)
            tracer.trace_aggregation(len(active), len(result.results), result.failures)

        logger.info(
            f"Search complete: {len(result.results)} results, "
            f"{len(result.succeeded)} ok, {len(result.failures)} failed"
        )
        return result

    async def _run_one(
        self,
        client: ProviderClient,
        spec: ProviderSpec,
        query: str,
        timeout: float,
        timeframe: Optional[str] = None,
    ) -> Outcome:
        with tracer.span(f"provider.{failure_key(spec)}", span_type="TOOL"):
            try:
                return await client.fetch(spec, query, timeout, timeframe)
            except ProviderError as e:
                return e
            except Exception as e:
                logger.exception(f"Unexpected error from provider {failure_key(spec)}")
                return ProviderError(spec.name, f"unexpected {type(e).__name__}: {e}")

    def merge(
        self,
        query: str,
        active: Sequence[ProviderSpec],
        outcomes: Sequence[Outcome],
        max_results: Optional[int] = None,
    ) -> ResultSet:
        results: List[ResultItem] = []
        failures = {}
        succeeded = []
        seen_urls = set()

        for spec, outcome in zip(active, outcomes):
            name = failure_key(spec)
            if isinstance(outcome, ProviderError):
                failures[name] = outcome.reason
                logger.warning(f"Provider {name} failed: {outcome.reason}")
                if isinstance(outcome, InvalidShapeError) and outcome.raw is not None:
                    logger.info(format_introspection(spec, outcome.raw))
                continue

            succeeded.append(name)
            self._log_introspection(spec, outcome)
            for item in outcome.items:
                key = normalize_url(item.url)
                if key:
                    if key in seen_urls:
                        continue
                    seen_urls.add(key)
                results.append(item)

        if max_results is not None:
            results = results[:max_results]
        return ResultSet(query=query, results=results, failures=failures, succeeded=succeeded)

    def _log_introspection(self, spec: ProviderSpec, response: ProviderResponse):
        """Emit the first-item keys when a response looks misconfigured."""
        if not response.raw_count:
            return
        missing = missing_fields(spec, response.items)
        if response.dropped or missing:
            detail = f"{response.dropped} dropped" if response.dropped else f"empty {', '.join(missing)}"
            logger.info(f"{format_introspection(spec, response.raw)} ({detail})")

    def search_sync(
        self,
        query: str,
        specs: Sequence[ProviderSpec],
        per_provider_timeout: Optional[float] = None,
        max_results: Optional[int] = None,
        timeframe: Optional[str] = None,
    ) -> ResultSet:
        """Synchronous wrapper for search."""
        return run_blocking(self.search(query, specs, per_provider_timeout, max_results, timeframe))


aggregator = Aggregator()
