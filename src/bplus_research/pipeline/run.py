import logging
from datetime import datetime, timezone
from typing import Optional
from ..config import get_settings
from ..retrieval.adapters import ProviderRegistry, registry as default_registry
from ..store.repo import HistorySink, history_repo
from ..schemas.results import ResultSet
from .aggregate import Aggregator, aggregator as default_aggregator, run_blocking

logger = logging.getLogger("pipeline")


class ResearchPipeline:
    def __init__(
        self,
        registry: Optional[ProviderRegistry] = None,
        aggregator: Optional[Aggregator] = None,
        sink: Optional[HistorySink] = history_repo,
    ):
        self.registry = registry or default_registry
        self.aggregator = aggregator or default_aggregator
        self.sink = sink

    async def run(self, query: str, timeframe: Optional[str] = None) -> ResultSet:
        """
        One research turn: snapshot the providers, aggregate, record history.
        Raises ConfigError only if the provider file itself is malformed.
        """
        settings = get_settings()
        logger.info(f"Research query: {query[:100]}")

        # Edits to the provider file apply from the next query on
        specs = self.registry.snapshot()

        result = await self.aggregator.search(
            query,
            specs,
            per_provider_timeout=settings.PROVIDER_TIMEOUT_SECONDS,
            max_results=settings.MAX_RESULTS,
            timeframe=timeframe,
        )

        if result.is_empty and result.failures:
            logger.warning(f"All providers failed for '{query[:60]}': {', '.join(result.failures)}")

        self._record(query, result)
        return result

    def run_sync(self, query: str, timeframe: Optional[str] = None) -> ResultSet:
        return run_blocking(self.run(query, timeframe))

    def _record(self, query: str, result: ResultSet):
        if self.sink is None:
            return
        try:
            self.sink.record(query, result, datetime.now(timezone.utc))
        except Exception:
            # Recording failures never fail the search
            logger.exception("Failed to record query history")


pipeline = ResearchPipeline()
