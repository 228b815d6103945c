"""
MLflow tracing integration for search observability.
Provides span-based tracing for the aggregation call and each provider fetch.
"""
import logging
import time
from typing import Optional, Dict, Any
from contextlib import contextmanager

import mlflow

from ..config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class MLflowTracer:
    """Handles MLflow tracing for provider fan-out."""

    def __init__(self):
        self.enabled = settings.MLFLOW_ENABLE_TRACING
        if self.enabled:
            try:
                mlflow.set_tracking_uri(settings.MLFLOW_TRACKING_URI)
                logger.info("MLflow tracing enabled")
            except Exception as e:
                logger.warning(f"Failed to initialize MLflow tracing: {e}")
                self.enabled = False
        else:
            logger.debug("MLflow tracing disabled")

    @contextmanager
    def span(
        self,
        name: str,
        span_type: str = "UNKNOWN",
        attributes: Optional[Dict[str, Any]] = None,
        inputs: Optional[Dict[str, Any]] = None
    ):
        """
        Create a traced span for an operation.

        Args:
            name: Name of the span (e.g., "aggregate.search", "provider.reddit")
            span_type: Type of span (e.g., "RETRIEVER", "TOOL", "CHAIN")
            attributes: Additional metadata for the span
            inputs: Input data to the operation
        """
        if not self.enabled:
            yield None
            return

        with mlflow.start_span(name=name, span_type=span_type) as span:
            if attributes:
                span.set_attributes(attributes)
            if inputs:
                span.set_inputs(inputs)

            start_time = time.time()
            yield span
            elapsed = time.time() - start_time
            span.set_attribute("latency_ms", int(elapsed * 1000))

    def trace_aggregation(
        self,
        provider_count: int,
        result_count: int,
        failures: Dict[str, str]
    ):
        """Log the outcome of one aggregation on the current span."""
        if not self.enabled:
            return

        attributes = {
            "provider_count": provider_count,
            "result_count": result_count,
            "failure_count": len(failures),
        }
        if failures:
            attributes["failed_providers"] = ",".join(failures)

        try:
            current_span = mlflow.get_current_active_span()
            if current_span:
                current_span.set_attributes(attributes)
        except AttributeError:
            # Older MLflow releases have no get_current_active_span
            pass


# Global tracer instance
tracer = MLflowTracer()
