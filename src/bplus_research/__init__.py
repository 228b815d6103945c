"""bplus research - search aggregation and generic extraction engine.

Fans a query out to a configurable set of JSON search providers, extracts a
uniform result shape from each response using declarative dot paths, and
merges everything into one deduplicated, citable result list.

Components:
- retrieval: path extraction, provider HTTP client, built-in providers, suggestions
- pipeline: concurrent aggregation and the per-query research run
- schemas: ProviderSpec, ResultItem, ResultSet
- store: SQLite query history
- rendering: citation text for the language-model context
- mlops: MLflow tracing
"""
