"""Pydantic schema for a declarative search provider.

A provider is data, not code: an endpoint template plus the dot paths that
locate the result list and the title/url/content fields of each item.
"""

from pydantic import BaseModel, Field
from typing import Dict, Optional
from urllib.parse import quote, urlparse

QUERY_MARKER = "{query}"
TIMEFRAMES = ("day", "week", "month")


class ProviderSpec(BaseModel):
    name: str
    url_template: str
    headers: Dict[str, str] = Field(default_factory=dict)
    results_path: str = ""
    title_path: str = ""
    url_path: str = ""
    content_path: str = ""
    url_prefix: str = ""
    # Query parameter that carries a day/week/month filter, e.g. SearXNG's time_range
    timeframe_param: str = ""
    enabled: bool = True
    # Set on placeholders for records that failed validation
    load_error: str = ""

    model_config = {"frozen": True}

    def config_error(self) -> Optional[str]:
        """Returns why this spec cannot be used, or None if it is valid."""
        if self.load_error:
            return self.load_error
        if not self.name.strip():
            return "provider name is empty"
        count = self.url_template.count(QUERY_MARKER)
        if count != 1:
            return f"url template must contain {QUERY_MARKER} exactly once (found {count})"
        parsed = urlparse(self.url_template.replace(QUERY_MARKER, "q"))
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return f"url template is not an http(s) URL: {self.url_template!r}"
        return None

    def build_url(self, query: str, timeframe: Optional[str] = None) -> str:
        url = self.url_template.replace(QUERY_MARKER, quote(query, safe=""))
        # Unknown timeframes are ignored rather than rejected
        if self.timeframe_param and timeframe in TIMEFRAMES:
            url += ("&" if "?" in url else "?") + f"{self.timeframe_param}={timeframe}"
        return url
