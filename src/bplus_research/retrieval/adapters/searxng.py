import base64
from typing import Dict, Optional
from ...config import Settings
from ...schemas.providers import ProviderSpec


def basic_auth_header(username: str, password: str) -> Dict[str, str]:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


def searxng_spec(settings: Settings) -> Optional[ProviderSpec]:
    """
    Spec for a self-hosted SearXNG instance, or None when SEARXNG_URL is unset.
    Basic auth is added only when both credentials are configured.
    """
    if not settings.SEARXNG_URL:
        return None

    headers = {}
    if settings.AUTH_USERNAME and settings.AUTH_PASSWORD:
        headers = basic_auth_header(settings.AUTH_USERNAME, settings.AUTH_PASSWORD)

    base = settings.SEARXNG_URL.rstrip("/")
    return ProviderSpec(
        name="searxng",
        url_template=f"{base}/search?format=json&q={{query}}",
        headers=headers,
        results_path="results",
        title_path="title",
        url_path="url",
        content_path="content",
        timeframe_param="time_range",
    )
