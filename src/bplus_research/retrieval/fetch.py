"""HTTP fetching for declarative providers.

Issues one GET per provider with retry on connection errors, decodes the
JSON body and normalizes it into ResultItems. Every failure surfaces as a
ProviderError subclass, never as a bare httpx or JSON exception.
"""

import asyncio
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel
from tenacity import retry, stop_after_attempt, wait_fixed, retry_if_exception_type

from .errors import (
    HttpStatusError,
    InvalidConfigError,
    InvalidJSONError,
    InvalidShapeError,
    NetworkError,
    ProviderTimeout,
)
from .extract import build_items
from .paths import extract
from ..config import get_settings
from ..log import get_logger
from ..schemas.providers import ProviderSpec
from ..schemas.results import ResultItem

settings = get_settings()
logger = get_logger("fetch")


class ProviderResponse(BaseModel):
    provider: str
    items: List[ResultItem]
    raw: Any = None
    raw_count: int = 0

    @property
    def dropped(self) -> int:
        return self.raw_count - len(self.items)


class ProviderClient:
    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        # Shared read-only across concurrent calls when given
        self.client = client
        self.headers = {
            "User-Agent": settings.USER_AGENT
        }

    async def fetch(
        self, spec: ProviderSpec, query: str, timeout: float, timeframe: Optional[str] = None
    ) -> ProviderResponse:
        """
        Runs one provider call bounded by `timeout` seconds.
        Raises a ProviderError subclass on any failure.
        """
        error = spec.config_error()
        if error:
            raise InvalidConfigError(spec.name, error)

        try:
            document = await asyncio.wait_for(self._get_json(spec, query, timeout, timeframe), timeout=timeout)
        except asyncio.TimeoutError:
            raise ProviderTimeout(spec.name, f"no response within {timeout:g}s")

        elements = extract(document, spec.results_path)
        if not isinstance(elements, list):
            where = spec.results_path or "<root>"
            raise InvalidShapeError(spec.name, f"'{where}' did not resolve to an array", raw=document)

        items = build_items(spec, elements)
        logger.debug(f"{spec.name}: {len(items)}/{len(elements)} items kept")
        return ProviderResponse(provider=spec.name, items=items, raw=document, raw_count=len(elements))

    async def _get_json(
        self, spec: ProviderSpec, query: str, timeout: float, timeframe: Optional[str] = None
    ) -> Any:
        url = spec.build_url(query, timeframe)
        headers: Dict[str, str] = {**self.headers, **spec.headers}
        try:
            resp = await self._get(url, headers, timeout)
        except httpx.TimeoutException as e:
            raise ProviderTimeout(spec.name, f"no response within {timeout:g}s") from e
        except httpx.InvalidURL as e:
            raise InvalidConfigError(spec.name, f"invalid URL: {e}") from e
        except httpx.HTTPError as e:
            raise NetworkError(spec.name, f"{type(e).__name__}: {e}") from e

        if not resp.is_success:
            raise HttpStatusError(spec.name, resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise InvalidJSONError(spec.name, f"body is not JSON: {e}") from e

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_fixed(0.5),
        retry=retry_if_exception_type(httpx.ConnectError),
        reraise=True
    )
    async def _get(self, url: str, headers: Dict[str, str], timeout: float) -> httpx.Response:
        if self.client is not None:
            return await self.client.get(url, headers=headers, timeout=timeout)
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            return await client.get(url, headers=headers)
