"""Provider-scoped failures.

Every error here is captured per provider into ResultSet.failures; none of
them aborts an aggregation.
"""

from typing import Any, Optional


class ProviderError(Exception):
    kind = "error"

    def __init__(self, provider: str, message: str):
        super().__init__(message)
        self.provider = provider
        self.message = message

    @property
    def reason(self) -> str:
        return f"{self.kind}: {self.message}"


class ProviderTimeout(ProviderError):
    kind = "timeout"


class NetworkError(ProviderError):
    kind = "network"


class HttpStatusError(ProviderError):
    kind = "http_status"

    def __init__(self, provider: str, status_code: int, message: Optional[str] = None):
        super().__init__(provider, message or f"HTTP {status_code}")
        self.status_code = status_code


class InvalidJSONError(ProviderError):
    kind = "invalid_json"


class InvalidShapeError(ProviderError):
    kind = "invalid_shape"

    def __init__(self, provider: str, message: str, raw: Any = None):
        super().__init__(provider, message)
        # Decoded body, kept only long enough to log its keys
        self.raw = raw


class InvalidConfigError(ProviderError):
    kind = "invalid_config"
