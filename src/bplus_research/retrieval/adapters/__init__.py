"""Provider catalogue.

Combines the built-in providers (native public APIs, optional SearXNG)
with the operator's YAML file into the ordered snapshot used for one query.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from pydantic import ValidationError
from ...config import Settings, get_settings, load_provider_records
from ...log import get_logger
from ...schemas.providers import ProviderSpec
from .native import native_specs
from .searxng import searxng_spec

logger = get_logger("providers")


def builtin_specs(settings: Settings) -> List[ProviderSpec]:
    specs = native_specs() if settings.NATIVE_SEARCH_ENABLED else []
    searxng = searxng_spec(settings)
    if searxng is not None:
        specs.append(searxng)
    return specs


def _validation_summary(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'record'}: {err['msg']}"
        for err in error.errors()
    )


def parse_specs(records: List[Dict[str, Any]], origin: str = "config") -> List[ProviderSpec]:
    """
    Builds specs from raw records. A record that fails validation becomes a
    placeholder whose config_error() carries the message, so it is reported
    as that provider's failure instead of sinking the whole snapshot.
    """
    specs = []
    for i, record in enumerate(records):
        try:
            specs.append(ProviderSpec.model_validate(record))
        except ValidationError as e:
            name = record.get("name")
            name = "" if name is None else str(name)
            summary = _validation_summary(e)
            logger.warning(f"{origin}: provider {name or f'#{i + 1}'} is malformed: {summary}")
            specs.append(ProviderSpec(
                name=name,
                url_template="",
                enabled=record.get("enabled", True) is not False,
                load_error=f"malformed provider record: {summary}",
            ))
    return specs


class ProviderRegistry:
    """
    Loads user providers from PROVIDERS_PATH and caches them until the
    file's modification time changes. Each snapshot is an immutable tuple.
    """

    def __init__(self, path: Optional[str] = None):
        self._path = path
        self._loaded_from: Optional[Path] = None
        self._mtime: Optional[int] = None
        self._user_specs: Tuple[ProviderSpec, ...] = ()

    @property
    def path(self) -> Path:
        return Path(self._path or get_settings().PROVIDERS_PATH)

    def user_specs(self) -> Tuple[ProviderSpec, ...]:
        path = self.path
        mtime = path.stat().st_mtime_ns if path.exists() else None
        if path == self._loaded_from and mtime == self._mtime:
            return self._user_specs

        records = load_provider_records(str(path))
        self._user_specs = tuple(parse_specs(records, origin=str(path)))
        self._loaded_from = path
        self._mtime = mtime
        logger.info(f"Loaded {len(self._user_specs)} user provider(s) from {path}")
        return self._user_specs

    def snapshot(self) -> Tuple[ProviderSpec, ...]:
        return tuple(builtin_specs(get_settings())) + self.user_specs()


registry = ProviderRegistry()
