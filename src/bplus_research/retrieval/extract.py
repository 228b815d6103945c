import html
import re
from typing import Any, Dict, List, Optional
from .paths import ABSENT, extract
from .url import resolve_url
from ..schemas.providers import ProviderSpec
from ..schemas.results import ResultItem
from ..config import get_settings

settings = get_settings()

# Search APIs wrap matches in <span class="searchmatch"> and friends. Only known
# HTML elements are stripped so text like Vec<T> survives.
_TAG_RE = re.compile(
    r"</?(?:a|b|i|u|s|em|strong|span|mark|p|br|hr|div|code|pre|small|sup|sub|ul|ol|li|blockquote|h[1-6]|img|font)"
    r"(?:\s[^<>]*)?/?>",
    re.IGNORECASE,
)
_WS_RE = re.compile(r"\s+")


def as_text(value: Any) -> str:
    """
    Coerces an extracted value to a text field.
    ABSENT, nested containers and null become "", scalars are stringified.
    """
    if value is ABSENT or value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def clean_content(text: str, max_chars: Optional[int] = None) -> str:
    if not text:
        return ""
    text = html.unescape(_TAG_RE.sub("", text))
    text = _WS_RE.sub(" ", text).strip()
    limit = settings.CONTENT_MAX_CHARS if max_chars is None else max_chars
    # Naive truncation
    return text[:limit]


def extract_field(item: Any, path: str) -> str:
    # An empty item path means the field is not configured for this provider
    if not path:
        return ""
    return as_text(extract(item, path))


def build_item(spec: ProviderSpec, item: Any) -> Optional[ResultItem]:
    """
    Normalizes one raw element. Returns None when neither url nor title
    resolved, so blank citations never surface.
    """
    # Titles keep their text verbatim; StackExchange sends them HTML-escaped
    title = html.unescape(extract_field(item, spec.title_path))
    url = resolve_url(extract_field(item, spec.url_path), spec.url_prefix)
    if not url and not title:
        return None
    content = clean_content(extract_field(item, spec.content_path))
    return ResultItem(source=spec.name, title=title, url=url, content=content)


def build_items(spec: ProviderSpec, elements: List[Any]) -> List[ResultItem]:
    items = []
    for element in elements:
        built = build_item(spec, element)
        if built is not None:
            items.append(built)
    return items


def missing_fields(spec: ProviderSpec, items: List[ResultItem]) -> List[str]:
    """Configured fields that came back empty on at least one emitted item."""
    missing = []
    fields: Dict[str, str] = {
        "title": spec.title_path,
        "url": spec.url_path,
        "content": spec.content_path,
    }
    for field, path in fields.items():
        if path and any(not getattr(item, field) for item in items):
            missing.append(field)
    return missing
