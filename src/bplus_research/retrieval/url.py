ABSOLUTE_PREFIXES = ("http://", "https://")


def normalize_url(url: str) -> str:
    """
    Dedup key for a result URL.

    Case-insensitive and trailing-slash-insensitive. Empty stays empty so
    title-only results are never merged with each other.
    """
    url = url.strip()
    if not url:
        return ""
    return url.lower().rstrip("/")


def resolve_url(raw: str, prefix: str = "") -> str:
    """
    Joins a relative value (permalink, page id) onto the provider prefix.
    Absolute URLs pass through untouched.
    """
    raw = raw.strip()
    if not raw or not prefix or raw.lower().startswith(ABSOLUTE_PREFIXES):
        return raw
    if prefix.endswith("/") and raw.startswith("/"):
        return prefix + raw[1:]
    return prefix + raw
