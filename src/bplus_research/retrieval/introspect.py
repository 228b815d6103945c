"""Authoring aid for new providers.

Shows which keys the first result item of a raw response exposes, so an
operator can write title/url/content paths without reading the API docs.
"""

from typing import Any, List
from .paths import extract
from ..schemas.providers import ProviderSpec


def describe_first_item(spec: ProviderSpec, raw_response: Any) -> List[str]:
    """Keys of the first element of the array at `spec.results_path`."""
    elements = extract(raw_response, spec.results_path)
    if not isinstance(elements, list) or not elements:
        return []
    first = elements[0]
    if not isinstance(first, dict):
        return []
    return list(first.keys())


def describe_root(raw_response: Any) -> List[str]:
    if not isinstance(raw_response, dict):
        return []
    return list(raw_response.keys())


def format_introspection(spec: ProviderSpec, raw_response: Any) -> str:
    keys = describe_first_item(spec, raw_response)
    if keys:
        return f"[{spec.name}] first item keys at '{spec.results_path}': {', '.join(keys)}"
    root = describe_root(raw_response)
    if root:
        return f"[{spec.name}] no item list at '{spec.results_path}'; top-level keys: {', '.join(root)}"
    return f"[{spec.name}] no item list at '{spec.results_path}' and no top-level keys"
