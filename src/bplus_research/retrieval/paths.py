"""Dot-path navigation through JSON documents of unknown shape.

This is the only place that deals with arbitrary response structure. Every
other module asks for a path and gets either a value or ABSENT back.
"""

from typing import Any


class _Absent:
    """Sentinel for a path that could not be resolved."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


def split_path(path: str) -> list:
    return path.split(".") if path else []


def extract(document: Any, path: str) -> Any:
    """
    Follows `path` through nested mappings.

    An empty path returns the document itself (root-array APIs). Each
    segment is a mapping key; positions in arrays are never indexed.
    Returns ABSENT on a missing key, a non-mapping intermediate value or a
    JSON null.
    """
    current = document
    for segment in split_path(path):
        if not isinstance(current, dict) or segment not in current:
            return ABSENT
        current = current[segment]
        if current is None:
            return ABSENT
    if current is None:
        return ABSENT
    return current


def is_absent(value: Any) -> bool:
    return value is ABSENT
