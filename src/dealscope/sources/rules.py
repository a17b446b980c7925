"""
Ordered field-extraction rules for providers whose record shape varies.

A rule is a pure function ``record -> value | None``. A field is read by
applying its rules in order and keeping the first non-empty value, so each
provider's format quirks stay in one declarative table.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Sequence

Rule = Callable[[Any], Any]


def path(*keys: str) -> Rule:
    """Rule reading a nested key path, e.g. ``path("a", "b")`` for ``record["a"]["b"]``."""

    def rule(record: Any) -> Any:
        value = record
        for key in keys:
            if not isinstance(value, dict):
                return None
            value = value.get(key)
        return value

    rule.__name__ = "path_" + "_".join(keys)
    return rule


def first_of(inner: Rule) -> Rule:
    """
    Rule returning the first element of a list (or the first value of a
    mapping) produced by ``inner``.
    """

    def rule(record: Any) -> Any:
        value = inner(record)
        if isinstance(value, dict):
            value = list(value.values())
        if isinstance(value, (list, tuple)) and value:
            return value[0]
        return None

    rule.__name__ = f"first_of_{getattr(inner, '__name__', 'rule')}"
    return rule


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {} or value is False or value == 0


def extract(record: Any, rules: Iterable[Rule], default: Optional[Any] = None) -> Any:
    """Apply ``rules`` in order and return the first non-empty value."""
    for rule in rules:
        value = rule(record)
        if not _is_empty(value):
            return value
    return default


def find_container(payload: Any, keys: Sequence[str]) -> list:
    """Return the first list found under one of ``keys`` in ``payload``."""
    if not isinstance(payload, dict):
        return []
    for key in keys:
        value = payload.get(key)
        if value:
            return value if isinstance(value, list) else []
    return []
