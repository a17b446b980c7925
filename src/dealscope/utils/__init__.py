"""
Utility modules for DealScope.
"""
from .pricing import coerce_price, dedupe_key, strip_query_string

__all__ = [
    "coerce_price",
    "dedupe_key",
    "strip_query_string",
]
