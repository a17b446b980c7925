"""
Search aggregation modules.
"""
from .aggregator import Aggregator, dedupe, sort_by_price

__all__ = ["Aggregator", "dedupe", "sort_by_price"]
