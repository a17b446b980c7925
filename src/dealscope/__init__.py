"""
DealScope - Product price aggregation.

Searches several shopping data sources at once and returns one
deduplicated list ordered by price.
"""

__version__ = "1.0.0"
__author__ = "DealScope"

from .models import AggregatedResult, NormalizedItem, User
from .search.aggregator import Aggregator

__all__ = [
    "AggregatedResult",
    "NormalizedItem",
    "User",
    "Aggregator",
]
