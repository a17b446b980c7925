"""Fan-out product search across every configured source."""
from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Sequence

from ..config import Config
from ..errors import SourceNotConfigured
from ..logger import get_logger
from ..models import AggregatedResult, NormalizedItem
from ..sources import ApifySource, FlipkartSource, ProductSource, SerpApiSource
from ..utils.pricing import coerce_price, dedupe_key

logger = get_logger(__name__)


class Aggregator:
    """
    Searches all sources concurrently and merges their listings.

    ``sources`` are given in precedence order: when two sources list the same
    product, the entry of the earlier source is kept.
    """

    def __init__(self, sources: Sequence[ProductSource]) -> None:
        self.sources = list(sources)

    @classmethod
    def from_config(cls, config: Config) -> Aggregator:
        """Default source line-up: affiliate first, scraper second, generic search last."""
        return cls([FlipkartSource(config), ApifySource(config), SerpApiSource(config)])

    def aggregate(self, query: str) -> AggregatedResult:
        """
        Search every source for ``query``.

        Returns:
            AggregatedResult with deduplicated items in ascending price order
        """
        per_source = self._fetch_all(query)

        combined: List[NormalizedItem] = []
        for source in self.sources:
            combined.extend(per_source.get(source.name, []))

        results = sort_by_price(dedupe(combined))
        counts = {name: len(items) for name, items in per_source.items()}
        logger.info(
            f"Aggregated {len(results)} results for '{query}' "
            f"({len(combined)} before dedupe, per source: {counts})"
        )
        return AggregatedResult(query=query, results=results)

    def _fetch_all(self, query: str) -> Dict[str, List[NormalizedItem]]:
        configured = [s for s in self.sources if s.is_configured()]
        per_source: Dict[str, List[NormalizedItem]] = {
            s.name: [] for s in self.sources if not s.is_configured()
        }
        if not configured:
            logger.info("No product sources configured")
            return per_source

        # Fixed fan-out: one worker per source, all joined before merging
        with ThreadPoolExecutor(max_workers=len(configured)) as executor:
            futures = {
                source.name: executor.submit(self._safe_fetch, source, query)
                for source in configured
            }
            for name, future in futures.items():
                per_source[name] = future.result()

        return per_source

    @staticmethod
    def _safe_fetch(source: ProductSource, query: str) -> List[NormalizedItem]:
        """Run one source, turning any failure into an empty contribution."""
        try:
            return list(source.fetch(query))
        except SourceNotConfigured as e:
            logger.warning(f"{source.name} skipped: {e}")
        except Exception as e:
            logger.error(f"{source.name} error: {e}", exc_info=True)
        return []


def dedupe(items: Iterable[NormalizedItem]) -> List[NormalizedItem]:
    """
    Keep the first item per dedupe key, dropping items without one, and
    coerce every kept item's price to a number (or None).
    """
    seen = set()
    out: List[NormalizedItem] = []
    for item in items:
        key = dedupe_key(item.link, item.title)
        if not key or key in seen:
            continue
        seen.add(key)
        item.price = coerce_price(item.price)
        out.append(item)
    return out


def _price_sort_key(item: NormalizedItem) -> float:
    return item.price if item.has_numeric_price() else math.inf


def sort_by_price(items: Iterable[NormalizedItem]) -> List[NormalizedItem]:
    """Stable ascending sort by price; unpriced items go last."""
    return sorted(items, key=_price_sort_key)
