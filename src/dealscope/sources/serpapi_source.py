"""Google Shopping results through SerpApi."""
from __future__ import annotations

from typing import List

from serpapi import GoogleSearch

from ..errors import SourceError
from ..logger import get_logger
from ..models import NormalizedItem
from .base import ProductSource
from .rules import extract, first_of, path

logger = get_logger(__name__)

SOURCE_RULES = (path("source"), path("shop"))
PRICE_RULES = (path("price"), path("extracted_price"))
LINK_RULES = (path("link"), path("product_link"))
THUMBNAIL_RULES = (path("thumbnail"), first_of(path("thumbnails")))


class SerpApiSource(ProductSource):
    """
    Generic shopping search: one ``google_shopping`` query per search.

    ``GoogleSearch`` performs its own HTTP request, so this source takes no
    session and never calls ``http_session()``.
    """

    name = "serpapi"

    def __init__(self, config, *, limit: int = 10, timeout_s: int = 15) -> None:
        super().__init__(config, session=None)
        self.limit = limit
        self.timeout_s = timeout_s

    def is_configured(self) -> bool:
        return self.config.serpapi_configured

    def fetch(self, query: str) -> List[NormalizedItem]:
        self._require_configured("SERPAPI_KEY")

        params = {
            "engine": "google_shopping",
            "q": query,
            "api_key": self.config.serpapi_key,
            "num": self.limit,
        }
        search = GoogleSearch(params)
        search.timeout = self.timeout_s
        results = search.get_dict()

        if not isinstance(results, dict):
            raise SourceError(self.name, "unexpected response payload")
        if results.get("error"):
            raise SourceError(self.name, str(results["error"]))

        shopping_results = results.get("shopping_results") or []
        logger.info(f"SerpApi returned {len(shopping_results)} shopping results for '{query}'")

        return [self._to_item(item) for item in shopping_results if isinstance(item, dict)]

    @staticmethod
    def _to_item(item: dict) -> NormalizedItem:
        return NormalizedItem(
            source=extract(item, SOURCE_RULES, default="unknown"),
            title=item.get("title") or "",
            price=extract(item, PRICE_RULES),
            link=extract(item, LINK_RULES),
            thumbnail=extract(item, THUMBNAIL_RULES),
            raw=item,
        )
