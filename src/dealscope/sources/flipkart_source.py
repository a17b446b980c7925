"""Flipkart affiliate product search."""
from __future__ import annotations

from typing import List

from ..logger import get_logger
from ..models import NormalizedItem
from .base import ProductSource
from .rules import extract, find_container, first_of, path

logger = get_logger(__name__)

API_URL = "https://affiliate-api.flipkart.net/affiliate/search/json"

# The response format varies between API versions
CONTAINER_KEYS = ("products", "productInfoList", "product")

TITLE_RULES = (
    path("productBaseInfoV1", "title"),
    path("title"),
    path("product", "title"),
)
PRICE_RULES = (
    path("productBaseInfoV1", "flipkartSellingPrice", "amount"),
    path("productBaseInfoV1", "maximumRetailPrice", "amount"),
    path("price"),
)
LINK_RULES = (
    path("productBaseInfoV1", "productUrl"),
    path("productUrl"),
    path("url"),
)
THUMBNAIL_RULES = (
    first_of(path("productBaseInfoV1", "imageUrls")),
    path("imageUrl"),
)


class FlipkartSource(ProductSource):
    """Affiliate search authenticated with an id/token header pair."""

    name = "flipkart"

    def __init__(self, config, *, limit: int = 10, timeout_s: int = 10, session=None) -> None:
        super().__init__(config, session=session)
        self.limit = limit
        self.timeout_s = timeout_s

    def is_configured(self) -> bool:
        return self.config.flipkart_configured

    def fetch(self, query: str) -> List[NormalizedItem]:
        self._require_configured("Flipkart affiliate keys")

        with self.http_session() as session:
            response = session.get(
                API_URL,
                params={"query": query, "resultCount": self.limit},
                headers={
                    "Fk-Affiliate-Id": self.config.flipkart_affiliate_id,
                    "Fk-Affiliate-Token": self.config.flipkart_affiliate_token,
                },
                timeout=self.timeout_s,
            )
            payload = self._json(response)

        products = find_container(payload, CONTAINER_KEYS)
        logger.info(f"Flipkart returned {len(products)} products for '{query}'")

        return [self.to_item(p) for p in products if isinstance(p, dict)]

    @classmethod
    def to_item(cls, record: dict) -> NormalizedItem:
        """Map one affiliate record, whatever its layout, to a NormalizedItem."""
        return NormalizedItem(
            source=cls.name,
            title=extract(record, TITLE_RULES, default=""),
            price=extract(record, PRICE_RULES),
            link=extract(record, LINK_RULES),
            thumbnail=extract(record, THUMBNAIL_RULES),
            raw=record,
        )
