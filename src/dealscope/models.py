"""
Data models for DealScope product aggregation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

Price = Union[int, float, str, None]


@dataclass(slots=True)
class NormalizedItem:
    """
    Product listing in the shape shared by every source.

    Attributes:
        source: Source label (e.g. "flipkart", "ajio", or the shop name SerpApi reports)
        title: Product title ("" when the provider gave none)
        price: Numeric price, or the provider's raw price string before coercion
        link: Product URL
        thumbnail: Image URL
        raw: The provider's original record, kept for debugging
    """

    source: str
    title: str = ""
    price: Price = None
    link: Optional[str] = None
    thumbnail: Optional[str] = None
    raw: Any = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "price": self.price,
            "link": self.link,
            "thumbnail": self.thumbnail,
            "source": self.source,
            "raw": self.raw,
        }

    def has_numeric_price(self) -> bool:
        return isinstance(self.price, (int, float)) and not isinstance(self.price, bool)


@dataclass
class AggregatedResult:
    """
    Merged, deduplicated and price-sorted results for one query.

    Attributes:
        query: The query as the client sent it
        results: Items in ascending price order, unpriced items last
    """

    query: str
    results: List[NormalizedItem] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "query": self.query,
            "results": [item.to_dict() for item in self.results],
        }


@dataclass
class User:
    """A registered user as persisted in the flat user store."""

    id: int
    email: str
    password_hash: str
    name: str = ""

    @classmethod
    def from_record(cls, record: dict) -> User:
        return cls(
            id=int(record["id"]),
            name=record.get("name") or "",
            email=record["email"],
            password_hash=record["passwordHash"],
        )

    def to_record(self) -> dict:
        """Storage representation, including the password hash."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "passwordHash": self.password_hash,
        }

    def to_public_dict(self) -> dict:
        """Fields that are safe to return to clients."""
        return {"id": self.id, "name": self.name, "email": self.email}
