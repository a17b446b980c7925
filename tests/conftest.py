"""
Pytest configuration and fixtures for DealScope tests.
"""
import sys
from pathlib import Path
from typing import List, Optional

# Add src to path for imports
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

import pytest
from dealscope.api import create_app
from dealscope.config import Config
from dealscope.models import NormalizedItem
from dealscope.search import Aggregator
from dealscope.sources import ProductSource


class FakeSource(ProductSource):
    """In-memory source returning canned items or raising a canned error."""

    def __init__(
        self,
        name: str,
        items: Optional[List[NormalizedItem]] = None,
        *,
        configured: bool = True,
        error: Optional[Exception] = None,
    ):
        super().__init__(Config())
        self.name = name
        self.items = items or []
        self.configured = configured
        self.error = error
        self.calls: List[str] = []

    def is_configured(self) -> bool:
        return self.configured

    def fetch(self, query: str) -> List[NormalizedItem]:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return list(self.items)


def item(source: str, title: str = "", price=None, link: Optional[str] = None) -> NormalizedItem:
    return NormalizedItem(source=source, title=title, price=price, link=link, raw={"title": title})


@pytest.fixture
def config(tmp_path):
    """Configuration with no sources enabled and a throwaway user store."""
    return Config(
        jwt_secret="test-secret",
        users_file=tmp_path / "users.json",
    )


@pytest.fixture
def app(config):
    """App whose aggregator has no configured sources."""
    app = create_app(config, aggregator=Aggregator.from_config(config))
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
