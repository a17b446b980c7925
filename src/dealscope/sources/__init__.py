"""
Product source adapters.
"""
from .base import ProductSource
from .flipkart_source import FlipkartSource
from .apify_source import ApifySource, RunState, ScrapeRun
from .serpapi_source import SerpApiSource

__all__ = [
    "ProductSource",
    "FlipkartSource",
    "ApifySource",
    "RunState",
    "ScrapeRun",
    "SerpApiSource",
]
