"""
Flask web API for DealScope.
"""
from .app import create_app

__all__ = ["create_app"]
