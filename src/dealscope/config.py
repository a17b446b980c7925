"""
Configuration management for DealScope.

The configuration is read from the environment once, at process start, and
the resulting ``Config`` instance is handed to the app factory, the
aggregator and every source adapter.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
STATIC_DIR = PROJECT_ROOT / "static"
DATA_DIR = PROJECT_ROOT / "data"

DEFAULT_JWT_SECRET = "dev_secret"
DEFAULT_APIFY_ACTOR = "easyapi/ajio-product-scraper"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _as_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Application configuration."""

    # Source credentials
    serpapi_key: Optional[str] = None
    flipkart_affiliate_id: Optional[str] = None
    flipkart_affiliate_token: Optional[str] = None
    apify_token: Optional[str] = None
    apify_actor_id: str = DEFAULT_APIFY_ACTOR

    # Auth
    jwt_secret: str = DEFAULT_JWT_SECRET
    users_file: Path = field(default_factory=lambda: DATA_DIR / "users.json")
    require_auth_for_search: bool = False

    # Flask settings
    flask_env: str = "development"
    flask_debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: str = "*"
    static_dir: Path = STATIC_DIR

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Config:
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ`` after
                loading a ``.env`` file when one exists.

        Returns:
            Populated Config instance
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        def get(name: str) -> Optional[str]:
            value = environ.get(name)
            return value.strip() if value and value.strip() else None

        return cls(
            serpapi_key=get("SERPAPI_KEY"),
            flipkart_affiliate_id=get("FLIPKART_AFFILIATE_ID"),
            flipkart_affiliate_token=get("FLIPKART_AFFILIATE_TOKEN"),
            apify_token=get("APIFY_TOKEN"),
            apify_actor_id=get("APIFY_ACTOR_ID") or DEFAULT_APIFY_ACTOR,
            jwt_secret=get("JWT_SECRET") or DEFAULT_JWT_SECRET,
            users_file=Path(get("USERS_FILE") or DATA_DIR / "users.json"),
            require_auth_for_search=_as_bool(get("REQUIRE_AUTH_FOR_SEARCH")),
            flask_env=get("FLASK_ENV") or "development",
            flask_debug=_as_bool(get("FLASK_DEBUG")),
            host=get("HOST") or "0.0.0.0",
            port=int(get("PORT") or 3000),
            cors_origins=get("CORS_ORIGINS") or "*",
            log_level=get("LOG_LEVEL") or "INFO",
        )

    @property
    def serpapi_configured(self) -> bool:
        return bool(self.serpapi_key)

    @property
    def flipkart_configured(self) -> bool:
        return bool(self.flipkart_affiliate_id and self.flipkart_affiliate_token)

    @property
    def apify_configured(self) -> bool:
        return bool(self.apify_token)

    def get_cors_origins(self) -> list[str]:
        """Split the configured CORS origins into a list."""
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return origins or ["*"]

    def validate(self) -> list[str]:
        """
        Validate configuration.

        Missing source credentials only disable that source, so these are
        warnings rather than fatal errors.

        Returns:
            List of validation messages (empty if fully configured)
        """
        errors = []

        if not self.serpapi_configured:
            errors.append("SERPAPI_KEY not set (SerpApi source disabled)")
        if not self.flipkart_configured:
            errors.append(
                "FLIPKART_AFFILIATE_ID/FLIPKART_AFFILIATE_TOKEN not set (Flipkart source disabled)"
            )
        if not self.apify_configured:
            errors.append("APIFY_TOKEN not set (Apify source disabled)")
        if self.jwt_secret == DEFAULT_JWT_SECRET:
            errors.append("JWT_SECRET not set, using the development secret")
        if not (self.static_dir / "index.html").exists():
            errors.append(f"Frontend entry page not found: {self.static_dir / 'index.html'}")

        return errors

    def is_valid(self) -> bool:
        """Check if configuration is valid."""
        return len(self.validate()) == 0

    def get_summary(self) -> dict:
        """Get configuration summary (safe for logging)."""
        return {
            "flask_env": self.flask_env,
            "flask_debug": self.flask_debug,
            "serpapi_configured": self.serpapi_configured,
            "flipkart_configured": self.flipkart_configured,
            "apify_configured": self.apify_configured,
            "apify_actor_id": self.apify_actor_id,
            "require_auth_for_search": self.require_auth_for_search,
            "users_file": str(self.users_file),
            "log_level": self.log_level,
        }
