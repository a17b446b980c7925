"""
Unit tests for configuration loading.
"""
from pathlib import Path

from dealscope.config import DEFAULT_APIFY_ACTOR, DEFAULT_JWT_SECRET, Config


def test_from_env_reads_every_option():
    config = Config.from_env({
        "SERPAPI_KEY": "serp",
        "FLIPKART_AFFILIATE_ID": "id",
        "FLIPKART_AFFILIATE_TOKEN": "token",
        "APIFY_TOKEN": "apify",
        "APIFY_ACTOR_ID": "me/my-actor",
        "JWT_SECRET": "secret",
        "PORT": "8080",
        "USERS_FILE": "/tmp/users.json",
        "REQUIRE_AUTH_FOR_SEARCH": "true",
        "CORS_ORIGINS": "https://a.example, https://b.example",
    })

    assert config.serpapi_configured
    assert config.flipkart_configured
    assert config.apify_configured
    assert config.apify_actor_id == "me/my-actor"
    assert config.jwt_secret == "secret"
    assert config.port == 8080
    assert config.users_file == Path("/tmp/users.json")
    assert config.require_auth_for_search is True
    assert config.get_cors_origins() == ["https://a.example", "https://b.example"]


def test_defaults_with_empty_environment():
    config = Config.from_env({})

    assert not config.serpapi_configured
    assert not config.flipkart_configured
    assert not config.apify_configured
    assert config.apify_actor_id == DEFAULT_APIFY_ACTOR
    assert config.jwt_secret == DEFAULT_JWT_SECRET
    assert config.port == 3000
    assert config.require_auth_for_search is False
    assert config.get_cors_origins() == ["*"]


def test_blank_values_count_as_missing():
    config = Config.from_env({"SERPAPI_KEY": "   ", "FLIPKART_AFFILIATE_ID": "id", "FLIPKART_AFFILIATE_TOKEN": ""})

    assert not config.serpapi_configured
    assert not config.flipkart_configured


def test_validate_reports_disabled_sources_and_dev_secret():
    warnings = Config.from_env({}).validate()

    assert any("SERPAPI_KEY" in w for w in warnings)
    assert any("FLIPKART" in w for w in warnings)
    assert any("APIFY_TOKEN" in w for w in warnings)
    assert any("JWT_SECRET" in w for w in warnings)


def test_summary_hides_secrets():
    summary = Config(serpapi_key="very-secret", jwt_secret="also-secret").get_summary()

    assert "very-secret" not in str(summary)
    assert "also-secret" not in str(summary)
    assert summary["serpapi_configured"] is True
