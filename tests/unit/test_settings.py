"""Unit tests for settings helpers."""

import pytest

from smart_link_formatter.config.settings import Settings
from smart_link_formatter.models import FailureMode, TitleReplacement


def test_defaults():
    """Test default settings values."""
    base = Settings()
    assert base.auto_link is True
    assert base.failure_mode is FailureMode.REVERT
    assert base.timeout_seconds == 10.0


def test_blacklisted_domains_parsing():
    """Test blacklisted domains from a comma-separated string."""
    base = Settings(blacklisted_domains=" internal.corp, ,localhost ")
    assert base.get_blacklisted_domains() == ["internal.corp", "localhost"]


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://wiki.internal.corp/page", True),
        ("http://localhost:8080/x", True),
        ("https://example.com", False),
        ("not a url", True),
        ("https://[invalid", True),
    ],
)
def test_is_blacklisted(url, expected):
    """Test blacklist matching on hostnames."""
    base = Settings(blacklisted_domains="internal.corp,localhost")
    assert base.is_blacklisted(url) is expected


def test_empty_blacklist_allows_valid_urls():
    """Test nothing is blacklisted by default."""
    assert Settings().is_blacklisted("https://example.com") is False


def test_client_format_override():
    """Test per-client format overrides."""
    base = Settings(client_formats={"youtube": "[{title}] ({duration})", "reddit": ""})
    assert base.get_client_format("youtube") == "[{title}] ({duration})"
    assert base.get_client_format("reddit") is None
    assert base.get_client_format("github") is None


def test_title_replacements_from_dicts():
    """Test title rules load from plain dicts."""
    base = Settings(title_replacements=[{"pattern": " - YouTube$"}])
    assert base.title_replacements == [TitleReplacement(pattern=" - YouTube$")]


def test_failure_mode_from_string():
    """Test failure mode parses from a string."""
    assert Settings(failure_mode="alert").failure_mode is FailureMode.ALERT


def test_env_prefix(monkeypatch):
    """Test settings load from LINKFMT_ variables."""
    monkeypatch.setenv("LINKFMT_AUTO_LINK", "false")
    monkeypatch.setenv("LINKFMT_CLIENT_FORMATS", '{"github": "[{title}]"}')
    base = Settings()
    assert base.auto_link is False
    assert base.get_client_format("github") == "[{title}]"


def test_ssl_context():
    """Test SSL verification settings."""
    assert Settings().get_ssl_context() is True
    assert Settings(ssl_ca_bundle="/etc/ca.pem").get_ssl_context() == "/etc/ca.pem"
    assert Settings(ssl_verify=False, ssl_ca_bundle="/etc/ca.pem").get_ssl_context() is False


def test_cors_origins():
    """Test CORS origins from a comma-separated string."""
    assert Settings(cors_origins="https://a.example, https://b.example").get_cors_origins() == [
        "https://a.example",
        "https://b.example",
    ]
