"""Shared test fixtures for the Smart Link Formatter test suite."""

from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
import respx

# ─── Pytest Configuration ────────────────────────────────────────


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no I/O)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")


# ─── Async Backend ───────────────────────────────────────────────


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


# ─── Settings Fixtures ───────────────────────────────────────────


@pytest.fixture
def test_settings():
    """Test settings with caching off and a short timeout."""
    from smart_link_formatter.config import Settings

    return Settings(
        debug=True,
        log_level="DEBUG",
        cache_enabled=False,
        timeout_seconds=2.0,
    )


# ─── HTTP Client Fixtures ────────────────────────────────────────


@pytest.fixture
async def http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client for tests."""
    async with httpx.AsyncClient(follow_redirects=True) as client:
        yield client


@pytest.fixture
def mock_http():
    """RESPX mock router for HTTP mocking."""
    with respx.mock(assert_all_called=False) as router:
        yield router


# ─── Client Fixtures ─────────────────────────────────────────────


@pytest.fixture
def client_registry(http_client):
    """Registry with the built-in clients sharing one HTTP client."""
    from smart_link_formatter.clients import ClientRegistry, create_clients

    return ClientRegistry(create_clients(http_client))


@pytest.fixture
def notifier():
    """Notifier that records notices."""
    from smart_link_formatter.editor import CollectingNotifier

    return CollectingNotifier()


@pytest.fixture
def formatter(client_registry, test_settings, notifier):
    """Formatter over the built-in clients."""
    from smart_link_formatter.paste import LinkFormatter

    return LinkFormatter(client_registry, config=test_settings, notifier=notifier)


# ─── Sample Data Fixtures ────────────────────────────────────────


@pytest.fixture
def sample_html_content() -> str:
    """Sample HTML page with title and meta tags."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <meta name="description" content="Test page description">
        <meta property="og:site_name" content="Example Site">
        <title>Test Page Title</title>
    </head>
    <body>
        <h1>Welcome to Test Page</h1>
        <p>This is a test paragraph.</p>
    </body>
    </html>
    """


@pytest.fixture
def sample_youtube_page() -> str:
    """Watch page with an embedded player response."""
    return """
    <html><head><title>Video - YouTube</title></head><body>
    <script>var ytInitialPlayerResponse = {"videoDetails": {"videoId": "abc",
    "title": "Never Gonna Give You Up", "author": "Rick Astley",
    "shortDescription": "The official video", "viewCount": "1500000000",
    "lengthSeconds": "213"}, "microformat": {"playerMicroformatRenderer":
    {"publishDate": "2009-10-24", "ownerChannelName": {"simpleText": "Rick Astley"}}}};
    var meta = document.createElement('meta');</script>
    </body></html>
    """


@pytest.fixture
def sample_tweet_oembed() -> dict:
    """Twitter oEmbed response."""
    return {
        "url": "https://twitter.com/jack/status/20",
        "author_name": "jack",
        "author_url": "https://twitter.com/jack",
        "html": (
            '<blockquote class="twitter-tweet"><p lang="en" dir="ltr">'
            "just setting up my twttr</p>&mdash; jack (@jack) "
            '<a href="https://twitter.com/jack/status/20">March 21, 2006</a></blockquote>'
        ),
        "provider_name": "Twitter",
    }


@pytest.fixture
def sample_reddit_listing() -> list:
    """Reddit post listing."""
    return [
        {
            "kind": "Listing",
            "data": {
                "children": [
                    {
                        "kind": "t3",
                        "data": {
                            "title": "What is your favourite [Python] trick?",
                            "subreddit": "Python",
                            "author": "someone",
                            "link_flair_text": "Discussion",
                            "score": 1234,
                            "num_comments": 56,
                            "created_utc": 1700000000.0,
                        },
                    }
                ]
            },
        },
        {"kind": "Listing", "data": {"children": []}},
    ]


@pytest.fixture
def sample_github_repo() -> dict:
    """GitHub repository API response."""
    return {
        "full_name": "encode/httpx",
        "description": "A next generation HTTP client for Python.",
        "stargazers_count": 13000,
        "language": "Python",
        "created_at": "2019-04-04T12:00:00Z",
        "updated_at": "2024-05-01T08:30:00Z",
    }


@pytest.fixture
def sample_github_issue() -> dict:
    """GitHub issue API response."""
    return {
        "number": 42,
        "title": "Support HTTP/3",
        "state": "open",
        "user": {"login": "octocat"},
        "created_at": "2024-01-02T03:04:05Z",
        "updated_at": "2024-01-03T03:04:05Z",
    }
