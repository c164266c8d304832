"""Client registry with ordered first-match dispatch."""

from typing import Any

import httpx
import structlog

from smart_link_formatter.clients.base import LinkClient
from smart_link_formatter.exceptions import NoClientError

logger = structlog.get_logger(__name__)

# Any URL the catch-all client must accept.
_CATCH_ALL_PROBE = "https://catch-all.invalid/"


class ClientRegistry:
    """
    Registry holding the link clients in priority order.

    Clients are asked in order and the first that matches a URL handles it.
    The last client must match everything, so dispatch always succeeds.
    """

    def __init__(self, clients: list[LinkClient]) -> None:
        """
        Initialize the registry with a list of clients.

        Args:
            clients: Link clients, most specific first, catch-all last

        Raises:
            ValueError: If the list is empty or does not end in a catch-all
        """
        if not clients:
            raise ValueError("ClientRegistry needs at least one client")
        if not clients[-1].matches(_CATCH_ALL_PROBE):
            raise ValueError(f"Last client '{clients[-1].name}' must match every URL")
        self._clients = clients

    @property
    def clients(self) -> list[LinkClient]:
        """Return registered clients in dispatch order."""
        return self._clients

    def dispatch(self, url: str) -> LinkClient:
        """
        Return the client that handles a URL.

        Args:
            url: URL to format

        Returns:
            The first matching client
        """
        for client in self._clients:
            if client.matches(url):
                logger.debug("client_dispatched", client=client.name, url=url)
                return client
        raise NoClientError(url)

    def get_client(self, name: str) -> LinkClient | None:
        """Get a client by name."""
        for client in self._clients:
            if client.name == name:
                return client
        return None

    def get_status(self) -> dict[str, Any]:
        """Describe the registered clients."""
        return {
            "clients": [
                {
                    "name": c.name,
                    "display_name": c.display_name,
                    "default_format": c.default_format,
                    "variables": list(c.variables),
                }
                for c in self._clients
            ],
            "client_count": len(self._clients),
        }


def create_clients(
    http_client: httpx.AsyncClient | None = None,
    timeout_seconds: float | None = None,
) -> list[LinkClient]:
    """
    Create the built-in clients in dispatch order.

    Args:
        http_client: Shared HTTP client (optional)
        timeout_seconds: Request timeout for private clients

    Returns:
        Clients, most specific first, catch-all last
    """
    from smart_link_formatter.clients.default import DefaultClient
    from smart_link_formatter.clients.github import GitHubClient
    from smart_link_formatter.clients.image import ImageClient
    from smart_link_formatter.clients.reddit import RedditClient
    from smart_link_formatter.clients.twitter import TwitterClient
    from smart_link_formatter.clients.youtube import YouTubeClient, YouTubeMusicClient

    kwargs: dict[str, Any] = {"http_client": http_client, "timeout_seconds": timeout_seconds}

    return [
        # music.youtube.com before the generic YouTube matcher
        YouTubeMusicClient(**kwargs),
        YouTubeClient(**kwargs),
        TwitterClient(**kwargs),
        RedditClient(**kwargs),
        GitHubClient(**kwargs),
        ImageClient(**kwargs),
        # Always last: matches every URL
        DefaultClient(**kwargs),
    ]
