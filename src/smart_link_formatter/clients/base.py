"""Base protocol and shared behaviour for link clients."""

import re
from typing import Any, ClassVar, Protocol, runtime_checkable

import httpx
import structlog

from smart_link_formatter.config import Settings, settings
from smart_link_formatter.exceptions import ClientAPIError
from smart_link_formatter.formatting import (
    apply_title_replacements,
    format_template,
    wrap_in_markdown_link,
)
from smart_link_formatter.models.common import Metadata
from smart_link_formatter.utils.markdown import escape_markdown_chars

logger = structlog.get_logger(__name__)


@runtime_checkable
class LinkClient(Protocol):
    """
    Protocol for link clients.

    A client recognises URLs of one service, fetches their metadata and
    formats them. All clients must implement this interface.
    """

    @property
    def name(self) -> str:
        """Return the stable client key (used for template overrides)."""
        ...

    @property
    def display_name(self) -> str:
        """Return a human readable client name."""
        ...

    @property
    def default_format(self) -> str:
        """Return the built-in template."""
        ...

    @property
    def variables(self) -> tuple[str, ...]:
        """Return the template variables this client can supply."""
        ...

    def matches(self, url: str) -> bool:
        """Return True if this client handles the URL."""
        ...

    async def fetch_metadata(self, url: str) -> Metadata:
        """
        Fetch metadata for a URL.

        Never raises: failures produce fallback metadata.
        """
        ...

    def fallback_metadata(self, url: str) -> Metadata:
        """Return the metadata used when fetching fails."""
        ...

    def format(self, metadata: Metadata, url: str, config: Settings) -> str:
        """Render metadata as final markdown text."""
        ...


class BaseClient:
    """
    Shared implementation for link clients.

    Subclasses set the class attributes, implement ``_fetch`` and may add
    derived fields by overriding ``derive_fields``.
    """

    name: ClassVar[str]
    display_name: ClassVar[str]
    default_format: ClassVar[str] = "[{title}]"
    variables: ClassVar[tuple[str, ...]] = ("title", "url")
    url_pattern: ClassVar[re.Pattern[str] | None] = None

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            http_client: Shared HTTP client (optional)
            timeout_seconds: Request timeout for a private client
        """
        self._http_client = http_client
        self._owns_client = http_client is None
        self._timeout = timeout_seconds if timeout_seconds is not None else settings.request_timeout

    def matches(self, url: str) -> bool:
        """Return True if the URL matches this client's pattern."""
        if self.url_pattern is None:
            return False
        return self.url_pattern.search(url) is not None

    # ─── HTTP ────────────────────────────────────────────────────────

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=True,
            headers={"User-Agent": settings.user_agent},
            verify=settings.get_ssl_context(),
        )

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request, closing the HTTP client afterwards if it is private."""
        client = await self._get_client()
        should_close = self._owns_client and self._http_client is None

        try:
            response = await client.request(method, url, **kwargs)
            logger.debug(
                "client_request",
                client=self.name,
                method=method,
                url=url,
                status_code=response.status_code,
            )
            return response
        finally:
            if should_close:
                await client.aclose()

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise ClientAPIError for any non-2xx response."""
        if not response.is_success:
            raise ClientAPIError(self.name, response.status_code, response.text[:200])

    # ─── Metadata ────────────────────────────────────────────────────

    async def fetch_metadata(self, url: str) -> Metadata:
        """
        Fetch metadata for a URL.

        Any failure is logged and answered with fallback metadata.

        Args:
            url: URL to describe

        Returns:
            Metadata mapping
        """
        try:
            return await self._fetch(url)
        except Exception as e:
            logger.warning("client_fetch_failed", client=self.name, url=url, error=str(e))
            return self.fallback_metadata(url)

    async def _fetch(self, url: str) -> Metadata:
        raise NotImplementedError

    def fallback_metadata(self, url: str) -> Metadata:
        """Metadata used when fetching fails."""
        return {"title": escape_markdown_chars(url)}

    def derive_fields(self, url: str) -> Metadata:
        """Fields computed from the URL itself rather than fetched."""
        return {}

    # ─── Formatting ──────────────────────────────────────────────────

    def get_template(self, config: Settings) -> str:
        """Return the user's override for this client, else the built-in template."""
        return config.get_client_format(self.name) or self.default_format

    def format(self, metadata: Metadata, url: str, config: Settings) -> str:
        """
        Render metadata as a markdown link.

        Args:
            metadata: Fetched metadata
            url: The URL being formatted
            config: Settings with template overrides and title rules

        Returns:
            Final markdown text
        """
        fields = {**metadata, **self.derive_fields(url)}
        text = format_template(self.get_template(config), fields, url)
        text = apply_title_replacements(text, config.title_replacements)
        return wrap_in_markdown_link(text, url)
