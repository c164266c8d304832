"""
FastMCP server with all tools registered.

Configured for stateless HTTP mode for multi-client support.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
import structlog
from mcp.server.fastmcp import FastMCP

from smart_link_formatter.clients.registry import ClientRegistry, create_clients
from smart_link_formatter.config import settings
from smart_link_formatter.editor.base import Notifier
from smart_link_formatter.paste.handler import LinkFormatter
from smart_link_formatter.tools import register_all_tools
from smart_link_formatter.utils.cache import MetadataCache

logger = structlog.get_logger(__name__)


@dataclass
class AppContext:
    """Shared application resources available to all tools."""

    http_client: httpx.AsyncClient
    client_registry: ClientRegistry
    formatter: LinkFormatter
    cache: MetadataCache

    def new_formatter(self, notifier: Notifier | None = None) -> LinkFormatter:
        """
        Create a formatter for one document.

        Placeholders are tracked per formatter, so each document edited
        through a tool call gets its own. Clients and cache are shared.
        """
        return LinkFormatter(
            self.client_registry,
            config=self.formatter.settings,
            notifier=notifier,
            cache=self.cache,
        )


@asynccontextmanager
async def app_lifespan(_server: FastMCP) -> AsyncIterator[AppContext]:
    """
    Manage application lifecycle.

    Initialize expensive resources once, share across all requests.
    """
    logger.info(
        "starting_mcp_server",
        server_name="Smart Link Formatter",
        debug=settings.debug,
    )

    # HTTP client with connection pooling
    http_client = httpx.AsyncClient(
        limits=httpx.Limits(
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_keepalive_connections,
        ),
        timeout=httpx.Timeout(
            connect=5.0,
            read=settings.request_timeout,
            write=10.0,
            pool=5.0,
        ),
        headers={"User-Agent": settings.user_agent},
        verify=settings.get_ssl_context(),
        http2=True,
        follow_redirects=True,
    )

    registry = ClientRegistry(create_clients(http_client))
    logger.info(
        "clients_initialized",
        clients=[c.name for c in registry.clients],
    )

    cache = MetadataCache(
        ttl_seconds=settings.cache_ttl_seconds,
        max_size=settings.cache_max_size,
        enabled=settings.cache_enabled,
    )

    formatter = LinkFormatter(registry, config=settings, cache=cache)

    try:
        yield AppContext(
            http_client=http_client,
            client_registry=registry,
            formatter=formatter,
            cache=cache,
        )
    finally:
        logger.info("shutting_down_mcp_server")
        await formatter.drain()
        await http_client.aclose()
        await cache.close()


# Create FastMCP server
# stateless_http=True allows multiple concurrent clients
# json_response=True for structured responses
mcp = FastMCP(
    "Smart Link Formatter",
    lifespan=app_lifespan,
    stateless_http=True,
    json_response=True,
)

register_all_tools(mcp)
