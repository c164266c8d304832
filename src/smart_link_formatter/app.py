"""
Starlette ASGI application with FastMCP server mounted.

Designed for multi-client access via Streamable HTTP transport.
"""

import contextlib
from collections.abc import AsyncIterator

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from smart_link_formatter import __version__
from smart_link_formatter.config import settings
from smart_link_formatter.server import mcp

logger = structlog.get_logger(__name__)


@contextlib.asynccontextmanager
async def lifespan(_app: Starlette) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Initializes shared resources on startup, cleans up on shutdown.
    """
    logger.info(
        "starting_http_server",
        host=settings.host,
        port=settings.port,
        debug=settings.debug,
    )

    # MCP server has its own lifespan, managed via session_manager
    async with mcp.session_manager.run():
        yield

    logger.info("http_server_shutdown")


async def health_check(_request: Request) -> JSONResponse:
    """
    Liveness check.

    Always returns 200 if the server is running. Link clients are not
    probed: a site being down only degrades the titles of its links.
    """
    return JSONResponse(
        {
            "healthy": True,
            "version": __version__,
            "auto_link": settings.auto_link,
            "failure_mode": settings.failure_mode.value,
            "cache_enabled": settings.cache_enabled,
        },
        status_code=200,
    )


async def root(_request: Request) -> JSONResponse:
    """Root endpoint with server information."""
    return JSONResponse(
        {
            "name": "Smart Link Formatter",
            "version": __version__,
            "description": "An MCP server that turns pasted URLs into formatted markdown links",
            "endpoints": {
                "mcp": "/mcp",
                "health": "/health",
            },
            "tools": [
                "format_link",
                "paste_url",
                "sweep_placeholders",
                "list_clients",
            ],
        }
    )


# Define middleware
middleware = [
    Middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Mcp-Session-Id"],  # Required for MCP sessions
    ),
]

# Build Starlette application
app = Starlette(
    debug=settings.debug,
    routes=[
        Route("/", root, methods=["GET"]),
        Route("/health", health_check, methods=["GET"]),
        # MCP endpoint - Streamable HTTP
        Mount("/mcp", app=mcp.streamable_http_app()),
    ],
    middleware=middleware,
    lifespan=lifespan,
)
