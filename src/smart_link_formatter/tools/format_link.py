"""Single link formatting tool for MCP."""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from smart_link_formatter.exceptions import InvalidURLError


def register(mcp: FastMCP) -> None:
    """Register the format_link tool with the MCP server."""

    @mcp.tool()
    async def format_link(
        url: str,
        ctx: Context[Any, Any] = None,  # type: ignore[assignment, type-arg]
    ) -> dict[str, Any]:
        """
        Turn a URL into a formatted markdown link.

        The site is recognised (YouTube, YouTube Music, Twitter/X, Reddit,
        GitHub, images, any other web page), its metadata is fetched and
        rendered through the site's template.

        Args:
            url: http(s) URL to format (required)

        Returns:
            The markdown text, the client that handled the URL and its metadata
        """
        from smart_link_formatter.server import AppContext

        app_ctx: AppContext = ctx.request_context.lifespan_context

        try:
            result = await app_ctx.formatter.format_link(url.strip())
        except InvalidURLError as e:
            return {
                "url": url,
                "client": None,
                "markdown": url,
                "metadata": {},
                "success": False,
                "error_message": e.message,
            }

        return result.model_dump()
