"""Client listing tool for MCP."""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP


def register(mcp: FastMCP) -> None:
    """Register the list_clients tool with the MCP server."""

    @mcp.tool()
    async def list_clients(
        ctx: Context[Any, Any] = None,  # type: ignore[assignment, type-arg]
    ) -> dict[str, Any]:
        """
        List the link clients in dispatch order.

        Each entry gives the client's name (the key used for template
        overrides), its built-in template, the template variables it fills,
        and the template currently in effect.

        Returns:
            Clients in the order they are tried; the last one matches any URL
        """
        from smart_link_formatter.server import AppContext

        app_ctx: AppContext = ctx.request_context.lifespan_context
        config = app_ctx.formatter.settings

        status = app_ctx.client_registry.get_status()
        for entry in status["clients"]:
            entry["active_format"] = config.get_client_format(entry["name"]) or entry["default_format"]
        return status
