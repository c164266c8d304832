"""Tool registration for the MCP server."""

from mcp.server.fastmcp import FastMCP


def register_all_tools(mcp: FastMCP) -> None:
    """
    Register all tools with the MCP server.

    This function imports and registers all tool modules.

    Args:
        mcp: FastMCP server instance
    """
    # Import tool modules to trigger registration
    from smart_link_formatter.tools import clients, format_link, paste

    # Register each tool module
    format_link.register(mcp)
    paste.register(mcp)
    clients.register(mcp)
