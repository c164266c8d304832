"""MCP tools for Smart Link Formatter."""

from smart_link_formatter.tools.registration import register_all_tools

__all__ = ["register_all_tools"]
