"""Document editing tools for MCP: paste a URL, clean up placeholders."""

from typing import Any

from mcp.server.fastmcp import Context, FastMCP

from smart_link_formatter.editor import CollectingNotifier, EditorPosition, TextBuffer


def register(mcp: FastMCP) -> None:
    """Register the paste_url and sweep_placeholders tools with the MCP server."""

    @mcp.tool()
    async def paste_url(
        document: str,
        text: str,
        line: int,
        ch: int,
        selection_end_line: int | None = None,
        selection_end_ch: int | None = None,
        ctx: Context[Any, Any] = None,  # type: ignore[assignment, type-arg]
    ) -> dict[str, Any]:
        """
        Paste text into a markdown document, formatting it if it is a URL.

        URLs pasted into code, frontmatter, comments or a link target are
        pasted unchanged, as is anything that is not a URL.

        Args:
            document: Full document text (required)
            text: Text being pasted (required)
            line: Zero-based cursor line
            ch: Zero-based cursor column
            selection_end_line: Line of the other end of a selection, if any
            selection_end_ch: Column of the other end of a selection, if any

        Returns:
            The updated document, whether the paste was formatted, and notices
        """
        from smart_link_formatter.server import AppContext

        app_ctx: AppContext = ctx.request_context.lifespan_context

        selection_end = None
        if selection_end_line is not None and selection_end_ch is not None:
            selection_end = EditorPosition(selection_end_line, selection_end_ch)
        buffer = TextBuffer(document, cursor=EditorPosition(line, ch), selection_end=selection_end)

        notifier = CollectingNotifier()
        formatter = app_ctx.new_formatter(notifier)

        operation = formatter.handle_paste(buffer, text)
        if operation is None:
            buffer.replace_selection(text)
            formatted = False
            state = None
        else:
            await operation.wait()
            formatted = True
            state = operation.state.value

        cursor = buffer.get_cursor()
        return {
            "document": buffer.get_value(),
            "formatted": formatted,
            "state": state,
            "cursor": {"line": cursor.line, "ch": cursor.ch},
            "notices": notifier.messages,
        }

    @mcp.tool()
    async def sweep_placeholders(
        document: str,
        ctx: Context[Any, Any] = None,  # type: ignore[assignment, type-arg]
    ) -> dict[str, Any]:
        """
        Rewrite leftover "Loading..." placeholders in a document.

        Placeholders left behind by an interrupted paste are replaced by an
        inert "Failed to resolve link" marker.

        Args:
            document: Full document text (required)

        Returns:
            The updated document and the number of placeholders rewritten
        """
        from smart_link_formatter.server import AppContext

        app_ctx: AppContext = ctx.request_context.lifespan_context

        buffer = TextBuffer(document)
        swept = app_ctx.new_formatter().sweep_orphans(buffer)

        return {"document": buffer.get_value(), "swept": swept}
