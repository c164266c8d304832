"""
Paste handling: placeholder insertion, asynchronous formatting, replacement.

A paste is answered synchronously with a placeholder so the editor stays
responsive. Metadata is fetched in an asyncio task raced against a timeout,
and the placeholder is swapped for the final link, or for the failure text,
when the task settles. Replacement is keyed on the placeholder text, or on its
id if the marker was lost, so a placeholder the user deleted in the meantime is
simply not replaced.
"""

import asyncio
import html
from dataclasses import dataclass, field

import anyio
import structlog

from smart_link_formatter.clients.base import LinkClient
from smart_link_formatter.clients.registry import ClientRegistry
from smart_link_formatter.config import Settings, settings
from smart_link_formatter.editor.base import Editor, EditorPosition, LoggingNotifier, Notifier
from smart_link_formatter.exceptions import FetchTimeoutError, InvalidURLError
from smart_link_formatter.models.common import LinkResult, Metadata
from smart_link_formatter.paste.context import should_intercept
from smart_link_formatter.paste.placeholder import (
    Placeholder,
    PlaceholderState,
    PlaceholderTracker,
    find_placeholders,
    orphan_text,
)
from smart_link_formatter.utils.cache import MetadataCache
from smart_link_formatter.utils.markdown import extract_url_at_cursor, is_link

logger = structlog.get_logger(__name__)

FAILURE_NOTICE = "Failed to format link"
NO_LINK_NOTICE = "No link found at cursor"
UPDATE_ERROR_NOTICE = "Error updating link in file."


@dataclass
class PasteOperation:
    """One intercepted paste, from placeholder insertion to replacement."""

    placeholder: Placeholder
    url: str
    original: str
    state: PlaceholderState = PlaceholderState.INSERTED
    result: str | None = None
    task: asyncio.Task[str] | None = field(default=None, repr=False)

    async def wait(self) -> str | None:
        """Wait for the replacement and return the text that was written."""
        if self.task is not None:
            await self.task
        return self.result


class LinkFormatter:
    """
    Turns pasted URLs into formatted markdown links.

    Owns the set of active placeholders, so one instance should live as long
    as the editor session it serves.
    """

    def __init__(
        self,
        registry: ClientRegistry,
        config: Settings | None = None,
        notifier: Notifier | None = None,
        cache: MetadataCache | None = None,
    ) -> None:
        """
        Initialize the formatter.

        Args:
            registry: Client registry used for dispatch
            config: Settings (defaults to the global settings)
            notifier: User notification surface (defaults to logging)
            cache: Metadata cache (optional)
        """
        self._registry = registry
        self._settings = config or settings
        self._notifier = notifier or LoggingNotifier()
        self._cache = cache
        self._tracker = PlaceholderTracker()
        self._tasks: set[asyncio.Task[str]] = set()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def registry(self) -> ClientRegistry:
        return self._registry

    @property
    def tracker(self) -> PlaceholderTracker:
        return self._tracker

    # ─── Entry Points ────────────────────────────────────────────────

    def handle_paste(self, editor: Editor, text: str) -> PasteOperation | None:
        """
        Intercept a paste if it is a URL in plain markdown text.

        Must be called from a running event loop. The placeholder is in the
        document when this returns.

        Args:
            editor: Editor receiving the paste
            text: Pasted text

        Returns:
            The started operation, or None when the caller should paste normally
        """
        if not self._settings.auto_link:
            return None

        cursor = editor.get_cursor()
        if not should_intercept(
            text,
            editor.get_value(),
            cursor.line,
            cursor.ch,
            editor.something_selected(),
        ):
            logger.debug("paste_passed_through", line=cursor.line, ch=cursor.ch)
            return None

        return self._start(
            editor,
            url=text,
            original=text,
            start=editor.get_cursor("from"),
            end=editor.get_cursor("to"),
        )

    def format_link_at_cursor(self, editor: Editor) -> PasteOperation | None:
        """
        Reformat the URL or markdown link under the cursor.

        Args:
            editor: Editor to act on

        Returns:
            The started operation, or None if no URL is under the cursor
        """
        cursor = editor.get_cursor()
        line = editor.get_line(cursor.line)
        extraction = extract_url_at_cursor(line, cursor.ch)
        if extraction is None:
            self._notifier.notify(NO_LINK_NOTICE)
            return None

        return self._start(
            editor,
            url=extraction.url,
            original=line[extraction.start : extraction.end],
            start=EditorPosition(cursor.line, extraction.start),
            end=EditorPosition(cursor.line, extraction.end),
        )

    async def format_link(self, url: str) -> LinkResult:
        """
        Format a URL without an editor.

        Args:
            url: URL to format

        Returns:
            LinkResult with the markdown text, or the failure text on error

        Raises:
            InvalidURLError: If the text is not an http(s) URL
        """
        if not is_link(url):
            raise InvalidURLError(url, "Not an http(s) URL")
        if self._settings.is_blacklisted(url):
            return LinkResult(url=url, client=None, markdown=url)

        client = self._registry.dispatch(url)
        try:
            metadata, markdown = await self._format_with_timeout(client, url)
        except Exception as e:
            logger.warning("link_format_failed", url=url, client=client.name, error=str(e))
            return LinkResult.from_error(
                url, client.name, str(e), self._settings.failure_mode.format(url)
            )
        return LinkResult(url=url, client=client.name, markdown=markdown, metadata=metadata)

    async def drain(self) -> None:
        """Wait for every in-flight operation to settle."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def reset(self) -> None:
        """Forget tracked placeholders, as on a reload."""
        self._tracker.reset()

    # ─── Placeholder Protocol ────────────────────────────────────────

    def _start(
        self,
        editor: Editor,
        url: str,
        original: str,
        start: EditorPosition,
        end: EditorPosition,
    ) -> PasteOperation:
        placeholder = self._tracker.create(url)
        start_offset = editor.pos_to_offset(start)
        editor.replace_range(placeholder.text, start, end)
        editor.set_cursor(editor.offset_to_pos(start_offset + len(placeholder.text)))

        operation = PasteOperation(placeholder=placeholder, url=url, original=original)
        logger.debug("placeholder_inserted", placeholder_id=placeholder.id, url=url)

        if self._settings.is_blacklisted(url):
            logger.info("link_not_formatted_blacklisted", url=url)
            self._finish(editor, operation, original, PlaceholderState.RESOLVED)
            return operation

        task = asyncio.get_running_loop().create_task(self._resolve(editor, operation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        operation.task = task
        return operation

    async def _resolve(self, editor: Editor, operation: PasteOperation) -> str:
        url = operation.url
        try:
            client = self._registry.dispatch(url)
            _, text = await self._format_with_timeout(client, url)
            state = PlaceholderState.RESOLVED
        except FetchTimeoutError as e:
            logger.warning("link_format_timeout", url=url, timeout_seconds=e.timeout_seconds)
            self._notifier.notify(FAILURE_NOTICE)
            text = self._settings.failure_mode.format(url)
            state = PlaceholderState.FAILED
        except Exception as e:
            logger.exception("link_format_failed", url=url, error=str(e))
            self._notifier.notify(FAILURE_NOTICE)
            text = self._settings.failure_mode.format(url)
            state = PlaceholderState.FAILED

        self._finish(editor, operation, text, state)
        return text

    def _finish(
        self,
        editor: Editor,
        operation: PasteOperation,
        text: str,
        state: PlaceholderState,
    ) -> None:
        replaced = self.replace_placeholder(editor, operation.placeholder, text)
        operation.result = text
        operation.state = state if replaced else PlaceholderState.ORPHANED

    def replace_placeholder(self, editor: Editor, placeholder: Placeholder, text: str) -> bool:
        """
        Swap a placeholder for its final text.

        The placeholder stops being tracked either way. If it is no longer in
        the document the replacement is skipped and an orphan sweep runs.

        Returns:
            True if the placeholder was found and replaced
        """
        self._tracker.release(placeholder.id)

        span = _locate(editor.get_value(), placeholder)
        if span is None:
            logger.warning("placeholder_not_found", placeholder_id=placeholder.id)
            self.sweep_orphans(editor)
            return False

        try:
            editor.replace_range(
                text,
                editor.offset_to_pos(span[0]),
                editor.offset_to_pos(span[1]),
            )
        except Exception as e:
            logger.exception(
                "placeholder_replace_failed", placeholder_id=placeholder.id, error=str(e)
            )
            self._notifier.notify(UPDATE_ERROR_NOTICE)
            return False

        logger.debug("placeholder_replaced", placeholder_id=placeholder.id)
        return True

    def sweep_orphans(self, editor: Editor) -> int:
        """
        Rewrite placeholders nobody is going to resolve.

        A placeholder in the document whose id is not active was left behind
        by an interrupted operation. It becomes an inert failure marker, once.

        Returns:
            Number of placeholders rewritten
        """
        content = editor.get_value()
        orphans = [m for m in find_placeholders(content) if self._tracker.is_orphan(m.group(1))]

        # Back to front so earlier offsets stay valid.
        for match in reversed(orphans):
            url = html.unescape(match.group(2)) if match.group(2) else None
            editor.replace_range(
                orphan_text(url),
                editor.offset_to_pos(match.start()),
                editor.offset_to_pos(match.end()),
            )
            self._tracker.mark_swept(match.group(1))

        if orphans:
            logger.info("orphaned_placeholders_swept", count=len(orphans))
        return len(orphans)

    # ─── Fetch + Format ──────────────────────────────────────────────

    async def _format_with_timeout(self, client: LinkClient, url: str) -> tuple[Metadata, str]:
        timeout = self._settings.timeout_seconds
        try:
            with anyio.fail_after(timeout if timeout > 0 else None):
                metadata = await self._fetch_metadata(client, url)
        except TimeoutError as e:
            raise FetchTimeoutError(url, timeout) from e
        return metadata, client.format(metadata, url, self._settings)

    async def _fetch_metadata(self, client: LinkClient, url: str) -> Metadata:
        if self._cache is not None:
            cached = await self._cache.get(client.name, url)
            if cached is not None:
                logger.debug("metadata_cache_hit", client=client.name, url=url)
                return cached

        metadata = await client.fetch_metadata(url)

        if self._cache is not None and metadata != client.fallback_metadata(url):
            await self._cache.set(client.name, url, metadata)
        return metadata


def _locate(content: str, placeholder: Placeholder) -> tuple[int, int] | None:
    """Find a placeholder's span, tolerating an editor that dropped the marker."""
    index = content.find(placeholder.text)
    if index != -1:
        return index, index + len(placeholder.text)
    for match in find_placeholders(content):
        if match.group(1) == placeholder.id:
            return match.start(), match.end()
    return None
