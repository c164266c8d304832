"""Catch-all client that links any URL with its page title."""

import httpx
import structlog
from bs4 import BeautifulSoup

from smart_link_formatter.clients.base import BaseClient
from smart_link_formatter.models.common import Metadata
from smart_link_formatter.utils.markdown import (
    collapse_whitespace,
    escape_markdown_chars,
    url_final_segment,
)

logger = structlog.get_logger(__name__)

_META_TITLE_SELECTORS = (
    'meta[property="og:title"]',
    'meta[name="twitter:title"]',
    'meta[itemprop="name"]',
)


def _is_html(content_type: str | None) -> bool:
    return not content_type or "text/html" in content_type.lower()


def _meta_content(soup: BeautifulSoup, *selectors: str) -> str | None:
    for selector in selectors:
        tag = soup.select_one(selector)
        content = collapse_whitespace(tag.get("content", "")) if tag else ""
        if content:
            return content
    return None


def extract_page_metadata(html: str) -> Metadata:
    """
    Pick a title, description and site name out of an HTML page.

    The title comes from the first non-empty of: ``<title>``, its ``no-title``
    attribute, the first ``<h1>``, then the og/twitter/itemprop meta tags.
    """
    soup = BeautifulSoup(html, "html.parser")

    title = None
    title_tag = soup.find("title")
    if title_tag is not None:
        title = collapse_whitespace(title_tag.get_text()) or collapse_whitespace(
            title_tag.get("no-title", "")
        )
    if not title:
        h1 = soup.find("h1")
        title = collapse_whitespace(h1.get_text()) if h1 else None
    if not title:
        title = _meta_content(soup, *_META_TITLE_SELECTORS)

    return {
        "title": title or None,
        "description": _meta_content(
            soup, 'meta[name="description"]', 'meta[property="og:description"]'
        ),
        "site_name": _meta_content(soup, 'meta[property="og:site_name"]'),
    }


class DefaultClient(BaseClient):
    """
    Fallback client that matches every link.

    A HEAD request first checks the content type; files that are not HTML are
    named after the last path segment. HTML pages are fetched and parsed.
    """

    name = "default"
    display_name = "Default"
    default_format = "[{title}]"
    variables = ("title", "description", "site_name", "url")

    def matches(self, url: str) -> bool:
        return True

    async def _fetch(self, url: str) -> Metadata:
        segment_title = await self._non_html_title(url)
        if segment_title is not None:
            return {"title": escape_markdown_chars(segment_title)}

        response = await self._request("GET", url)
        self._raise_for_status(response)

        if not _is_html(response.headers.get("content-type")):
            return {"title": escape_markdown_chars(url_final_segment(url))}

        page = extract_page_metadata(response.text)
        metadata = {key: escape_markdown_chars(value) if value else None for key, value in page.items()}
        metadata["title"] = metadata["title"] or escape_markdown_chars(url)
        return metadata

    async def _non_html_title(self, url: str) -> str | None:
        """Return the file name for non-HTML resources, None when a GET is needed."""
        try:
            response = await self._request("HEAD", url)
        except httpx.HTTPError as e:
            logger.debug("head_request_failed", url=url, error=str(e))
            return None

        if not response.is_success:
            return None
        if _is_html(response.headers.get("content-type")):
            return None
        return url_final_segment(url)
