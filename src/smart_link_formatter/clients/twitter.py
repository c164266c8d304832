"""Twitter / X client."""

import re

from bs4 import BeautifulSoup

from smart_link_formatter.clients.base import BaseClient
from smart_link_formatter.exceptions import ClientParseError
from smart_link_formatter.models.common import Metadata
from smart_link_formatter.utils.markdown import collapse_whitespace, escape_markdown_chars

TWITTER_OEMBED_URL = "https://publish.twitter.com/oembed"


class TwitterClient(BaseClient):
    """
    Twitter / X post client.

    Uses the public oEmbed endpoint, which needs no authentication.
    """

    name = "twitter"
    display_name = "Twitter / X"
    default_format = "[{author} (@{handle})] {text}"
    variables = ("author", "handle", "text", "date", "url")
    url_pattern = re.compile(
        r"^https?://((www|mobile)\.)?(twitter\.com|x\.com)/(?P<handle>\w+)/status(es)?/\d+"
    )

    async def _fetch(self, url: str) -> Metadata:
        response = await self._request(
            "GET",
            TWITTER_OEMBED_URL,
            params={"url": url, "omit_script": "true", "dnt": "true"},
        )
        self._raise_for_status(response)

        data = response.json()
        embed = data.get("html")
        if not embed:
            raise ClientParseError(self.name, "oEmbed response has no html")

        soup = BeautifulSoup(embed, "html.parser")
        paragraph = soup.find("p")
        text = collapse_whitespace(paragraph.get_text(" ")) if paragraph else ""
        anchors = soup.find_all("a")
        date = collapse_whitespace(anchors[-1].get_text()) if anchors else ""

        handle = self._handle(url, data.get("author_url"))
        author = data.get("author_name") or handle

        return {
            "title": escape_markdown_chars(text) if text else None,
            "author": escape_markdown_chars(author) if author else None,
            "handle": escape_markdown_chars(handle) if handle else None,
            "text": escape_markdown_chars(text) if text else None,
            "date": date or None,
        }

    def _handle(self, url: str, author_url: str | None) -> str | None:
        if author_url:
            return author_url.rstrip("/").rsplit("/", 1)[-1]
        match = self.url_pattern.search(url) if self.url_pattern else None
        return match.group("handle") if match else None
