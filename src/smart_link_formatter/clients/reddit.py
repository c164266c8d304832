"""Reddit client."""

import re
from datetime import UTC, datetime
from urllib.parse import urlparse

from smart_link_formatter.clients.base import BaseClient
from smart_link_formatter.exceptions import ClientParseError
from smart_link_formatter.models.common import Metadata
from smart_link_formatter.utils.markdown import escape_markdown_chars


class RedditClient(BaseClient):
    """
    Reddit post client.

    Appending ``.json`` to a post URL returns the listing for the post and its
    comments; the first child of the first listing is the post itself.
    """

    name = "reddit"
    display_name = "Reddit"
    default_format = "[{title}] in r/{subreddit}"
    variables = ("title", "subreddit", "author", "score", "comments", "flair", "created_at", "url")
    url_pattern = re.compile(r"^https?://((www|old|new|np)\.)?reddit\.com/r/[^/]+/comments/[^/?#]+")

    @staticmethod
    def json_url(url: str) -> str:
        """Return the JSON listing URL for a post URL."""
        path = urlparse(url).path.rstrip("/")
        return f"https://www.reddit.com{path}.json"

    async def _fetch(self, url: str) -> Metadata:
        response = await self._request(
            "GET",
            self.json_url(url),
            headers={"Accept": "application/json"},
        )
        self._raise_for_status(response)

        try:
            post = response.json()[0]["data"]["children"][0]["data"]
        except (KeyError, IndexError, TypeError) as e:
            raise ClientParseError(self.name, f"unexpected listing shape: {e}") from e

        created = post.get("created_utc")
        created_at = (
            datetime.fromtimestamp(float(created), tz=UTC).isoformat() if created else None
        )

        def escaped(key: str) -> str | None:
            value = post.get(key)
            return escape_markdown_chars(str(value)) if value else None

        return {
            "title": escaped("title"),
            "subreddit": escaped("subreddit"),
            "author": escaped("author"),
            "flair": escaped("link_flair_text"),
            "score": str(post["score"]) if post.get("score") is not None else None,
            "comments": str(post["num_comments"]) if post.get("num_comments") is not None else None,
            "created_at": created_at,
        }
