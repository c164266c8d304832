"""Direct image link client."""

import re
from urllib.parse import unquote, urlparse

from smart_link_formatter.clients.base import BaseClient
from smart_link_formatter.models.common import Metadata
from smart_link_formatter.utils.markdown import escape_markdown_chars, url_final_segment


class ImageClient(BaseClient):
    """
    Client for URLs that point straight at an image file.

    The default template starts with the embed marker, so images are pasted
    as ``![filename](url)``. Everything comes from the URL; nothing is fetched.
    """

    name = "image"
    display_name = "Image"
    default_format = "![{filename}]"
    variables = ("filename", "extension", "title", "url")
    url_pattern = re.compile(
        r"^https?://[^?#\s]+\.(?P<ext>png|jpe?g|gif|webp|svg|bmp|avif|ico)(?:[?#]\S*)?$",
        re.IGNORECASE,
    )

    async def _fetch(self, url: str) -> Metadata:
        filename = escape_markdown_chars(unquote(url_final_segment(url)))
        extension = urlparse(url).path.rsplit(".", 1)[-1].lower()
        return {
            "title": filename,
            "filename": filename,
            "extension": extension,
        }
