"""YouTube and YouTube Music clients."""

import json
import re
from typing import Any
from urllib.parse import parse_qs, urlparse

import httpx
import structlog

from smart_link_formatter.clients.base import BaseClient
from smart_link_formatter.exceptions import ClientAPIError, ClientParseError
from smart_link_formatter.models.common import Metadata
from smart_link_formatter.utils.dates import (
    format_date,
    format_duration,
    format_timestamp,
    parse_timestamp_seconds,
)
from smart_link_formatter.utils.markdown import escape_markdown_chars

logger = structlog.get_logger(__name__)

YOUTUBE_MUSIC_BASE_URL = "https://music.youtube.com/"
YOUTUBE_MUSIC_PLAYER_URL = "https://music.youtube.com/youtubei/v1/player?prettyPrint=false"

# Used when the web client version cannot be discovered from the home page.
YOUTUBE_MUSIC_FALLBACK_VERSION = "1.20251015.03.00"

_CLIENT_VERSION = re.compile(r'"INNERTUBE_CLIENT_VERSION":"([^"]+)"')


def youtube_timestamp_seconds(url: str) -> int:
    """Read the start offset from a ``t`` or ``time_continue`` query parameter."""
    query = parse_qs(urlparse(url).query)
    value = (query.get("t") or query.get("time_continue") or [""])[0]
    return parse_timestamp_seconds(value)


def extract_json_assignment(html: str, name: str) -> dict[str, Any] | None:
    """
    Decode the JSON object assigned to a script variable in a page.

    Args:
        html: Page source
        name: Variable name, e.g. ``ytInitialPlayerResponse``

    Returns:
        Decoded object, or None if the assignment is missing or malformed
    """
    match = re.search(rf"\b{re.escape(name)}\s*=\s*(?=\{{)", html)
    if match is None:
        return None
    try:
        value, _ = json.JSONDecoder().raw_decode(html, match.end())
    except json.JSONDecodeError as e:
        logger.debug("youtube_json_decode_error", variable=name, error=str(e))
        return None
    return value if isinstance(value, dict) else None


def _simple_text(node: Any) -> str | None:
    if isinstance(node, dict):
        return node.get("simpleText")
    return None


def _views(value: Any) -> str | None:
    try:
        return f"{int(value):,}"
    except (TypeError, ValueError):
        return None


def _duration(value: Any) -> str | None:
    try:
        return format_duration(int(value))
    except (TypeError, ValueError):
        return None


class YouTubeClient(BaseClient):
    """
    YouTube video client.

    Reads the player response embedded in the watch page, so no API key is
    needed.
    """

    name = "youtube"
    display_name = "YouTube"
    default_format = "[{title}] by {channel}"
    variables = (
        "title",
        "channel",
        "uploader",
        "description",
        "views",
        "duration",
        "upload_date",
        "timestamp",
        "url",
    )
    url_pattern = re.compile(r"^https?://((www|m)\.)?(youtube\.com|youtu\.be)/")

    async def _fetch(self, url: str) -> Metadata:
        response = await self._request("GET", url, headers={"Accept-Language": "en-US,en;q=0.9"})
        self._raise_for_status(response)

        player = extract_json_assignment(response.text, "ytInitialPlayerResponse")
        if player is None:
            raise ClientParseError(self.name, "ytInitialPlayerResponse not found")

        details = player.get("videoDetails") or {}
        microformat = (player.get("microformat") or {}).get("playerMicroformatRenderer") or {}
        if not details and not microformat:
            raise ClientParseError(self.name, "no videoDetails or microformat")

        title = details.get("title") or _simple_text(microformat.get("title"))
        uploader = details.get("author") or _simple_text(microformat.get("ownerChannelName"))
        description = details.get("shortDescription") or _simple_text(
            microformat.get("description")
        )
        upload_date = microformat.get("publishDate") or microformat.get("uploadDate")

        return {
            "title": escape_markdown_chars(title) if title else None,
            "uploader": escape_markdown_chars(uploader) if uploader else None,
            "channel": escape_markdown_chars(uploader) if uploader else None,
            "description": escape_markdown_chars(description) if description else None,
            "views": _views(details.get("viewCount")),
            "duration": _duration(details.get("lengthSeconds")),
            "upload_date": format_date(upload_date) if upload_date else None,
        }

    def derive_fields(self, url: str) -> Metadata:
        return {"timestamp": format_timestamp(youtube_timestamp_seconds(url))}


class YouTubeMusicClient(BaseClient):
    """
    YouTube Music client.

    Queries the web player endpoint. The endpoint wants the current web client
    version, which is discovered from the home page on first use and cached;
    a rejected request drops the cached version so the next call refetches it.
    """

    name = "youtube_music"
    display_name = "YouTube Music"
    default_format = "[{title}{artist? - {artist}}]"
    variables = ("title", "artist", "duration", "views", "url")
    url_pattern = re.compile(r"^https?://music\.youtube\.com/")

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(http_client=http_client, timeout_seconds=timeout_seconds)
        self._client_version: str | None = None

    async def get_client_version(self) -> str:
        """Return the cached web client version, discovering it if needed."""
        if self._client_version:
            return self._client_version

        version = YOUTUBE_MUSIC_FALLBACK_VERSION
        try:
            response = await self._request("GET", YOUTUBE_MUSIC_BASE_URL)
            match = _CLIENT_VERSION.search(response.text)
            if match:
                version = match.group(1)
        except httpx.HTTPError as e:
            logger.debug("youtube_music_version_discovery_failed", error=str(e))

        self._client_version = version
        return version

    def invalidate_client_version(self) -> None:
        """Forget the cached client version."""
        self._client_version = None

    async def _fetch(self, url: str) -> Metadata:
        video_id = (parse_qs(urlparse(url).query).get("v") or [None])[0]
        if not video_id:
            raise ClientParseError(self.name, "could not extract video id from URL")

        payload = {
            "videoId": video_id,
            "context": {
                "client": {
                    "clientName": "WEB_REMIX",
                    "clientVersion": await self.get_client_version(),
                    "hl": "en",
                    "gl": "US",
                }
            },
        }

        response = await self._request("POST", YOUTUBE_MUSIC_PLAYER_URL, json=payload)
        if not response.is_success:
            self.invalidate_client_version()
            raise ClientAPIError(self.name, response.status_code, response.text[:200])

        details = response.json().get("videoDetails")
        if not details:
            self.invalidate_client_version()
            raise ClientParseError(self.name, "no videoDetails in player response")

        title = details.get("title")
        artist = details.get("author")
        return {
            "title": escape_markdown_chars(title) if title else None,
            "artist": escape_markdown_chars(artist) if artist else None,
            "duration": _duration(details.get("lengthSeconds")),
            "views": _views(details.get("viewCount")),
        }
