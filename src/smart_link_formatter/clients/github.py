"""GitHub client."""

import re

from smart_link_formatter.clients.base import BaseClient
from smart_link_formatter.models.common import Metadata
from smart_link_formatter.utils.markdown import escape_markdown_chars

GITHUB_API_BASE_URL = "https://api.github.com"


class GitHubClient(BaseClient):
    """
    GitHub repository, issue and pull request client.

    Uses the unauthenticated REST API (60 requests/hour per IP).

    https://docs.github.com/en/rest
    """

    name = "github"
    display_name = "GitHub"
    default_format = "[{title}{number? #{number}}]{description?\\: {description}}"
    variables = (
        "title",
        "owner",
        "repo",
        "description",
        "stars",
        "language",
        "number",
        "state",
        "author",
        "created_at",
        "updated_at",
        "url",
    )
    url_pattern = re.compile(
        r"^https?://(www\.)?github\.com/(?P<owner>[^/?#]+)/(?P<repo>[^/?#]+)"
        r"(?:/(?P<kind>issues|pull)/(?P<number>\d+))?"
    )

    async def _fetch(self, url: str) -> Metadata:
        match = self.url_pattern.search(url) if self.url_pattern else None
        if match is None:
            return self.fallback_metadata(url)

        owner = match.group("owner")
        repo = match.group("repo").removesuffix(".git")
        headers = {"Accept": "application/vnd.github+json"}

        if match.group("kind"):
            number = match.group("number")
            response = await self._request(
                "GET",
                f"{GITHUB_API_BASE_URL}/repos/{owner}/{repo}/issues/{number}",
                headers=headers,
            )
            self._raise_for_status(response)
            issue = response.json()
            return {
                "title": escape_markdown_chars(issue.get("title") or ""),
                "owner": owner,
                "repo": repo,
                "number": str(issue.get("number") or number),
                "state": issue.get("state"),
                "author": (issue.get("user") or {}).get("login"),
                "created_at": issue.get("created_at"),
                "updated_at": issue.get("updated_at"),
            }

        response = await self._request(
            "GET",
            f"{GITHUB_API_BASE_URL}/repos/{owner}/{repo}",
            headers=headers,
        )
        self._raise_for_status(response)
        data = response.json()
        description = data.get("description")
        return {
            "title": escape_markdown_chars(data.get("full_name") or f"{owner}/{repo}"),
            "owner": owner,
            "repo": repo,
            "description": escape_markdown_chars(description) if description else None,
            "stars": str(data["stargazers_count"]) if "stargazers_count" in data else None,
            "language": data.get("language"),
            "created_at": data.get("created_at"),
            "updated_at": data.get("updated_at"),
        }
