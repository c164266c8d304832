"""Common models shared across the application."""

from enum import Enum

from pydantic import BaseModel, Field

# Flat field name -> value mapping produced by a client for one URL.
Metadata = dict[str, str | None]


class FailureMode(str, Enum):
    """What a placeholder turns into when its link cannot be formatted."""

    REVERT = "revert"
    ALERT = "alert"

    def format(self, url: str) -> str:
        """Render the failure text for a URL."""
        if self is FailureMode.ALERT:
            return f"[Failed to fetch title]({url})"
        return url


class TitleReplacement(BaseModel):
    """A regex rule applied to formatted link text."""

    pattern: str = Field(..., min_length=1, description="Regular expression to search for")
    replacement: str = Field(default="", description="Replacement text (supports \\1 groups)")
    enabled: bool = Field(default=True, description="Whether the rule is applied")

    model_config = {"extra": "ignore"}


class Extraction(BaseModel):
    """A URL found in a line of text, with the column range to replace."""

    url: str
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)

    model_config = {"extra": "ignore"}


class LinkResult(BaseModel):
    """Result of formatting a single URL."""

    url: str = Field(..., description="The formatted URL")
    client: str | None = Field(..., description="Name of the client that handled the URL")
    markdown: str = Field(..., description="Final markdown text")
    metadata: Metadata = Field(default_factory=dict, description="Fetched metadata")
    success: bool = Field(default=True, description="Whether formatting succeeded")
    error_message: str | None = Field(default=None, description="Error message if failed")

    model_config = {"extra": "ignore"}

    @classmethod
    def from_error(cls, url: str, client: str, error: str, markdown: str) -> "LinkResult":
        """Create a failed link result from an error."""
        return cls(
            url=url,
            client=client,
            markdown=markdown,
            success=False,
            error_message=error,
        )
