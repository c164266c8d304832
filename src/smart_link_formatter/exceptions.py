"""Custom exceptions for Smart Link Formatter."""


class LinkFormatterError(Exception):
    """Base exception for all Smart Link Formatter errors."""

    pass


# ─── Client Errors ───────────────────────────────────────────────


class ClientError(LinkFormatterError):
    """Base exception for link client errors."""

    def __init__(self, client: str, message: str) -> None:
        self.client = client
        self.message = message
        super().__init__(f"[{client}] {message}")


class ClientAPIError(ClientError):
    """Raised when a remote service returns an error response."""

    def __init__(self, client: str, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(client, f"API error {status_code}: {message}")


class ClientParseError(ClientError):
    """Raised when a remote response cannot be turned into metadata."""

    def __init__(self, client: str, reason: str) -> None:
        super().__init__(client, f"Could not parse response: {reason}")


class NoClientError(LinkFormatterError):
    """Raised when no client accepts a URL."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"No client found for link: {url}")


# ─── Formatting Errors ───────────────────────────────────────────


class FetchTimeoutError(LinkFormatterError):
    """Raised when fetching and formatting a link takes too long."""

    def __init__(self, url: str, timeout_seconds: float) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        super().__init__(f"[{url}] Fetch timed out after {timeout_seconds}s")


# ─── Validation Errors ───────────────────────────────────────────


class ValidationError(LinkFormatterError):
    """Raised when input validation fails."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"Validation error for '{field}': {message}")


class InvalidURLError(ValidationError):
    """Raised when a URL is invalid."""

    def __init__(self, url: str, reason: str = "Invalid URL format") -> None:
        self.url = url
        super().__init__("url", f"{reason}: {url}")
