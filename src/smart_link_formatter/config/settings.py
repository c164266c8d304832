"""Application settings loaded from environment variables."""

from urllib.parse import urlparse

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from smart_link_formatter.models.common import FailureMode, TitleReplacement


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    All settings can be overridden via environment variables prefixed with LINKFMT_.
    For example, LINKFMT_FAILURE_MODE=alert makes failed fetches visible in the
    document. Mapping and list settings are read as JSON.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LINKFMT_",
        case_sensitive=False,
        extra="ignore",
    )

    # ─── Server Settings ─────────────────────────────────────────────
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: str = "*"

    # ─── Link Formatting ─────────────────────────────────────────────
    auto_link: bool = True
    failure_mode: FailureMode = FailureMode.REVERT
    timeout_seconds: float = 10.0

    # Comma-separated hostname fragments that are never formatted
    blacklisted_domains: str = ""

    # Per-client template overrides keyed by client name
    client_formats: dict[str, str] = Field(default_factory=dict)

    # Regex rules applied, in order, to the formatted text
    title_replacements: list[TitleReplacement] = Field(default_factory=list)

    # ─── HTTP Client Settings ────────────────────────────────────────
    max_connections: int = 20
    max_keepalive_connections: int = 10
    request_timeout: float = 15.0
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )
    ssl_verify: bool = True
    ssl_ca_bundle: str | None = None

    # ─── Cache Settings ──────────────────────────────────────────────
    cache_enabled: bool = True
    cache_ttl_seconds: int = 3600
    cache_max_size: int = 500

    def get_cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_blacklisted_domains(self) -> list[str]:
        """Get blacklisted domains as a list (parsed from comma-separated string)."""
        return [d.strip() for d in self.blacklisted_domains.split(",") if d.strip()]

    def is_blacklisted(self, url: str) -> bool:
        """
        Check whether a URL must be pasted as-is.

        Unparsable URLs count as blacklisted.
        """
        try:
            hostname = urlparse(url).hostname
        except ValueError:
            return True
        if not hostname:
            return True
        return any(domain in hostname for domain in self.get_blacklisted_domains())

    def get_client_format(self, client_name: str) -> str | None:
        """Return the user's template override for a client, if any."""
        template = self.client_formats.get(client_name)
        return template if template else None

    def get_ssl_context(self) -> bool | str:
        """
        Get SSL verification configuration for httpx.

        Priority: ssl_verify=False > ssl_ca_bundle > True
        """
        if not self.ssl_verify:
            return False
        if self.ssl_ca_bundle:
            return self.ssl_ca_bundle
        return True


# Global settings instance
settings = Settings()
