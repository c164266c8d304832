"""Configuration module."""

from smart_link_formatter.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
