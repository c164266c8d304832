"""Utility modules for Smart Link Formatter."""

from smart_link_formatter.utils.cache import LRUCache, MetadataCache

__all__ = [
    "LRUCache",
    "MetadataCache",
]
