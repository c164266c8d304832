"""Link clients module."""

from smart_link_formatter.clients.base import BaseClient, LinkClient
from smart_link_formatter.clients.registry import ClientRegistry, create_clients

__all__ = [
    "BaseClient",
    "ClientRegistry",
    "LinkClient",
    "create_clients",
]
