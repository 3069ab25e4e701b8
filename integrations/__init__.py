"""Backend integrations for starterkit.

Supports:
- Bearer token lookup
- Product catalog fetching and ordering
- Best-effort notification of created projects
"""

from .auth import AuthHandler
from .base import BackendClient
from .catalog import CatalogClient, sort_catalog
from .notifications import DeliveryReport, NotificationClient

__all__ = [
    "AuthHandler",
    "BackendClient",
    "CatalogClient",
    "sort_catalog",
    "DeliveryReport",
    "NotificationClient",
]
