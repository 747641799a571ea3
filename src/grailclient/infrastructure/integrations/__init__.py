"""External API integrations."""

from grailclient.infrastructure.integrations.catalog_client import CatalogApiClient
from grailclient.infrastructure.integrations.retry import send_with_backoff

__all__ = ["CatalogApiClient", "send_with_backoff"]
