"""Wiring: settings -> logging -> catalog client."""

import logging

from grailclient.config import Settings, get_settings
from grailclient.domain.ports import IViewerSession
from grailclient.infrastructure.integrations import CatalogApiClient
from grailclient.infrastructure.observability import configure_logging

logger = logging.getLogger(__name__)


def create_catalog_client(
    session: IViewerSession,
    settings: Settings | None = None,
    setup_logging: bool = True,
) -> CatalogApiClient:
    """Build the catalog client the detail views talk to.

    Args:
        session: Viewer session (owned by the caller)
        settings: Settings to use, defaults to the cached env settings
        setup_logging: Configure root logging from the observability settings
    """
    settings = settings or get_settings()
    if setup_logging:
        configure_logging(
            log_level=settings.observability.log_level,
            json_format=settings.observability.json_format,
            app_name=settings.app_name,
        )
    logger.info("Catalog client for %s", settings.api.base_url)
    return CatalogApiClient(session, settings=settings.api, catalog_settings=settings.catalog)
