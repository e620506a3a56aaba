"""
Request-scoped dependencies.

Every request resolves its shop session from the X-Shop-Session header
and builds its own Akeneo and Shopify clients from that session.
"""

from fastapi import Depends, Header
import structlog

from config import settings
from integrations.akeneo import AkeneoClient
from integrations.shopify import ShopifyClient
from models.session import ShopSession
from services.catalog_service import CatalogService
from services.import_service import ImportService
from services.session_service import get_session_service
from exceptions import AppError

logger = structlog.get_logger(__name__)


def get_shop_session(
    x_shop_session: str = Header(..., description="Shop session ID")
) -> ShopSession:
    """Resolve the caller's shop session."""
    return get_session_service().get_session(x_shop_session)


def get_catalog_service(
    session: ShopSession = Depends(get_shop_session)
) -> CatalogService:
    """
    Catalog service bound to the session's Akeneo credentials.

    Incomplete credentials fail here, before any network call.
    """
    credentials = get_session_service().get_akeneo_credentials(session)
    client = AkeneoClient(credentials, timeout=settings.akeneo_timeout_seconds)
    return CatalogService(client)


def get_import_service(
    session: ShopSession = Depends(get_shop_session)
) -> ImportService:
    """Import service bound to the session's shop."""
    if not session.access_token:
        logger.warning("shopify_token_missing", session_id=session.id, shop=session.shop)
        raise AppError(
            code="SHOPIFY_NOT_AUTHENTICATED",
            message="Shop session has no Shopify access token",
            status_code=401,
            details={"shop": session.shop}
        )

    client = ShopifyClient(
        session.shop,
        session.access_token,
        api_version=settings.shopify_api_version,
        timeout=settings.shopify_timeout_seconds,
    )
    return ImportService(client)
