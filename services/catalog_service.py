"""
Catalog service: paged listings from Akeneo.

Wraps one request-scoped AkeneoClient and turns its raw listings into
ListingPage models. Read-only; failures are terminal for the request.
"""

import json
from typing import Optional
import structlog
from pydantic import ValidationError as PydanticValidationError

from config import settings
from integrations.akeneo import AkeneoAuthError, AkeneoClient, AkeneoError
from models.base import PaginationParams
from models.listing import ListingPage
from models.resource import ResourceType, parse_item
from exceptions import (
    CatalogAuthError,
    UpstreamUnavailableError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


def build_category_search(category: str) -> str:
    """
    Akeneo search filter restricting products to one category.

    >>> build_category_search("summer-sale")
    '{"categories":[{"operator":"IN","value":["summer-sale"]}]}'
    """
    return json.dumps(
        {"categories": [{"operator": "IN", "value": [category]}]},
        separators=(",", ":"),
    )


class CatalogService:
    """
    Listing operations against one Akeneo instance.

    Usage:
        service = CatalogService(AkeneoClient(credentials))
        page = service.fetch_page(ResourceType.ATTRIBUTES, page=2)
    """

    def __init__(self, client: AkeneoClient, page_size: Optional[int] = None):
        self.client = client
        self.page_size = page_size or settings.akeneo_page_size

    def fetch_page(
        self,
        resource: ResourceType,
        page: int = 1,
        page_size: Optional[int] = None,
        category: Optional[str] = None
    ) -> ListingPage:
        """
        Fetch one page of a resource listing.

        Args:
            resource: Resource type to list
            page: 1-based page number
            page_size: Items per page (defaults to the configured size)
            category: Category code to filter products by

        Returns:
            ListingPage with next/previous flags taken from Akeneo's links

        Raises:
            ValidationError: If page < 1 or a category filter is used on a non-product listing
            CatalogAuthError: If Akeneo rejects the credentials
            UpstreamUnavailableError: If Akeneo is unreachable or the response is malformed
        """
        if page < 1:
            raise ValidationError(
                code="INVALID_PAGE",
                message="Page must be 1 or greater",
                details={"page": page}
            )

        category = (category or "").strip() or None
        if category and resource != ResourceType.PRODUCTS:
            raise ValidationError(
                code="UNSUPPORTED_FILTER",
                message="Category filter is only supported for products",
                details={"resource": resource.value}
            )

        params = PaginationParams(page=page, page_size=page_size or self.page_size)

        locales = None
        search = None
        if resource == ResourceType.PRODUCTS:
            locales = settings.akeneo_product_locales
            if category:
                search = build_category_search(category)

        logger.info(
            "fetching_akeneo_page",
            resource=resource.value,
            page=params.page,
            limit=params.limit,
            category=category
        )

        try:
            payload = self.client.list(
                resource.value,
                page=params.page,
                limit=params.limit,
                locales=locales,
                search=search,
            )
        except AkeneoAuthError as e:
            raise CatalogAuthError(str(e))
        except AkeneoError as e:
            raise UpstreamUnavailableError(str(e), details={"resource": resource.value})

        listing = self._to_listing(resource, payload, params, category)

        logger.info(
            "akeneo_page_fetched",
            resource=resource.value,
            page=listing.page,
            count=len(listing.items),
            has_next=listing.has_next,
            has_previous=listing.has_previous
        )
        return listing

    def _to_listing(
        self,
        resource: ResourceType,
        payload: dict,
        params: PaginationParams,
        category: Optional[str]
    ) -> ListingPage:
        """Convert a raw Akeneo listing into a ListingPage."""
        embedded = payload.get("_embedded") if isinstance(payload, dict) else None
        raw_items = embedded.get("items") if isinstance(embedded, dict) else None

        if not isinstance(raw_items, list):
            logger.error("akeneo_malformed_listing", resource=resource.value, page=params.page)
            raise UpstreamUnavailableError(
                f"Akeneo returned a malformed {resource.value} listing",
                details={"resource": resource.value, "page": params.page}
            )

        try:
            items = [parse_item(resource, raw) for raw in raw_items]
        except (PydanticValidationError, TypeError) as e:
            logger.error("akeneo_invalid_items", resource=resource.value, error=str(e))
            raise UpstreamUnavailableError(
                f"Akeneo returned invalid {resource.value}",
                details={"resource": resource.value, "page": params.page}
            )

        keys = [item.key for item in items]
        if len(set(keys)) != len(keys):
            logger.error("akeneo_duplicate_codes", resource=resource.value, page=params.page)
            raise UpstreamUnavailableError(
                f"Akeneo returned duplicate {resource.value} codes",
                details={"resource": resource.value, "page": params.page}
            )

        links = payload.get("_links") or {}

        return ListingPage(
            resource=resource,
            items=items,
            page=params.page,
            page_size=params.page_size,
            has_next=_has_link(links, "next"),
            has_previous=_has_link(links, "previous"),
            category=category,
        )


def _has_link(links: dict, name: str) -> bool:
    link = links.get(name) if isinstance(links, dict) else None
    return bool(isinstance(link, dict) and link.get("href"))
