"""
Listing page schema.

One page of Akeneo items as shown to the user for selection.
"""

from typing import Optional, Union
from urllib.parse import urlencode
from pydantic import Field, computed_field

from models.base import BaseSchema
from models.resource import Attribute, Category, Family, Product, ResourceType


class ListingPage(BaseSchema):
    """
    One fetched page of a resource listing.

    Rebuilt on every request; nothing is cached between pages.
    """

    resource: ResourceType
    items: list[Union[Attribute, Category, Family, Product]] = Field(default_factory=list)
    page: int = Field(..., ge=1, description="Current page (1-based)")
    page_size: int = Field(..., ge=1, description="Requested page size")
    has_next: bool = Field(False, description="Akeneo returned a next link")
    has_previous: bool = Field(False, description="Akeneo returned a previous link")
    category: Optional[str] = Field(None, description="Active category filter (products only)")

    @property
    def keys(self) -> list[str]:
        return [item.key for item in self.items]

    def _page_query(self, page: int) -> str:
        params = {}
        if self.category:
            params["category"] = self.category
        params["page"] = page
        return "?" + urlencode(params)

    @computed_field
    @property
    def previous_page_url(self) -> Optional[str]:
        """Query string for the previous page, keeping the category filter."""
        if not self.has_previous:
            return None
        return self._page_query(self.page - 1)

    @computed_field
    @property
    def next_page_url(self) -> Optional[str]:
        """Query string for the next page, keeping the category filter."""
        if not self.has_next:
            return None
        return self._page_query(self.page + 1)

    @computed_field
    @property
    def is_empty(self) -> bool:
        return not self.items
