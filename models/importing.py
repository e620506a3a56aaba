"""
Import job schemas.

A bulk request carries the items selected on one listing page. The
importer answers with one result per item, in submission order.
"""

from typing import Any, Optional
from pydantic import Field, computed_field

from models.base import BaseSchema
from models.resource import ResourceType


class BulkImportRequest(BaseSchema):
    """Items selected on the current page, as returned by the listing."""

    items: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Selected Akeneo items in selection order"
    )


class ImportItemResult(BaseSchema):
    """Outcome of creating one item in Shopify."""

    code: str = Field(..., description="Akeneo code or product identifier")
    success: bool
    error: Optional[str] = Field(None, description="First error reported for the item")
    shopify_id: Optional[str] = Field(None, description="GID of the created Shopify resource")

    @classmethod
    def ok(cls, code: str, shopify_id: Optional[str] = None) -> "ImportItemResult":
        return cls(code=code, success=True, shopify_id=shopify_id)

    @classmethod
    def failed(cls, code: str, error: str) -> "ImportItemResult":
        return cls(code=code, success=False, error=error)


class ImportOutcome(BaseSchema):
    """
    Aggregate result of one bulk job.

    `results` has exactly one entry per submitted item, in submission order.
    """

    resource: ResourceType
    results: list[ImportItemResult] = Field(default_factory=list)

    @computed_field
    @property
    def succeeded_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @computed_field
    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @computed_field
    @property
    def success(self) -> bool:
        return self.failed_count == 0

    @computed_field
    @property
    def errors(self) -> list[dict[str, Optional[str]]]:
        """First error of each failed item, in submission order."""
        return [
            {"code": r.code, "message": r.error}
            for r in self.results
            if not r.success
        ]


class SingleImportResponse(BaseSchema):
    """Response for a successful single-item import."""

    success: bool = True
    code: str
    shopify_id: Optional[str] = None
