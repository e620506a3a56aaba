"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    PaginationParams,
)
from models.resource import (
    ResourceType,
    Attribute,
    Category,
    Family,
    Product,
    ProductValue,
    SourceItem,
    parse_item,
    label_for,
    AttributeImportForm,
    CategoryImportForm,
    FamilyImportForm,
    ProductImportForm,
)
from models.listing import ListingPage
from models.importing import (
    BulkImportRequest,
    ImportItemResult,
    ImportOutcome,
    SingleImportResponse,
)
from models.session import (
    ShopSession,
    AkeneoCredentials,
    AkeneoSettingsUpdate,
    AkeneoSettingsResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "PaginationParams",

    # Resources
    "ResourceType",
    "Attribute",
    "Category",
    "Family",
    "Product",
    "ProductValue",
    "SourceItem",
    "parse_item",
    "label_for",
    "AttributeImportForm",
    "CategoryImportForm",
    "FamilyImportForm",
    "ProductImportForm",

    # Listing
    "ListingPage",

    # Imports
    "BulkImportRequest",
    "ImportItemResult",
    "ImportOutcome",
    "SingleImportResponse",

    # Sessions
    "ShopSession",
    "AkeneoCredentials",
    "AkeneoSettingsUpdate",
    "AkeneoSettingsResponse",
]
