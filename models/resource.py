"""
Akeneo resource models.

One model per importable resource type. Each exposes `key`, the stable
code (or product identifier) used for selection and outcome correlation.
Unknown Akeneo fields are ignored.
"""

from enum import Enum
from typing import Any, Optional, Union
from pydantic import Field

from models.base import BaseSchema


class ResourceType(str, Enum):
    """Importable Akeneo resource types."""
    ATTRIBUTES = "attributes"
    CATEGORIES = "categories"
    FAMILIES = "families"
    PRODUCTS = "products"

    @property
    def singular(self) -> str:
        return {
            ResourceType.ATTRIBUTES: "attribute",
            ResourceType.CATEGORIES: "category",
            ResourceType.FAMILIES: "family",
            ResourceType.PRODUCTS: "product",
        }[self]


class Attribute(BaseSchema):
    """Akeneo attribute (becomes a Shopify metafield definition)."""

    code: str = Field(..., description="Attribute code")
    type: str = Field("", description="Akeneo attribute type, e.g. pim_catalog_text")
    group: Optional[str] = Field(None, description="Attribute group code")
    labels: dict[str, Optional[str]] = Field(default_factory=dict, description="Labels by locale")

    @property
    def key(self) -> str:
        return self.code


class Category(BaseSchema):
    """Akeneo category (becomes a Shopify collection)."""

    code: str = Field(..., description="Category code")
    parent: Optional[str] = Field(None, description="Parent category code")
    labels: dict[str, Optional[str]] = Field(default_factory=dict, description="Labels by locale")

    @property
    def key(self) -> str:
        return self.code


class Family(BaseSchema):
    """Akeneo family (becomes a Shopify product type)."""

    code: str = Field(..., description="Family code")
    attribute_as_label: Optional[str] = Field(None, description="Attribute used as product label")
    labels: dict[str, Optional[str]] = Field(default_factory=dict, description="Labels by locale")

    @property
    def key(self) -> str:
        return self.code


class ProductValue(BaseSchema):
    """One localized/scoped value of a product attribute."""

    data: Any = None
    locale: Optional[str] = None
    scope: Optional[str] = None


class Product(BaseSchema):
    """Akeneo product (becomes a Shopify product)."""

    identifier: str = Field(..., description="Product identifier")
    family: Optional[str] = Field(None, description="Family code")
    categories: list[str] = Field(default_factory=list, description="Category codes")
    enabled: bool = Field(True, description="Whether the product is enabled in Akeneo")
    values: dict[str, list[ProductValue]] = Field(default_factory=dict, description="Attribute values")

    @property
    def key(self) -> str:
        return self.identifier

    @property
    def name(self) -> Optional[str]:
        """First `name` value, if any."""
        for value in self.values.get("name", []):
            if value.data:
                return str(value.data)
        return None

    @property
    def image(self) -> Optional[str]:
        """First `image` value, used as listing thumbnail."""
        for value in self.values.get("image", []):
            if value.data:
                return str(value.data)
        return None


SourceItem = Union[Attribute, Category, Family, Product]

RESOURCE_MODELS: dict[ResourceType, type] = {
    ResourceType.ATTRIBUTES: Attribute,
    ResourceType.CATEGORIES: Category,
    ResourceType.FAMILIES: Family,
    ResourceType.PRODUCTS: Product,
}


def parse_item(resource: ResourceType, raw: dict) -> SourceItem:
    """Validate a raw Akeneo payload into the model for its resource type."""
    return RESOURCE_MODELS[resource].model_validate(raw)


def label_for(labels: dict[str, Optional[str]], locale: str) -> Optional[str]:
    """Label in the given locale, or None when missing/blank."""
    label = labels.get(locale)
    if label and label.strip():
        return label.strip()
    return None


# ===================
# SINGLE IMPORT FORMS
# ===================

class AttributeImportForm(BaseSchema):
    """Single attribute import. All fields mandatory; blanks are rejected by the importer."""

    code: str = Field("", description="Attribute code")
    type: str = Field("", description="Akeneo attribute type")
    label: str = Field("", description="Label")

    def to_item(self, locale: str) -> Attribute:
        return Attribute(code=self.code, type=self.type, labels={locale: self.label})


class CategoryImportForm(BaseSchema):
    """Single category import. All fields mandatory."""

    code: str = Field("", description="Category code")
    label: str = Field("", description="Label")

    def to_item(self, locale: str) -> Category:
        return Category(code=self.code, labels={locale: self.label})


class FamilyImportForm(BaseSchema):
    """Single family import."""

    code: str = Field("", description="Family code")

    def to_item(self, locale: str) -> Family:
        return Family(code=self.code)


class ProductImportForm(BaseSchema):
    """Single product import. All fields mandatory."""

    identifier: str = Field("", description="Product identifier")
    name: str = Field("", description="Product name")

    def to_item(self, locale: str) -> Product:
        return Product(
            identifier=self.identifier,
            values={"name": [ProductValue(data=self.name)]},
        )


IMPORT_FORMS: dict[ResourceType, type] = {
    ResourceType.ATTRIBUTES: AttributeImportForm,
    ResourceType.CATEGORIES: CategoryImportForm,
    ResourceType.FAMILIES: FamilyImportForm,
    ResourceType.PRODUCTS: ProductImportForm,
}
