"""
Akeneo → Shopify mapping table.

One entry per resource type: the GraphQL mutation to run, how to build
its variables from an Akeneo item, and which mapped fields must be
non-empty before the call is made.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from models.resource import (
    Attribute,
    Category,
    Family,
    Product,
    ResourceType,
    SourceItem,
    label_for,
)


# ===================
# ATTRIBUTE TYPES
# ===================

DEFAULT_METAFIELD_TYPE = "single_line_text_field"

ATTRIBUTE_TYPE_MAP = {
    "pim_catalog_text": "single_line_text_field",
    "pim_catalog_textarea": "multi_line_text_field",
    "pim_catalog_number": "number_integer",
    "pim_catalog_boolean": "boolean",
    "pim_catalog_date": "date",
}


def map_attribute_type(akeneo_type: Optional[str]) -> str:
    """Shopify metafield type for an Akeneo attribute type."""
    return ATTRIBUTE_TYPE_MAP.get(akeneo_type or "", DEFAULT_METAFIELD_TYPE)


# ===================
# GRAPHQL DOCUMENTS
# ===================

METAFIELD_DEFINITION_CREATE = """
mutation CreateMetafieldDefinition($definition: MetafieldDefinitionInput!) {
  metafieldDefinitionCreate(definition: $definition) {
    createdDefinition {
      id
    }
    userErrors {
      field
      message
      code
    }
  }
}
"""

COLLECTION_CREATE = """
mutation collectionCreate($input: CollectionInput!) {
  collectionCreate(input: $input) {
    collection {
      id
    }
    userErrors {
      field
      message
    }
  }
}
"""

PRODUCT_TYPE_CREATE = """
mutation CreateProductType($name: String!) {
  productTypeCreate(name: $name) {
    productType {
      id
      name
    }
    userErrors {
      field
      message
    }
  }
}
"""

PRODUCT_CREATE = """
mutation populateProduct($input: ProductInput!) {
  productCreate(input: $input) {
    product {
      id
    }
    userErrors {
      field
      message
    }
  }
}
"""


# ===================
# MAPPING
# ===================

@dataclass(frozen=True)
class MappingContext:
    """Settings that influence how items are mapped."""
    label_locale: str = "en_US"
    metafield_namespace: str = "akeneo"


@dataclass(frozen=True)
class CreateOperation:
    """How one resource type is created in Shopify."""
    resource: ResourceType
    document: str
    mutation: str
    result_field: str
    build_variables: Callable[[Any, MappingContext], dict]
    required: tuple[str, ...]

    def variables_for(self, item: SourceItem, context: MappingContext) -> dict:
        return self.build_variables(item, context)

    def missing_fields(self, variables: dict) -> list[str]:
        """Required variable paths whose value is empty."""
        return [path for path in self.required if _is_blank(_lookup(variables, path))]


def _lookup(variables: dict, path: str) -> Any:
    value: Any = variables
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _attribute_variables(item: Attribute, context: MappingContext) -> dict:
    return {
        "definition": {
            "name": label_for(item.labels, context.label_locale) or item.code,
            "namespace": context.metafield_namespace,
            "key": item.code,
            "type": map_attribute_type(item.type),
            "ownerType": "PRODUCT",
        }
    }


def _category_variables(item: Category, context: MappingContext) -> dict:
    return {
        "input": {
            "title": label_for(item.labels, context.label_locale) or item.code,
            "handle": item.code,
        }
    }


def _family_variables(item: Family, context: MappingContext) -> dict:
    return {"name": item.code}


def _product_variables(item: Product, context: MappingContext) -> dict:
    return {
        "input": {
            "title": item.name or item.identifier,
            "handle": item.identifier,
        }
    }


CREATE_OPERATIONS: dict[ResourceType, CreateOperation] = {
    ResourceType.ATTRIBUTES: CreateOperation(
        resource=ResourceType.ATTRIBUTES,
        document=METAFIELD_DEFINITION_CREATE,
        mutation="metafieldDefinitionCreate",
        result_field="createdDefinition",
        build_variables=_attribute_variables,
        required=(
            "definition.name",
            "definition.namespace",
            "definition.key",
            "definition.type",
        ),
    ),
    ResourceType.CATEGORIES: CreateOperation(
        resource=ResourceType.CATEGORIES,
        document=COLLECTION_CREATE,
        mutation="collectionCreate",
        result_field="collection",
        build_variables=_category_variables,
        required=("input.title", "input.handle"),
    ),
    ResourceType.FAMILIES: CreateOperation(
        resource=ResourceType.FAMILIES,
        document=PRODUCT_TYPE_CREATE,
        mutation="productTypeCreate",
        result_field="productType",
        build_variables=_family_variables,
        required=("name",),
    ),
    ResourceType.PRODUCTS: CreateOperation(
        resource=ResourceType.PRODUCTS,
        document=PRODUCT_CREATE,
        mutation="productCreate",
        result_field="product",
        build_variables=_product_variables,
        required=("input.title", "input.handle"),
    ),
}


def get_create_operation(resource: ResourceType) -> CreateOperation:
    """Mapping entry for a resource type."""
    return CREATE_OPERATIONS[resource]
