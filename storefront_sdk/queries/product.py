"""Default selectors for products, variants, options and images."""

from typing import Optional, Sequence

from storefront_sdk.graphql.selection import FieldSelector

from .base import FieldSpec, connection_query, node_query, object_query

PAGE_SIZE = 250
PRODUCTS_PAGE_SIZE = 20

IMAGE_FIELDS = ("id", "src", "altText")

OPTION_FIELDS = ("id", "name", "values")

SELECTED_OPTION_FIELDS = ("name", "value")


def image_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    return object_query(IMAGE_FIELDS, fields)


def image_connection_query(fields: Optional[Sequence[FieldSpec]] = None, first: int = PAGE_SIZE) -> FieldSelector:
    return connection_query(fields or IMAGE_FIELDS, first)


def option_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    return node_query("ProductOption", OPTION_FIELDS, fields)


def selected_option_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    return object_query(SELECTED_OPTION_FIELDS, fields)


VARIANT_FIELDS = (
    "id",
    "title",
    "price",
    "weight",
    "available",
    ("image", image_query()),
    ("selectedOptions", selected_option_query()),
)


def variant_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    return node_query("ProductVariant", VARIANT_FIELDS, fields)


def variant_connection_query(fields: Optional[Sequence[FieldSpec]] = None, first: int = PAGE_SIZE) -> FieldSelector:
    return connection_query(fields or VARIANT_FIELDS, first)


PRODUCT_FIELDS = (
    "id",
    "createdAt",
    "updatedAt",
    "bodyHtml",
    "handle",
    "productType",
    "title",
    "vendor",
    "tags",
    "publishedAt",
    ("options", option_query()),
    ("images", image_connection_query()),
    ("variants", variant_connection_query()),
)


def product_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    """Product selector; with an id it looks the product up through ``node(id:)``."""
    return node_query("Product", PRODUCT_FIELDS, fields)


def product_connection_query(
    fields: Optional[Sequence[FieldSpec]] = None, first: int = PRODUCTS_PAGE_SIZE
) -> FieldSelector:
    return connection_query(fields or PRODUCT_FIELDS, first)
