"""Default selectors for collections."""

from typing import Optional, Sequence

from storefront_sdk.graphql.selection import FieldSelector

from .base import FieldSpec, connection_query, node_query
from .product import image_query

COLLECTIONS_PAGE_SIZE = 20

COLLECTION_FIELDS = (
    "id",
    "handle",
    "updatedAt",
    "title",
    "descriptionHtml",
    ("image", image_query()),
)


def collection_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    """Collection selector; with an id it looks the collection up through ``node(id:)``."""
    return node_query("Collection", COLLECTION_FIELDS, fields)


def collection_connection_query(
    fields: Optional[Sequence[FieldSpec]] = None, first: int = COLLECTIONS_PAGE_SIZE
) -> FieldSelector:
    return connection_query(fields or COLLECTION_FIELDS, first)
