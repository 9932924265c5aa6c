"""
Default field selectors for every storefront entity.

Each factory returns a selector ``(parent, field_name, node_id=None)`` that
declares the fields to fetch. Pass ``fields`` to choose a different field
set; entries are field names or ``(field_name, selector)`` pairs.
"""

from .base import FieldSpec, add_fields, connection_query, node_query, object_query
from .checkout import (
    checkout_query,
    custom_attribute_query,
    line_item_connection_query,
    mailing_address_query,
    order_query,
    shipping_rate_query,
)
from .collection import collection_connection_query, collection_query
from .product import (
    image_connection_query,
    image_query,
    option_query,
    product_connection_query,
    product_query,
    selected_option_query,
    variant_connection_query,
    variant_query,
)
from .shop import SHOP_POLICIES, domain_query, shop_policy_query, shop_query

__all__ = [
    "FieldSpec",
    "add_fields",
    "connection_query",
    "node_query",
    "object_query",
    # Catalog
    "product_query",
    "product_connection_query",
    "variant_query",
    "variant_connection_query",
    "image_query",
    "image_connection_query",
    "option_query",
    "selected_option_query",
    "collection_query",
    "collection_connection_query",
    # Checkout
    "checkout_query",
    "line_item_connection_query",
    "custom_attribute_query",
    "mailing_address_query",
    "shipping_rate_query",
    "order_query",
    # Shop
    "shop_query",
    "shop_policy_query",
    "domain_query",
    "SHOP_POLICIES",
]
