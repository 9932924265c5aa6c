"""
Storefront schema type metadata.

Only what the decoder needs: the type of each object/connection field the
default selectors reach, and which types implement ``Node`` (and can
therefore be refetched with ``node(id:)`` to continue a connection).
Connection fields map to the type of their edge nodes.
"""

from typing import Dict, Optional

QUERY_ROOT = "QueryRoot"
MUTATION_ROOT = "Mutation"

NODE_TYPES = frozenset(
    [
        "Checkout",
        "CheckoutLineItem",
        "Collection",
        "MailingAddress",
        "Order",
        "Product",
        "ProductOption",
        "ProductVariant",
        "ShopPolicy",
    ]
)

_CHECKOUT_PAYLOAD = {"checkout": "Checkout", "userErrors": "UserError"}

FIELD_TYPES: Dict[str, Dict[str, str]] = {
    QUERY_ROOT: {"shop": "Shop", "node": "Node"},
    MUTATION_ROOT: {
        "checkoutCreate": "CheckoutCreatePayload",
        "checkoutAddLineItems": "CheckoutAddLineItemsPayload",
    },
    "CheckoutCreatePayload": _CHECKOUT_PAYLOAD,
    "CheckoutAddLineItemsPayload": _CHECKOUT_PAYLOAD,
    "Shop": {
        "products": "Product",
        "collections": "Collection",
        "primaryDomain": "Domain",
        "privacyPolicy": "ShopPolicy",
        "termsOfService": "ShopPolicy",
        "refundPolicy": "ShopPolicy",
    },
    "Product": {
        "images": "Image",
        "variants": "ProductVariant",
        "options": "ProductOption",
        "collections": "Collection",
    },
    "ProductVariant": {
        "image": "Image",
        "selectedOptions": "SelectedOption",
        "product": "Product",
    },
    "Collection": {"image": "Image", "products": "Product"},
    "Checkout": {
        "lineItems": "CheckoutLineItem",
        "shippingAddress": "MailingAddress",
        "shippingLine": "ShippingRate",
        "customAttributes": "Attribute",
        "order": "Order",
    },
    "CheckoutLineItem": {"variant": "ProductVariant", "customAttributes": "Attribute"},
    "Order": {"shippingAddress": "MailingAddress", "lineItems": "OrderLineItem"},
    "OrderLineItem": {"variant": "ProductVariant", "customAttributes": "Attribute"},
}


def field_type(parent_type: Optional[str], field_name: str) -> Optional[str]:
    """Type of ``field_name`` on ``parent_type``, or None when unknown."""
    if parent_type is None:
        return None
    return FIELD_TYPES.get(parent_type, {}).get(field_name)


def is_node_type(type_name: Optional[str]) -> bool:
    return type_name in NODE_TYPES
