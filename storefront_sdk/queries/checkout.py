"""Default selectors for checkouts, line items and the objects they reference."""

from typing import Optional, Sequence

from storefront_sdk.graphql.selection import FieldSelector

from .base import FieldSpec, connection_query, node_query, object_query
from .product import variant_query

PAGE_SIZE = 250

CUSTOM_ATTRIBUTE_FIELDS = ("key", "value")

MAILING_ADDRESS_FIELDS = (
    "id",
    "address1",
    "address2",
    "city",
    "company",
    "country",
    "countryCode",
    "firstName",
    "lastName",
    "name",
    "formatted",
    "latitude",
    "longitude",
    "phone",
    "province",
    "provinceCode",
    "zip",
)

SHIPPING_RATE_FIELDS = ("handle", "price", "title")


def custom_attribute_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    return object_query(CUSTOM_ATTRIBUTE_FIELDS, fields)


def mailing_address_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    return node_query("MailingAddress", MAILING_ADDRESS_FIELDS, fields)


def shipping_rate_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    return object_query(SHIPPING_RATE_FIELDS, fields)


ORDER_FIELDS = (
    "id",
    "orderNumber",
    "createdAt",
    "updatedAt",
    "processedAt",
    "cancelledAt",
    "cancelReason",
    "currencyCode",
    "subtotalPrice",
    "totalShippingPrice",
    "totalTax",
    "totalPrice",
    "totalRefunded",
    "customerUrl",
    ("shippingAddress", mailing_address_query()),
)


def order_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    return node_query("Order", ORDER_FIELDS, fields)


LINE_ITEM_FIELDS = (
    "id",
    "title",
    "quantity",
    ("variant", variant_query()),
    ("customAttributes", custom_attribute_query()),
)


def line_item_connection_query(fields: Optional[Sequence[FieldSpec]] = None, first: int = PAGE_SIZE) -> FieldSelector:
    return connection_query(fields or LINE_ITEM_FIELDS, first)


CHECKOUT_FIELDS = (
    "id",
    "ready",
    "requiresShipping",
    "note",
    "webUrl",
    "orderStatusUrl",
    "taxExempt",
    "taxesIncluded",
    "currencyCode",
    "paymentDue",
    "subtotalPrice",
    "totalTax",
    "totalPrice",
    "completedAt",
    "createdAt",
    "updatedAt",
    ("lineItems", line_item_connection_query()),
    ("shippingAddress", mailing_address_query()),
    ("shippingLine", shipping_rate_query()),
    ("customAttributes", custom_attribute_query()),
    ("order", order_query()),
)


def checkout_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    return node_query("Checkout", CHECKOUT_FIELDS, fields)
