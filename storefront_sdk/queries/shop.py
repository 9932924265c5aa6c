"""Default selectors for the shop, its domain and its policies."""

from typing import Optional, Sequence

from storefront_sdk.graphql.selection import FieldSelector

from .base import FieldSpec, node_query, object_query

DOMAIN_FIELDS = ("host", "sslEnabled", "url")

SHOP_POLICY_FIELDS = ("id", "title", "url", "body")


def domain_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    return object_query(DOMAIN_FIELDS, fields)


def shop_policy_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    return node_query("ShopPolicy", SHOP_POLICY_FIELDS, fields)


SHOP_FIELDS = (
    "name",
    "description",
    "currencyCode",
    "moneyFormat",
    ("primaryDomain", domain_query()),
)

SHOP_POLICIES = (
    ("privacyPolicy", shop_policy_query()),
    ("termsOfService", shop_policy_query()),
    ("refundPolicy", shop_policy_query()),
)


def shop_query(fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    return object_query(SHOP_FIELDS, fields)
