"""Input models for storefront mutations."""

from .checkout import (
    AttributeInput,
    CheckoutAddLineItemsInput,
    CheckoutCreateInput,
    CheckoutLineItemInput,
    MailingAddressInput,
)

__all__ = [
    "AttributeInput",
    "CheckoutAddLineItemsInput",
    "CheckoutCreateInput",
    "CheckoutLineItemInput",
    "MailingAddressInput",
]
