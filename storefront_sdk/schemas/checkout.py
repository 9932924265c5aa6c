"""
Modelos Pydantic para los inputs de mutaciones de checkout.

Aceptan claves en camelCase (como la API) o snake_case, y se renderizan
como literales de input GraphQL en camelCase.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class StorefrontInput(BaseModel):
    """Base para inputs de la API de storefront."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class AttributeInput(StorefrontInput):
    """Atributo personalizado (clave/valor)."""

    key: str
    value: str


class MailingAddressInput(StorefrontInput):
    """Dirección de envío."""

    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    company: Optional[str] = None
    country: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    province: Optional[str] = None
    zip: Optional[str] = None


class CheckoutLineItemInput(StorefrontInput):
    """Línea de checkout: variante y cantidad."""

    variant_id: str
    quantity: int = 1
    custom_attributes: Optional[List[AttributeInput]] = None

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v):
        """La cantidad debe ser positiva."""
        if v < 1:
            raise ValueError("quantity debe ser mayor que 0")
        return v


class CheckoutCreateInput(StorefrontInput):
    """Input de checkoutCreate."""

    email: Optional[str] = None
    line_items: Optional[List[CheckoutLineItemInput]] = None
    shipping_address: Optional[MailingAddressInput] = None
    note: Optional[str] = None
    custom_attributes: Optional[List[AttributeInput]] = None
    allow_partial_addresses: Optional[bool] = None


class CheckoutAddLineItemsInput(StorefrontInput):
    """Input de checkoutAddLineItems."""

    checkout_id: str
    line_items: List[CheckoutLineItemInput] = Field(default_factory=list)
