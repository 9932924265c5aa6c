"""
Async client SDK for the Shopify Storefront GraphQL API.

Fetches shops, products and collections and manages checkouts, completing
every paged connection (images, variants, line items) before returning.
"""

from .client import Client
from .core.config import Config
from .graphql.model import Connection, GraphModel
from .utils.error_handler import (
    AppException,
    MutationRejectedException,
    PaginationException,
    StorefrontAPIException,
    UserError,
    ValidationException,
)

__all__ = [
    "Client",
    "Config",
    "Connection",
    "GraphModel",
    "AppException",
    "MutationRejectedException",
    "PaginationException",
    "StorefrontAPIException",
    "UserError",
    "ValidationException",
]
