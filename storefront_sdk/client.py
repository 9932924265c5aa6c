"""
Storefront client.

Public entry points for catalog reads and checkout mutations. Each one
composes its selection tree (guarded for mutations), dispatches it once,
checks user errors for mutations and completes the paged connections of
the result before returning it.
"""

import logging
from types import SimpleNamespace
from typing import Any, Dict, Optional, Type, Union

from pydantic import ValidationError

from storefront_sdk import queries
from storefront_sdk.core.config import Config
from storefront_sdk.graphql.client import Fetcher, GraphQLClient
from storefront_sdk.graphql.model import Connection, GraphModel
from storefront_sdk.graphql.selection import FieldSelector, SelectionSet
from storefront_sdk.schemas import CheckoutAddLineItemsInput, CheckoutCreateInput
from storefront_sdk.services.mutation_guard import check, guard
from storefront_sdk.services.pagination import complete_connections, complete_each
from storefront_sdk.utils.error_handler import ValidationException
from storefront_sdk.utils.image_helpers import ImageHelpers
from storefront_sdk.utils.product_helpers import ProductHelpers

logger = logging.getLogger(__name__)

PRODUCT_CONNECTIONS = ("images", "variants")
CHECKOUT_CONNECTIONS = ("lineItems",)

DEFAULT_SHOP_QUERY = queries.shop_query()
DEFAULT_SHOP_POLICIES_QUERY = queries.shop_query(queries.SHOP_POLICIES)
DEFAULT_PRODUCT_QUERY = queries.product_query()
DEFAULT_PRODUCT_CONNECTION_QUERY = queries.product_connection_query()
DEFAULT_COLLECTION_QUERY = queries.collection_query()
DEFAULT_COLLECTION_CONNECTION_QUERY = queries.collection_connection_query()
DEFAULT_CHECKOUT_QUERY = queries.checkout_query()

InputType = Union[Dict[str, Any], CheckoutCreateInput, CheckoutAddLineItemsInput, None]


def _validate_input(model: Type, value: InputType, field: str):
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value or {})
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise ValidationException(
            f"Invalid {field}: {first.get('msg')} ({location})",
            field=f"{field}.{location}" if location else field,
            invalid_value=first.get("input"),
        ) from e


class Client:
    """
    Client for the storefront GraphQL API.

    Example::

        config = Config.create(domain="my-shop.myshopify.com", storefront_access_token="...")
        async with Client(config) as client:
            products = await client.fetch_all_products()
    """

    def __init__(
        self,
        config: Config,
        graphql_client_class: Type[GraphQLClient] = GraphQLClient,
        fetcher: Optional[Fetcher] = None,
    ):
        self.config = config
        self.page_size = config.page_size

        self.graphql_client = graphql_client_class(
            url=config.api_url,
            headers={"Authorization": config.authorization_header},
            fetcher=fetcher,
            timeout_seconds=config.timeout_seconds,
            connect_timeout_seconds=config.connect_timeout_seconds,
        )

        self.product = SimpleNamespace(helpers=ProductHelpers())
        self.image = SimpleNamespace(helpers=ImageHelpers())
        self.queries = queries

        logger.info(f"Initialized storefront client for {config.domain}")

    async def initialize(self):
        await self.graphql_client.initialize()

    async def close(self):
        await self.graphql_client.close()

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def fetch_shop_info(self, query: Optional[FieldSelector] = None) -> GraphModel:
        """Fetch the shop's name, description, currency and primary domain."""
        query = query or DEFAULT_SHOP_QUERY
        operation = self.graphql_client.query(lambda root: query(root, "shop"))

        result = await self.graphql_client.send(operation)
        return result.model.shop

    async def fetch_shop_policies(self, query: Optional[FieldSelector] = None) -> GraphModel:
        """Fetch the shop with its privacy, terms of service and refund policies."""
        query = query or DEFAULT_SHOP_POLICIES_QUERY
        operation = self.graphql_client.query(lambda root: query(root, "shop"))

        result = await self.graphql_client.send(operation)
        return result.model.shop

    async def fetch_all_products(self, query: Optional[FieldSelector] = None) -> Connection:
        """
        Fetch the shop's products with every image and variant of each product.

        Returns:
            Connection: the page of products; each product's ``images`` and
            ``variants`` are completed lists. Use ``fetch_next_page`` for more
            products.
        """
        query = query or DEFAULT_PRODUCT_CONNECTION_QUERY

        def build(root: SelectionSet):
            root.add("shop", builder=lambda shop: query(shop, "products"))

        result = await self.graphql_client.send(self.graphql_client.query(build))
        products = result.model.shop.products

        completed = await complete_each(self.graphql_client, products, PRODUCT_CONNECTIONS, self.page_size)
        logger.info(f"Fetched {len(completed)} products")
        return products.with_items(completed)

    async def fetch_product(self, product_id: str, query: Optional[FieldSelector] = None) -> Optional[GraphModel]:
        """
        Fetch one product by id with all of its images and variants.

        Returns:
            GraphModel: the product, or None if no node has that id
        """
        query = query or DEFAULT_PRODUCT_QUERY
        operation = self.graphql_client.query(lambda root: query(root, "node", product_id))

        result = await self.graphql_client.send(operation)
        product = result.model.node
        if product is None:
            logger.info(f"No product found with ID: {product_id}")
            return None

        return await complete_connections(self.graphql_client, product, PRODUCT_CONNECTIONS, self.page_size)

    async def fetch_all_collections(self, query: Optional[FieldSelector] = None) -> Connection:
        """Fetch the shop's collections (first page, no sub-resources completed)."""
        query = query or DEFAULT_COLLECTION_CONNECTION_QUERY

        def build(root: SelectionSet):
            root.add("shop", builder=lambda shop: query(shop, "collections"))

        result = await self.graphql_client.send(self.graphql_client.query(build))
        return result.model.shop.collections

    async def fetch_collection(self, collection_id: str, query: Optional[FieldSelector] = None) -> Optional[GraphModel]:
        """
        Fetch one collection by id.

        Returns:
            GraphModel: the collection, or None if no node has that id
        """
        query = query or DEFAULT_COLLECTION_QUERY
        operation = self.graphql_client.query(lambda root: query(root, "node", collection_id))

        result = await self.graphql_client.send(operation)
        if result.model.node is None:
            logger.info(f"No collection found with ID: {collection_id}")
        return result.model.node

    async def create_checkout(self, input: InputType = None, query: Optional[FieldSelector] = None) -> GraphModel:
        """
        Create a checkout.

        Args:
            input: ``CheckoutCreateInput`` or a dict with any of ``email``,
                ``lineItems``, ``shippingAddress``, ``note``, ``customAttributes``
            query: selector for the fields of the returned checkout

        Returns:
            GraphModel: the created checkout with every line item

        Raises:
            MutationRejectedException: if the server reported user errors
            ValidationException: if ``input`` is invalid
        """
        checkout_input = _validate_input(CheckoutCreateInput, input, "input")
        return await self._checkout_mutation("checkoutCreate", checkout_input, query)

    async def add_line_items(self, input: InputType, query: Optional[FieldSelector] = None) -> GraphModel:
        """
        Add line items to an existing checkout.

        Args:
            input: ``CheckoutAddLineItemsInput`` or a dict with ``checkoutId``
                and ``lineItems``
            query: selector for the fields of the returned checkout

        Returns:
            GraphModel: the updated checkout with every line item

        Raises:
            MutationRejectedException: if the server reported user errors
            ValidationException: if ``input`` is invalid
        """
        line_items_input = _validate_input(CheckoutAddLineItemsInput, input, "input")
        return await self._checkout_mutation("checkoutAddLineItems", line_items_input, query)

    async def fetch_next_page(self, connection: Connection) -> Connection:
        """
        Fetch the page that follows a connection returned by this client.

        Products on the new page get every image and variant, as with
        ``fetch_all_products``.
        """
        page = await self.graphql_client.fetch_next_page(connection, self.page_size)
        if page.type_name != "Product":
            return page

        completed = await complete_each(self.graphql_client, page, PRODUCT_CONNECTIONS, self.page_size)
        return page.with_items(completed)

    async def _checkout_mutation(self, operation_field: str, mutation_input: Any, query: Optional[FieldSelector]):
        query = query or DEFAULT_CHECKOUT_QUERY
        operation = self.graphql_client.mutation(guard(operation_field, {"input": mutation_input}, query, "checkout"))

        result = await self.graphql_client.send(operation)
        payload = check(result, operation_field)

        checkout = await complete_connections(
            self.graphql_client, payload.get("checkout"), CHECKOUT_CONNECTIONS, self.page_size
        )
        if checkout is not None:
            logger.info(f"{operation_field} succeeded for checkout {checkout.get('id')}")
        return checkout

    def __repr__(self):
        return f"Client(domain='{self.config.domain}')"
