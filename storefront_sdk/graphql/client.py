"""
GraphQL transport for the storefront API.

Composes operations, posts them over an aiohttp session, decodes responses
into ``GraphModel`` graphs and walks paged connections page by page.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

import aiohttp
from aiohttp import ClientTimeout

from storefront_sdk.core.logging_config import log_api_call
from storefront_sdk.graphql.model import Connection, GraphModel, decode_response
from storefront_sdk.graphql.selection import MUTATION, QUERY, Field, Operation, SelectionBuilder, SelectionSet, compose
from storefront_sdk.utils.error_handler import ErrorCode, PaginationException, StorefrontAPIException
from storefront_sdk.version import user_agent

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 250

Fetcher = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]


@dataclass(frozen=True)
class GraphQLResult:
    """Decoded model plus the raw ``data`` it was decoded from."""

    model: GraphModel
    data: Dict[str, Any]


class GraphQLClient:
    """
    Storefront GraphQL transport.

    Requests go through ``fetcher`` when one is given (any coroutine taking
    the JSON payload and returning the JSON response); otherwise through an
    aiohttp session opened by ``initialize()``. Failed requests are never
    retried here.
    """

    def __init__(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        fetcher: Optional[Fetcher] = None,
        timeout_seconds: int = 30,
        connect_timeout_seconds: int = 10,
    ):
        self.url = url
        self.headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": user_agent(),
            **(headers or {}),
        }
        self.fetcher = fetcher
        self.timeout = ClientTimeout(total=timeout_seconds, connect=connect_timeout_seconds)
        self.session: Optional[aiohttp.ClientSession] = None

    async def initialize(self):
        """Open the HTTP session (not needed when a custom fetcher is used)."""
        if self.fetcher is not None or self.session is not None:
            return
        self.session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        logger.info(f"Storefront GraphQL client initialized for {self.url}")

    async def close(self):
        """Close the HTTP session and clean up resources."""
        if self.session:
            await self.session.close()
            self.session = None
            logger.info("Storefront GraphQL client closed")

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def query(self, builder: SelectionBuilder) -> Operation:
        return compose(QUERY, builder)

    def mutation(self, builder: SelectionBuilder) -> Operation:
        return compose(MUTATION, builder)

    async def send(self, operation: Operation) -> GraphQLResult:
        """
        Dispatch an operation once.

        Returns:
            GraphQLResult: decoded model and raw data

        Raises:
            StorefrontAPIException: on network/HTTP failure or top-level GraphQL errors
        """
        operation.freeze()
        payload = {"query": operation.to_graphql()}
        logger.debug(f"Sending {operation.kind}: {payload['query']}")

        response = await self._fetch(payload)

        errors = response.get("errors")
        if errors:
            messages = [error.get("message", str(error)) for error in errors]
            raise StorefrontAPIException(
                f"GraphQL errors: {', '.join(messages)}",
                endpoint=self.url,
                graphql_errors=errors,
                error_code=ErrorCode.GRAPHQL_ERROR,
                is_retryable=False,
            )

        data = response.get("data")
        if data is None:
            raise StorefrontAPIException("Response contained no data", endpoint=self.url)

        return GraphQLResult(decode_response(operation, data), data)

    def next_page_operation(self, connection: Connection, page_size: int = DEFAULT_PAGE_SIZE) -> Tuple[Operation, List[str]]:
        """
        Build the query for the page after ``connection`` and the response path to it.

        Raises:
            PaginationException: if the connection cannot be continued
        """
        anchor = connection.anchor
        if anchor is None or not anchor.pageable:
            raise PaginationException(
                f"Connection '{connection.name}' has no refetchable owner (select 'id' on its parent node)",
                connection_field=connection.name,
            )
        if connection.end_cursor is None:
            raise PaginationException(
                f"Connection '{connection.name}' has more pages but no cursor was selected",
                connection_field=connection.name,
            )

        page_field = connection.field.with_args(first=page_size, after=connection.end_cursor)

        def nest(selection: SelectionSet, path: Tuple[Field, ...]):
            if not path:
                selection.add_field(page_field)
                return
            head, rest = path[0], path[1:]
            selection.add(head.name, args=head.args, alias=head.alias, builder=lambda child: nest(child, rest))

        keys = [field.response_key for field in anchor.path] + [page_field.response_key]

        if anchor.is_node:

            def select_page(fragment: SelectionSet):
                # id keeps the next page anchored to the same node
                fragment.add("id")
                nest(fragment, anchor.path)

            def builder(root: SelectionSet):
                root.add(
                    "node",
                    args={"id": anchor.node_id},
                    builder=lambda node: node.add_inline_fragment_on(anchor.node_type, select_page),
                )

            return self.query(builder), ["node"] + keys

        return self.query(lambda root: nest(root, anchor.path)), keys

    async def fetch_next_page(self, connection: Connection, page_size: int = DEFAULT_PAGE_SIZE) -> Connection:
        """Fetch the page that follows ``connection``."""
        operation, path = self.next_page_operation(connection, page_size)
        result = await self.send(operation)

        value: Any = result.model
        for key in path:
            value = value.get(key) if isinstance(value, GraphModel) else None
            if value is None:
                raise PaginationException(
                    f"Next page of '{connection.name}' missing from response at '{key}'",
                    connection_field=connection.name,
                )
        if not isinstance(value, Connection):
            raise PaginationException(
                f"Next page of '{connection.name}' is not a connection", connection_field=connection.name
            )
        return value

    async def fetch_all_pages(self, connection: Connection, page_size: int = DEFAULT_PAGE_SIZE) -> List[Any]:
        """
        Walk ``connection`` to its last page.

        Pages are requested one after another, each with the previous page's
        end cursor. Returns every node of every page in fetch order.

        Raises:
            PaginationException: if any page request fails (no partial result)
        """
        items = list(connection)
        page = connection
        pages_fetched = 1

        while page.has_next_page:
            try:
                page = await self.fetch_next_page(page, page_size)
            except PaginationException:
                raise
            except StorefrontAPIException as e:
                raise PaginationException(
                    f"Failed fetching page {pages_fetched + 1} of '{connection.name}': {e.message}",
                    connection_field=connection.name,
                    pages_fetched=pages_fetched,
                    api_response_code=e.api_response_code,
                    endpoint=e.endpoint,
                    graphql_errors=e.graphql_errors,
                ) from e
            pages_fetched += 1
            items.extend(page)

        if pages_fetched > 1:
            logger.info(f"Fetched {len(items)} {connection.name} across {pages_fetched} pages")
        return items

    async def _fetch(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if self.fetcher is not None:
            return await self.fetcher(payload)
        return await self._post(payload)

    async def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self.session:
            raise StorefrontAPIException(
                "Client not initialized. Call initialize() first.",
                endpoint=self.url,
                error_code=ErrorCode.STOREFRONT_CONNECTION_FAILED,
                is_retryable=False,
            )

        started = time.monotonic()
        try:
            async with self.session.post(self.url, json=payload) as response:
                log_api_call("POST", self.url, response.status, time.monotonic() - started)

                if response.status != 200:
                    body = await response.text()
                    raise StorefrontAPIException(
                        f"HTTP {response.status}: {body[:200] or response.reason}",
                        api_response_code=response.status,
                        endpoint=self.url,
                    )

                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise StorefrontAPIException(
                        f"Invalid JSON in response: {str(e)}",
                        api_response_code=response.status,
                        endpoint=self.url,
                        is_retryable=False,
                    ) from e

        except aiohttp.ClientError as e:
            raise StorefrontAPIException(
                f"Network error: {str(e)}",
                endpoint=self.url,
                error_code=ErrorCode.STOREFRONT_CONNECTION_FAILED,
            ) from e
        except asyncio.TimeoutError as e:
            raise StorefrontAPIException(
                f"Request timed out after {self.timeout.total}s",
                endpoint=self.url,
                error_code=ErrorCode.STOREFRONT_CONNECTION_FAILED,
            ) from e

    def __repr__(self):
        return f"GraphQLClient(url='{self.url}', initialized={self.session is not None or self.fetcher is not None})"
