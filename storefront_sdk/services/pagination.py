"""
Connection pagination engine.

Completes the paged connections of response nodes: every connection of a
node is walked concurrently with the others, and the pages of one
connection are walked in order by the transport. Nodes are rebuilt with the
completed collections, never modified in place.
"""

import asyncio
import logging
from typing import Iterable, List, Optional, Sequence

from storefront_sdk.graphql.client import DEFAULT_PAGE_SIZE, GraphQLClient
from storefront_sdk.graphql.model import Connection, GraphModel

logger = logging.getLogger(__name__)


async def complete_connections(
    graphql_client: GraphQLClient,
    node: Optional[GraphModel],
    connection_fields: Sequence[str],
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Optional[GraphModel]:
    """
    Replace each named connection of ``node`` with its completed collection.

    Connections are matched on their schema field name, so aliased
    selections (``pics: images(...)``) are completed under their alias.
    Fields that were not selected (or not selected as connections) are left
    as they are. The first failing walk propagates; the walks of the other
    connections are not cancelled but their results are dropped.
    """
    if node is None:
        return None

    paged = [
        key
        for key, value in node.attrs.items()
        if isinstance(value, Connection) and value.field.name in connection_fields
    ]
    if not paged:
        return node

    collections = await asyncio.gather(
        *(graphql_client.fetch_all_pages(node.get(key), page_size=page_size) for key in paged)
    )
    return node.replace(**dict(zip(paged, collections)))


async def complete_each(
    graphql_client: GraphQLClient,
    nodes: Iterable[GraphModel],
    connection_fields: Sequence[str],
    page_size: int = DEFAULT_PAGE_SIZE,
) -> List[GraphModel]:
    """Run ``complete_connections`` for every node concurrently, keeping node order."""
    nodes = list(nodes)
    completed = await asyncio.gather(
        *(complete_connections(graphql_client, node, connection_fields, page_size) for node in nodes)
    )
    logger.debug(f"Completed {', '.join(connection_fields)} for {len(nodes)} node(s)")
    return list(completed)
