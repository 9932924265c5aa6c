"""GraphQL selection trees, response models and the HTTP transport."""

from .client import DEFAULT_PAGE_SIZE, GraphQLClient, GraphQLResult
from .model import Connection, GraphModel, PageAnchor
from .selection import FieldSelector, Operation, SelectionSet, compose

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "GraphQLClient",
    "GraphQLResult",
    "Connection",
    "GraphModel",
    "PageAnchor",
    "FieldSelector",
    "Operation",
    "SelectionSet",
    "compose",
]
