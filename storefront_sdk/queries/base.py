"""
Building blocks for default field selectors.

Every default selector is created by a factory taking an optional field
list. A field list entry is either a scalar field name or a
``(field_name, selector)`` pair for nested objects and connections.
"""

from typing import Optional, Sequence, Tuple, Union

from storefront_sdk.graphql.selection import FieldSelector, SelectionSet

FieldSpec = Union[str, Tuple[str, FieldSelector]]


def add_fields(selection: SelectionSet, fields: Sequence[FieldSpec]) -> None:
    for entry in fields:
        if isinstance(entry, str):
            selection.add(entry)
        else:
            name, selector = entry
            selector(selection, name)


def object_query(default_fields: Sequence[FieldSpec], fields: Optional[Sequence[FieldSpec]] = None) -> FieldSelector:
    """Selector for a plain object field."""
    selected = list(fields if fields is not None else default_fields)

    def select(parent: SelectionSet, field_name: str, node_id: Optional[str] = None) -> None:
        parent.add(field_name, builder=lambda selection: add_fields(selection, selected))

    return select


def node_query(
    type_name: str, default_fields: Sequence[FieldSpec], fields: Optional[Sequence[FieldSpec]] = None
) -> FieldSelector:
    """
    Selector for a ``Node`` type.

    Called with a ``node_id`` it targets ``node(id:)`` and specialises it
    with an inline fragment on ``type_name``; without one it selects the
    field directly.
    """
    selected = list(fields if fields is not None else default_fields)

    def select(parent: SelectionSet, field_name: str, node_id: Optional[str] = None) -> None:
        if node_id is None:
            parent.add(field_name, builder=lambda selection: add_fields(selection, selected))
            return
        parent.add(
            field_name,
            args={"id": node_id},
            builder=lambda node: node.add_inline_fragment_on(type_name, lambda entity: add_fields(entity, selected)),
        )

    return select


def connection_query(node_selector_fields: Sequence[FieldSpec], first: int) -> FieldSelector:
    """Selector for a paged connection whose nodes select ``node_selector_fields``."""
    selected = list(node_selector_fields)

    def select(parent: SelectionSet, field_name: str, node_id: Optional[str] = None) -> None:
        parent.add_connection(field_name, args={"first": first}, node_builder=lambda node: add_fields(node, selected))

    return select
