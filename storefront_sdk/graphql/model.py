"""
Response models decoded against the selection tree that produced them.

Objects become ``GraphModel`` instances; paged connections become
``Connection`` lists that remember where the next page can be requested
from (their ``PageAnchor``). Models are never mutated after decoding:
pagination completion builds new models with ``replace`` / ``with_items``.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from storefront_sdk.graphql import schema
from storefront_sdk.graphql.selection import QUERY, Field, Operation, SelectionSet


class PageAnchor:
    """
    Position from which a connection can be requested again.

    Either a ``Node`` (type + id) that can be refetched with ``node(id:)``,
    or the operation root. ``path`` lists the fields walked from the anchor
    down to the object that owns the connection.
    """

    def __init__(
        self,
        path: Tuple[Field, ...] = (),
        node_type: Optional[str] = None,
        node_id: Optional[str] = None,
        root_kind: str = QUERY,
    ):
        self.path = path
        self.node_type = node_type
        self.node_id = node_id
        self.root_kind = root_kind

    @classmethod
    def for_node(cls, node_type: str, node_id: str) -> "PageAnchor":
        return cls(node_type=node_type, node_id=node_id)

    @property
    def is_node(self) -> bool:
        return self.node_id is not None

    @property
    def pageable(self) -> bool:
        # Mutations are never replayed to read another page
        return self.is_node or self.root_kind == QUERY

    def descend(self, field: Field) -> "PageAnchor":
        return PageAnchor(self.path + (field,), self.node_type, self.node_id, self.root_kind)

    def __repr__(self):
        target = f"{self.node_type}:{self.node_id}" if self.is_node else self.root_kind
        return f"PageAnchor({target}, path={[field.response_key for field in self.path]})"


class GraphModel:
    """Attribute view over one decoded response object."""

    def __init__(self, attrs: Dict[str, Any], type_name: Optional[str] = None):
        self.attrs = attrs
        self.type_name = type_name

    def __getattr__(self, name):
        attrs = self.__dict__.get("attrs")
        if attrs is not None and name in attrs:
            return attrs[name]
        raise AttributeError(f"'{self.type_name or 'GraphModel'}' has no selected field '{name}'")

    def __getitem__(self, key):
        return self.attrs[key]

    def __contains__(self, key):
        return key in self.attrs

    def get(self, key: str, default: Any = None) -> Any:
        return self.attrs.get(key, default)

    def replace(self, **fields) -> "GraphModel":
        """New model sharing this model's values, with ``fields`` substituted."""
        return GraphModel({**self.attrs, **fields}, self.type_name)

    def to_dict(self) -> Dict[str, Any]:
        return {key: _plain(value) for key, value in self.attrs.items()}

    def __eq__(self, other):
        if not isinstance(other, GraphModel):
            return NotImplemented
        return self.type_name == other.type_name and self.attrs == other.attrs

    def __repr__(self):
        identifier = self.attrs.get("id")
        if identifier is not None:
            return f"<{self.type_name or 'GraphModel'} id={identifier!r}>"
        return f"<{self.type_name or 'GraphModel'} fields={list(self.attrs)}>"


class Connection(list):
    """One page of a paged connection, plus what is needed to fetch the next one."""

    def __init__(
        self,
        items: Iterable[Any],
        field: Field,
        anchor: Optional[PageAnchor],
        has_next_page: bool = False,
        has_previous_page: bool = False,
        end_cursor: Optional[str] = None,
        type_name: Optional[str] = None,
    ):
        super().__init__(items)
        self.field = field
        self.anchor = anchor
        self.has_next_page = has_next_page
        self.has_previous_page = has_previous_page
        self.end_cursor = end_cursor
        self.type_name = type_name

    @property
    def name(self) -> str:
        return self.field.response_key

    def with_items(self, items: Iterable[Any]) -> "Connection":
        """Same page metadata, different items."""
        return Connection(
            items,
            self.field,
            self.anchor,
            has_next_page=self.has_next_page,
            has_previous_page=self.has_previous_page,
            end_cursor=self.end_cursor,
            type_name=self.type_name,
        )

    def __repr__(self):
        return f"<Connection {self.name} items={len(self)} has_next_page={self.has_next_page}>"


def _plain(value: Any) -> Any:
    if isinstance(value, GraphModel):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _selected_fields(selection_set: SelectionSet, type_name: Optional[str]) -> List[Field]:
    fields = list(selection_set.fields())
    for fragment in selection_set.inline_fragments():
        if fragment.type_name == type_name:
            fields.extend(_selected_fields(fragment.selection_set, type_name))
    return fields


def _concrete_type(selection_set: SelectionSet, data: Dict[str, Any], type_name: Optional[str]) -> Optional[str]:
    if data.get("__typename"):
        return data["__typename"]
    if type_name is None or type_name == "Node":
        fragments = list(selection_set.inline_fragments())
        if fragments:
            return fragments[0].type_name
    return type_name


def decode_object(
    selection_set: SelectionSet,
    data: Dict[str, Any],
    type_name: Optional[str],
    anchor: Optional[PageAnchor],
) -> GraphModel:
    """Decode one response object against its selection set."""
    concrete = _concrete_type(selection_set, data, type_name)
    if schema.is_node_type(concrete) and data.get("id"):
        anchor = PageAnchor.for_node(concrete, data["id"])

    attrs: Dict[str, Any] = {}
    for field in _selected_fields(selection_set, concrete):
        key = field.response_key
        if key not in data:
            continue
        attrs[key] = _decode_field(field, data[key], concrete, anchor)
    return GraphModel(attrs, concrete)


def _decode_field(field: Field, value: Any, parent_type: Optional[str], anchor: Optional[PageAnchor]) -> Any:
    selection_set = field.selection_set
    if value is None or selection_set is None:
        return value

    child_type = schema.field_type(parent_type, field.name)

    if selection_set.is_connection() and isinstance(value, dict):
        return _decode_connection(field, value, child_type, anchor)

    if isinstance(value, list):
        # List items have no path back from the anchor unless they are nodes themselves
        return [
            decode_object(selection_set, item, child_type, None) if isinstance(item, dict) else item for item in value
        ]

    if isinstance(value, dict):
        child_anchor = anchor.descend(field) if anchor is not None else None
        return decode_object(selection_set, value, child_type, child_anchor)

    return value


def _decode_connection(
    field: Field,
    value: Dict[str, Any],
    node_type: Optional[str],
    anchor: Optional[PageAnchor],
) -> Connection:
    edges_field = field.selection_set.field("edges")
    node_field = edges_field.selection_set.field("node")
    edges = value.get(edges_field.response_key) or []

    items = []
    for edge in edges:
        node = edge.get(node_field.response_key)
        if isinstance(node, dict) and node_field.selection_set is not None:
            node = decode_object(node_field.selection_set, node, node_type, None)
        items.append(node)

    page_info = value.get("pageInfo") or {}
    end_cursor = edges[-1].get("cursor") if edges else None

    return Connection(
        items,
        field,
        anchor,
        has_next_page=bool(page_info.get("hasNextPage")),
        has_previous_page=bool(page_info.get("hasPreviousPage")),
        end_cursor=end_cursor,
        type_name=node_type,
    )


def decode_response(operation: Operation, data: Dict[str, Any]) -> GraphModel:
    """Decode the ``data`` member of a response to ``operation``."""
    anchor = PageAnchor(root_kind=operation.kind)
    return decode_object(operation.selection_set, data, operation.root_type, anchor)
