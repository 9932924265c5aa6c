"""
Selection trees for GraphQL operations.

A selection tree is built by handing a ``SelectionSet`` to field selectors,
which call ``add`` / ``add_connection`` / ``add_inline_fragment_on`` on it.
The tree is rendered to a GraphQL document only when the operation is
dispatched, and it is frozen from then on.
"""

import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Protocol, Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)

QUERY = "query"
MUTATION = "mutation"
OPERATION_KINDS = (QUERY, MUTATION)

SelectionBuilder = Callable[["SelectionSet"], None]


class FieldSelector(Protocol):
    """Declares which fields to select for ``field_name`` under ``parent``."""

    def __call__(self, parent: "SelectionSet", field_name: str, node_id: Optional[str] = None) -> None: ...


class FrozenSelectionError(RuntimeError):
    """Raised when a dispatched selection tree is modified."""


class EnumValue(str):
    """Argument value rendered as a bare GraphQL enum literal."""


def render_value(value: Any) -> str:
    """Render a Python value as a GraphQL input literal."""
    if isinstance(value, EnumValue):
        return str(value)
    if isinstance(value, BaseModel):
        return render_value(value.model_dump(by_alias=True, exclude_none=True))
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, dict):
        pairs = ", ".join(f"{key}: {render_value(item)}" for key, item in value.items())
        return "{" + pairs + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(render_value(item) for item in value) + "]"
    raise TypeError(f"Cannot render {type(value).__name__} as a GraphQL value")


def render_args(args: Dict[str, Any]) -> str:
    if not args:
        return ""
    return "(" + ", ".join(f"{name}: {render_value(value)}" for name, value in args.items()) + ")"


class Field:
    """A field selection, optionally with arguments and a nested selection set."""

    def __init__(
        self,
        name: str,
        args: Optional[Dict[str, Any]] = None,
        selection_set: Optional["SelectionSet"] = None,
        alias: Optional[str] = None,
    ):
        self.name = name
        self.args = dict(args or {})
        self.selection_set = selection_set
        self.alias = alias

    @property
    def response_key(self) -> str:
        return self.alias or self.name

    def with_args(self, **args) -> "Field":
        """Copy of this field with ``args`` merged over its own arguments."""
        return Field(self.name, {**self.args, **args}, self.selection_set, self.alias)

    def to_graphql(self) -> str:
        prefix = f"{self.alias}: " if self.alias else ""
        text = f"{prefix}{self.name}{render_args(self.args)}"
        if self.selection_set is not None:
            text += f" {self.selection_set.to_graphql()}"
        return text

    def __eq__(self, other):
        if not isinstance(other, Field):
            return NotImplemented
        return (
            self.name == other.name
            and self.alias == other.alias
            and self.args == other.args
            and self.selection_set == other.selection_set
        )

    def __repr__(self):
        return f"Field({self.to_graphql()!r})"


class InlineFragment:
    """``... on TypeName { ... }``"""

    def __init__(self, type_name: str, selection_set: "SelectionSet"):
        self.type_name = type_name
        self.selection_set = selection_set

    def to_graphql(self) -> str:
        return f"... on {self.type_name} {self.selection_set.to_graphql()}"

    def __eq__(self, other):
        if not isinstance(other, InlineFragment):
            return NotImplemented
        return self.type_name == other.type_name and self.selection_set == other.selection_set

    def __repr__(self):
        return f"InlineFragment({self.type_name!r})"


Selection = Union[Field, InlineFragment]


class SelectionSet:
    """Ordered set of field selections and inline fragments."""

    def __init__(self):
        self.selections: List[Selection] = []
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self):
        if self._frozen:
            raise FrozenSelectionError("Selection tree was already dispatched and can no longer be modified")

    def add(
        self,
        name: str,
        args: Optional[Dict[str, Any]] = None,
        builder: Optional[SelectionBuilder] = None,
        alias: Optional[str] = None,
    ) -> Field:
        """
        Select a field.

        Selecting a field that is already present (same response key) merges
        the nested selections instead of adding a duplicate. Conflicting
        arguments for the same response key raise ``ValueError``.
        """
        self._check_mutable()
        args = dict(args or {})
        response_key = alias or name

        existing = self.field(response_key)
        if existing is not None:
            if existing.name != name or existing.args != args:
                raise ValueError(f"Conflicting selections for '{response_key}'")
            if builder is not None:
                if existing.selection_set is None:
                    existing.selection_set = SelectionSet()
                builder(existing.selection_set)
            return existing

        selection_set = None
        if builder is not None:
            selection_set = SelectionSet()
            builder(selection_set)

        field = Field(name, args, selection_set, alias)
        self.selections.append(field)
        return field

    def add_field(self, field: Field) -> Field:
        """Append a prebuilt field (its selection set is shared, not copied)."""
        self._check_mutable()
        if self.field(field.response_key) is not None:
            raise ValueError(f"Field '{field.response_key}' is already selected")
        self.selections.append(field)
        return field

    def add_inline_fragment_on(self, type_name: str, builder: SelectionBuilder) -> InlineFragment:
        self._check_mutable()
        for selection in self.selections:
            if isinstance(selection, InlineFragment) and selection.type_name == type_name:
                builder(selection.selection_set)
                return selection

        selection_set = SelectionSet()
        builder(selection_set)
        fragment = InlineFragment(type_name, selection_set)
        self.selections.append(fragment)
        return fragment

    def add_connection(
        self,
        name: str,
        args: Optional[Dict[str, Any]] = None,
        node_builder: Optional[SelectionBuilder] = None,
        alias: Optional[str] = None,
    ) -> Field:
        """Select a paged connection: ``pageInfo``, and ``edges`` with ``cursor`` and ``node``."""

        def build(connection: SelectionSet):
            connection.add("pageInfo", builder=_page_info)
            connection.add("edges", builder=lambda edges: _edges(edges, node_builder))

        return self.add(name, args=args, builder=build, alias=alias)

    def field(self, response_key: str) -> Optional[Field]:
        for selection in self.selections:
            if isinstance(selection, Field) and selection.response_key == response_key:
                return selection
        return None

    def fields(self) -> Iterator[Field]:
        for selection in self.selections:
            if isinstance(selection, Field):
                yield selection

    def inline_fragments(self) -> Iterator[InlineFragment]:
        for selection in self.selections:
            if isinstance(selection, InlineFragment):
                yield selection

    def is_connection(self) -> bool:
        """True when this selection set has the shape of a paged connection."""
        edges = self.field("edges")
        return edges is not None and edges.selection_set is not None and edges.selection_set.field("node") is not None

    def freeze(self) -> "SelectionSet":
        self._frozen = True
        for selection in self.selections:
            if selection.selection_set is not None:
                selection.selection_set.freeze()
        return self

    def to_graphql(self) -> str:
        return "{ " + " ".join(selection.to_graphql() for selection in self.selections) + " }"

    def __eq__(self, other):
        if not isinstance(other, SelectionSet):
            return NotImplemented
        return self.selections == other.selections

    def __len__(self):
        return len(self.selections)

    def __repr__(self):
        return f"SelectionSet({self.to_graphql()!r})"


def _page_info(page_info: SelectionSet):
    page_info.add("hasNextPage")
    page_info.add("hasPreviousPage")


def _edges(edges: SelectionSet, node_builder: Optional[SelectionBuilder]):
    edges.add("cursor")
    edges.add("node", builder=node_builder or (lambda node: node.add("id")))


class Operation:
    """A composed query or mutation ready to dispatch."""

    def __init__(self, kind: str, selection_set: SelectionSet):
        if kind not in OPERATION_KINDS:
            raise ValueError(f"Unknown operation kind '{kind}', expected one of {OPERATION_KINDS}")
        self.kind = kind
        self.selection_set = selection_set

    @property
    def root_type(self) -> str:
        return "Mutation" if self.kind == MUTATION else "QueryRoot"

    def to_graphql(self) -> str:
        return f"{self.kind} {self.selection_set.to_graphql()}"

    def freeze(self) -> "Operation":
        self.selection_set.freeze()
        return self

    def __eq__(self, other):
        if not isinstance(other, Operation):
            return NotImplemented
        return self.kind == other.kind and self.selection_set == other.selection_set

    def __repr__(self):
        return f"Operation({self.to_graphql()!r})"


def compose(operation_kind: str, builder: SelectionBuilder) -> Operation:
    """
    Build the root selection tree for a query or mutation.

    ``builder`` receives the root selection set and declares every field.
    No network access happens here.
    """
    if operation_kind not in OPERATION_KINDS:
        raise ValueError(f"Unknown operation kind '{operation_kind}', expected one of {OPERATION_KINDS}")
    root = SelectionSet()
    builder(root)
    logger.debug(f"Composed {operation_kind} with {len(root)} root selections")
    return Operation(operation_kind, root)
