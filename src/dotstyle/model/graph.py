"""Core graph model: identifiers, statements, graph content and graphs.

Every type here is a frozen dataclass compared structurally. Sequence fields
are stored as tuples, attribute maps as dicts keyed by :data:`Identifier`.
Attribute key order is irrelevant to equality; statement order is not, since
a default-attribute statement only affects the elements declared after it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar, Mapping, Union

from dotstyle.model.markup import MarkupNode, normalize_children

# Words that can never be used as a bare identifier.
KEYWORDS: frozenset[str] = frozenset({"graph", "digraph", "subgraph", "node", "edge"})


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Text:
    """A textual identifier: bare word, number or quoted string alike."""

    value: str


@dataclass(frozen=True)
class Markup:
    """An identifier written as embedded markup (``<...>``)."""

    children: tuple[MarkupNode, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    def normalized(self) -> Markup:
        """Return an equivalent tree without empty or adjacent text runs."""
        return Markup(normalize_children(self.children))


Identifier = Union[Text, Markup]
Attributes = dict[Identifier, Identifier]


def text_attributes(values: Mapping[str, str]) -> Attributes:
    """Build an attribute map from plain strings."""
    return {Text(k): Text(v) for k, v in values.items()}


# ---------------------------------------------------------------------------
# Node identifiers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Port:
    """Sub-node addressing: ``:name`` or ``:name:point``."""

    name: Identifier
    point: Identifier | None = None


@dataclass(frozen=True)
class NodeId:
    """A node reference as used by edges, with an optional port."""

    id: Identifier
    port: Port | None = None


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


class Entity(Enum):
    """Kinds of element a stylesheet selector can target."""

    NODE = "node"
    EDGE = "edge"
    GRAPH = "graph"


@dataclass(frozen=True)
class AttributeDirective:
    """``node [...]`` or ``edge [...]``: defaults for every later node or edge."""

    kind: Entity
    attributes: Attributes = field(default_factory=dict)

    # Holds a dict, so instances compare by value but are not hashable.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.kind is Entity.GRAPH:
            raise ValueError("Graph attributes belong in GraphContent.attributes")
        object.__setattr__(self, "attributes", dict(self.attributes))


@dataclass(frozen=True)
class Node:
    """A single node declaration."""

    id: Identifier
    attributes: Attributes = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", dict(self.attributes))


@dataclass(frozen=True)
class Edge:
    """A link between exactly two nodes."""

    head: NodeId
    tail: NodeId
    attributes: Attributes = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", dict(self.attributes))


@dataclass(frozen=True)
class GraphContent:
    """Body of a graph or subgraph.

    Graph attributes can be written either as ``key=value`` statements or as
    ``graph [...]`` blocks; both are folded into ``attributes``, which keeps
    the final value of each key. That loses syntax but not meaning.
    """

    attributes: Attributes = field(default_factory=dict)
    statements: tuple[Statement, ...] = ()

    EMPTY: ClassVar[GraphContent]
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", dict(self.attributes))
        object.__setattr__(self, "statements", tuple(self.statements))

    def with_statement(self, statement: Statement) -> GraphContent:
        return replace(self, statements=self.statements + (statement,))

    def with_attributes(self, attributes: Mapping[Identifier, Identifier]) -> GraphContent:
        return replace(self, attributes={**self.attributes, **attributes})

    def merge(self, other: GraphContent) -> GraphContent:
        """Concatenate statements; attributes of *other* win on collision."""
        return GraphContent(
            attributes={**self.attributes, **other.attributes},
            statements=self.statements + other.statements,
        )


GraphContent.EMPTY = GraphContent()


@dataclass(frozen=True)
class Subgraph:
    """A nested graph, optionally named."""

    id: Identifier | None = None
    content: GraphContent = field(default_factory=GraphContent)

    __hash__ = None  # type: ignore[assignment]

    @property
    def attributes(self) -> Attributes:
        return self.content.attributes


Statement = Union[AttributeDirective, Node, Edge, Subgraph]


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Graph:
    """Root of a diagram."""

    id: Identifier | None = None
    strict: bool = False
    directed: bool = True
    content: GraphContent = field(default_factory=GraphContent)

    __hash__ = None  # type: ignore[assignment]

    @property
    def attributes(self) -> Attributes:
        return self.content.attributes

    @property
    def statements(self) -> tuple[Statement, ...]:
        return self.content.statements


def extract_classes(attributes: Mapping[Identifier, Identifier]) -> frozenset[str]:
    """Return the classes declared by an element's ``class`` attribute.

    The value is split on commas and empty pieces are dropped. Markup keys or
    values never declare classes.
    """
    value = attributes.get(Text("class"))
    if not isinstance(value, Text):
        return frozenset()
    return frozenset(c for c in value.value.split(",") if c)
