"""Lark Transformer that converts a DOT parse tree into a Graph model."""

from __future__ import annotations

import functools
import logging
import re
from pathlib import Path
from typing import Iterable, Iterator, Sequence, Union

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from dotstyle.model.graph import (
    AttributeDirective,
    Attributes,
    Edge,
    Entity,
    Graph,
    GraphContent,
    Identifier,
    Markup,
    Node,
    NodeId,
    Port,
    Statement,
    Subgraph,
    Text,
)
from dotstyle.parser.errors import ParseError
from dotstyle.parser.markup import markup_token

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

# Human-readable names for grammar terminals, used in error messages.
_TERMINAL_LABELS: dict[str, str] = {
    "_LBRACE": "'{'",
    "_RBRACE": "'}'",
    "_LSQB": "'['",
    "_RSQB": "']'",
    "_EQUAL": "'='",
    "_COMMA": "','",
    "_SEMICOLON": "';'",
    "_COLON": "':'",
    "_PLUS": "'+'",
    "_EDGEOP": "'->' or '--'",
    "STRICT": "'strict'",
    "GRAPH": "'graph'",
    "DIGRAPH": "'digraph'",
    "SUBGRAPH": "'subgraph'",
    "NODE": "'node'",
    "EDGE": "'edge'",
    "ID": "identifier",
    "NUMBER": "number",
    "STRING": "string",
    "MARKUP": "markup",
    "CLASS": "class name",
    "$END": "end of input",
}

Endpoint = Union[Subgraph, list[NodeId]]

# Only \" and backslash-newline are escapes; any other pair is kept as written.
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def _unescape(match: re.Match[str]) -> str:
    char = match.group(1)
    if char == '"':
        return '"'
    if char == "\n":
        return ""
    return match.group(0)


def _decode_string(token: Token) -> str:
    """Strip the quotes from a STRING token and decode its escapes."""
    return _ESCAPE_RE.sub(_unescape, token.value[1:-1])


# ---------------------------------------------------------------------------
# Edge multiplexing
# ---------------------------------------------------------------------------


def _iter_node_ids(content: GraphContent) -> Iterator[NodeId]:
    for statement in content.statements:
        if isinstance(statement, Node):
            yield NodeId(statement.id)
        elif isinstance(statement, Edge):
            # Edges are containers for two nodes: head and tail.
            yield statement.head
            yield statement.tail
        elif isinstance(statement, Subgraph):
            yield from _iter_node_ids(statement.content)
        elif isinstance(statement, AttributeDirective):
            continue
        else:
            raise TypeError(f"Unexpected statement: {statement!r}")


def extract_node_ids(subgraph: Subgraph) -> list[NodeId]:
    """Return every node a subgraph declares, transitively, in first-seen order."""
    return list(dict.fromkeys(_iter_node_ids(subgraph.content)))


def expand_edge_chain(endpoints: Sequence[Endpoint], attributes: Attributes) -> GraphContent:
    """Expand ``a, b -> subgraph {c; d} -> e`` into concrete edges.

    Every node of an endpoint is linked to every node of the next one. Subgraph
    endpoints are kept as statements, ahead of the generated edges, so that
    their own content is still declared.
    """
    subgraphs = [e for e in endpoints if isinstance(e, Subgraph)]
    groups = [extract_node_ids(e) if isinstance(e, Subgraph) else e for e in endpoints]
    edges = [
        Edge(head, tail, attributes)
        for lhs, rhs in zip(groups, groups[1:])
        for head in lhs
        for tail in rhs
    ]
    return GraphContent(statements=(*subgraphs, *edges))


# ---------------------------------------------------------------------------
# Transformer
# ---------------------------------------------------------------------------


class DotTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into model objects.

    Statement rules return :class:`GraphContent` fragments (a single DOT
    statement may expand to several model statements, or only to graph
    attributes); ``body`` folds them in order.
    """

    # ---- atoms ----

    def atom(self, items: list[Token | Text]) -> Identifier:
        (value,) = items
        if isinstance(value, Text):
            return value
        if value.type == "MARKUP":
            markup: Markup = value.value
            return markup
        return Text(str(value))

    def quoted(self, items: list[Token]) -> Text:
        return Text("".join(_decode_string(token) for token in items))

    # ---- attributes ----

    def attr(self, items: list[Identifier]) -> tuple[Identifier, Identifier]:
        return (items[0], items[1])

    def attr_list(self, items: list[tuple[Identifier, Identifier]]) -> Attributes:
        # Later entries override earlier ones, across every [...] group.
        return dict(items)

    # ---- statements ----

    def graph_attr_assign(self, items: list[Identifier]) -> GraphContent:
        return GraphContent(attributes={items[0]: items[1]})

    def graph_attr_block(self, items: list[object]) -> GraphContent:
        return GraphContent(attributes=items[1])  # type: ignore[arg-type]

    def attr_stmt(self, items: list[object]) -> GraphContent:
        keyword, attributes = items
        kind = Entity.NODE if keyword.type == "NODE" else Entity.EDGE  # type: ignore[union-attr]
        return GraphContent(statements=(AttributeDirective(kind, attributes),))  # type: ignore[arg-type]

    def node_id(self, items: list[Identifier]) -> NodeId:
        if len(items) == 1:
            return NodeId(items[0])
        return NodeId(items[0], Port(*items[1:]))

    def node_ids(self, items: list[NodeId]) -> list[NodeId]:
        return list(items)

    def node_stmt(self, items: list[object]) -> GraphContent:
        ids, attributes = items
        attributes = attributes or {}
        # Ports only matter to edges; a node statement declares the node itself.
        return GraphContent(statements=tuple(Node(i.id, attributes) for i in ids))  # type: ignore

    def edge_stmt(self, items: list[object]) -> GraphContent:
        *endpoints, attributes = items
        return expand_edge_chain(endpoints, attributes or {})  # type: ignore[arg-type]

    def subgraph(self, items: list[object]) -> Subgraph:
        content = items[-1]
        name = items[1] if len(items) == 3 else None
        return Subgraph(name, content)  # type: ignore[arg-type]

    def body(self, items: list[GraphContent | Subgraph]) -> GraphContent:
        attributes: Attributes = {}
        statements: list[Statement] = []
        for item in items:
            if isinstance(item, Subgraph):
                statements.append(item)
            else:
                attributes.update(item.attributes)
                statements.extend(item.statements)
        return GraphContent(attributes, tuple(statements))

    def graph(self, items: list[object]) -> Graph:
        strict, kind, name, content = items
        return Graph(
            id=name,  # type: ignore[arg-type]
            strict=strict is not None,
            directed=kind.type == "DIGRAPH",  # type: ignore[union-attr]
            content=content,  # type: ignore[arg-type]
        )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def get_parser() -> Lark:
    """Build (once) the LALR parser for both DOT and DSS sources."""
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        lexer="contextual",
        regex=True,
        start=["graph", "stylesheet"],
        maybe_placeholders=True,
        lexer_callbacks={"MARKUP": markup_token},
    )


def _describe(token: Token) -> str:
    if token.type in ("MARKUP", "$END"):
        return _TERMINAL_LABELS[token.type]
    return repr(str(token))


def _expected_labels(names: Iterable[str] | None) -> tuple[str, ...]:
    # Ignored terminals (whitespace, comments) have no label and are left out.
    return tuple(sorted({_TERMINAL_LABELS[name] for name in names or () if name in _TERMINAL_LABELS}))


def parse_tree(source: str, start: str):  # type: ignore[no-untyped-def]
    """Parse *source* from the *start* rule, converting lark errors to ParseError."""
    try:
        return get_parser().parse(source, start=start)
    except UnexpectedInput as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        if isinstance(e, UnexpectedCharacters):
            expected = _expected_labels(e.allowed)
            message = f"Unexpected character {e.char!r} at line {line}, column {column}"
        elif isinstance(e, UnexpectedToken):
            expected = _expected_labels(e.expected)
            message = f"Unexpected {_describe(e.token)} at line {line}, column {column}"
        else:
            expected = _expected_labels(getattr(e, "expected", None))
            message = f"Syntax error at line {line}, column {column}"
        if expected:
            message += "; expected " + ", ".join(expected)
        raise ParseError(message, line=line, column=column, expected=expected) from e


def parse_graph(source: str) -> Graph:
    """Parse a DOT source string into a Graph model."""
    tree = parse_tree(source, "graph")
    graph: Graph = DotTransformer().transform(tree)
    logger.debug(
        "Parsed %s with %d top-level statement(s)",
        "digraph" if graph.directed else "graph",
        len(graph.statements),
    )
    return graph
