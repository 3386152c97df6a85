"""Canonical DOT and DSS output.

The output is meant for tools rather than people: every atom is quoted,
whether or not it needs to be, and statements never carry ``;``. Whatever
the printer emits parses back to an equal tree.
"""

from __future__ import annotations

import io
from typing import TextIO

from dotstyle.model.graph import (
    AttributeDirective,
    Attributes,
    Edge,
    Graph,
    GraphContent,
    Identifier,
    Markup,
    Node,
    NodeId,
    Statement,
    Subgraph,
    Text,
)
from dotstyle.model.markup import MarkupElement, MarkupNode, MarkupText
from dotstyle.stylesheet.model import Selector, Stylesheet

DEFAULT_INDENT = 2


# ---------------------------------------------------------------------------
# Atoms
# ---------------------------------------------------------------------------


def _tag_value(value: str) -> str:
    quote = "'" if '"' in value else '"'
    return f"{quote}{value}{quote}"


def format_markup_node(node: MarkupNode) -> str:
    if isinstance(node, MarkupText):
        return node.text.replace("<", "&lt;").replace(">", "&gt;")
    if isinstance(node, MarkupElement):
        attributes = "".join(f" {name}={_tag_value(value)}" for name, value in node.attributes)
        if not node.children:
            return f"<{node.name}{attributes}/>"
        content = "".join(format_markup_node(child) for child in node.children)
        return f"<{node.name}{attributes}>{content}</{node.name}>"
    raise TypeError(f"Unexpected markup node: {node!r}")


def format_atom(identifier: Identifier) -> str:
    """Quote text atoms (escaping ``"``) and re-emit markup atoms."""
    if isinstance(identifier, Text):
        return '"' + identifier.value.replace('"', '\\"') + '"'
    if isinstance(identifier, Markup):
        return "<" + "".join(format_markup_node(child) for child in identifier.children) + ">"
    raise TypeError(f"Unexpected identifier: {identifier!r}")


def format_attributes(attributes: Attributes) -> str:
    pairs = " ".join(f"{format_atom(k)}={format_atom(v)}" for k, v in attributes.items())
    return f"[{pairs}]"


def format_node_id(node_id: NodeId) -> str:
    parts = [format_atom(node_id.id)]
    if node_id.port is not None:
        parts.append(format_atom(node_id.port.name))
        if node_id.port.point is not None:
            parts.append(format_atom(node_id.port.point))
    return ":".join(parts)


# ---------------------------------------------------------------------------
# Graphs
# ---------------------------------------------------------------------------


def _suffix(attributes: Attributes) -> str:
    return " " + format_attributes(attributes) if attributes else ""


def _write_statement(
    statement: Statement, directed: bool, depth: int, indent: int, out: TextIO
) -> None:
    pad = " " * (depth * indent)
    if isinstance(statement, AttributeDirective):
        out.write(f"{pad}{statement.kind.value} {format_attributes(statement.attributes)}\n")
    elif isinstance(statement, Node):
        out.write(f"{pad}{format_atom(statement.id)}{_suffix(statement.attributes)}\n")
    elif isinstance(statement, Edge):
        op = "->" if directed else "--"
        out.write(
            f"{pad}{format_node_id(statement.head)} {op} {format_node_id(statement.tail)}"
            f"{_suffix(statement.attributes)}\n"
        )
    elif isinstance(statement, Subgraph):
        out.write(f"{pad}subgraph ")
        if statement.id is not None:
            out.write(f"{format_atom(statement.id)} ")
        out.write("{\n")
        _write_content(statement.content, directed, depth + 1, indent, out)
        out.write(f"{pad}}}\n")
    else:
        raise TypeError(f"Unexpected statement: {statement!r}")


def _write_content(
    content: GraphContent, directed: bool, depth: int, indent: int, out: TextIO
) -> None:
    if content.attributes:
        out.write(f"{' ' * (depth * indent)}graph {format_attributes(content.attributes)}\n")
    for statement in content.statements:
        _write_statement(statement, directed, depth, indent, out)


def write_graph(graph: Graph, out: TextIO, indent: int = DEFAULT_INDENT) -> None:
    """Write the canonical DOT form of *graph* to *out*."""
    if graph.strict:
        out.write("strict ")
    out.write("digraph " if graph.directed else "graph ")
    if graph.id is not None:
        out.write(f"{format_atom(graph.id)} ")
    out.write("{\n")
    _write_content(graph.content, graph.directed, 1, indent, out)
    out.write("}\n")


def print_graph(graph: Graph, indent: int = DEFAULT_INDENT) -> str:
    """Return the canonical DOT form of *graph*."""
    out = io.StringIO()
    write_graph(graph, out, indent)
    return out.getvalue()


# ---------------------------------------------------------------------------
# Stylesheets
# ---------------------------------------------------------------------------


def format_selector(selector: Selector) -> str:
    return selector.entity.value + "".join(f".{c}" for c in sorted(selector.classes))


def write_stylesheet(stylesheet: Stylesheet, out: TextIO, indent: int = DEFAULT_INDENT) -> None:
    """Write *stylesheet* to *out*, skipping rules that set nothing."""
    pad = " " * indent
    for rule in stylesheet.rules:
        if not rule.attributes:
            continue
        out.write(f"{format_selector(rule.selector)} {{\n")
        for key, value in rule.attributes.items():
            out.write(f"{pad}{format_atom(key)}: {format_atom(value)};\n")
        out.write("}\n")


def print_stylesheet(stylesheet: Stylesheet, indent: int = DEFAULT_INDENT) -> str:
    """Return the canonical DSS form of *stylesheet*."""
    out = io.StringIO()
    write_stylesheet(stylesheet, out, indent)
    return out.getvalue()
