"""Tests for the canonical DOT / DSS printer."""

import io

import pytest

from dotstyle import print_graph, print_stylesheet, write_graph, write_stylesheet
from dotstyle.model import (
    AttributeDirective,
    Edge,
    Entity,
    Graph,
    GraphContent,
    Node,
    NodeId,
    Port,
    Subgraph,
    Text,
    text_attributes,
)
from dotstyle.parser import parse_graph
from dotstyle.stylesheet import Selector, StyleRule, Stylesheet, parse_stylesheet

# ---------------------------------------------------------------------------
# Graphs
# ---------------------------------------------------------------------------


class TestPrintGraph:
    def test_empty_digraph(self) -> None:
        assert print_graph(Graph()) == "digraph {\n}\n"

    def test_strict_undirected_named(self) -> None:
        graph = Graph(id=Text("G"), strict=True, directed=False)
        assert print_graph(graph) == 'strict graph "G" {\n}\n'

    def test_full_graph(self) -> None:
        graph = parse_graph(
            """
            digraph G {
                rankdir=LR
                node [shape=box]
                a [label="x"]
                a -> b [color=red]
                subgraph s { c }
            }
            """
        )
        assert print_graph(graph) == (
            'digraph "G" {\n'
            '  graph ["rankdir"="LR"]\n'
            '  node ["shape"="box"]\n'
            '  "a" ["label"="x"]\n'
            '  "a" -> "b" ["color"="red"]\n'
            '  subgraph "s" {\n'
            '    "c"\n'
            "  }\n"
            "}\n"
        )

    def test_undirected_edges(self) -> None:
        graph = parse_graph("graph { a -- b }")
        assert print_graph(graph) == 'graph {\n  "a" -- "b"\n}\n'

    def test_anonymous_subgraph(self) -> None:
        graph = Graph(content=GraphContent(statements=(Subgraph(),)))
        assert print_graph(graph) == "digraph {\n  subgraph {\n  }\n}\n"

    def test_empty_directive_is_printed(self) -> None:
        graph = Graph(content=GraphContent(statements=(AttributeDirective(Entity.EDGE),)))
        assert print_graph(graph) == "digraph {\n  edge []\n}\n"

    def test_ports(self) -> None:
        edge = Edge(
            NodeId(Text("a"), Port(Text("p"), Text("n"))),
            NodeId(Text("b"), Port(Text("q"))),
        )
        graph = Graph(content=GraphContent(statements=(edge,)))
        assert print_graph(graph) == 'digraph {\n  "a":"p":"n" -> "b":"q"\n}\n'

    def test_quotes_are_escaped(self) -> None:
        graph = Graph(content=GraphContent(statements=(Node(Text('say "hi"')),)))
        assert print_graph(graph) == 'digraph {\n  "say \\"hi\\""\n}\n'

    def test_keywords_are_quoted(self) -> None:
        graph = Graph(content=GraphContent(statements=(Node(Text("node")),)))
        assert '"node"' in print_graph(graph)
        assert parse_graph(print_graph(graph)) == graph

    def test_custom_indent(self) -> None:
        graph = Graph(
            content=GraphContent(
                statements=(Subgraph(content=GraphContent(statements=(Node(Text("a")),))),)
            )
        )
        assert print_graph(graph, indent=4) == (
            'digraph {\n    subgraph {\n        "a"\n    }\n}\n'
        )

    def test_write_graph_to_stream(self) -> None:
        out = io.StringIO()
        write_graph(Graph(content=GraphContent(text_attributes({"a": "b"}))), out)
        assert out.getvalue() == 'digraph {\n  graph ["a"="b"]\n}\n'

    def test_unknown_statement_is_a_type_error(self) -> None:
        graph = Graph(content=GraphContent(statements=(42,)))  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            print_graph(graph)

    def test_output_parses_back(self) -> None:
        source = """
        strict digraph "g" {
            graph [label=<<b>Title</b>>]
            node [shape=box]
            a, b -> c:p [style=dashed]
            subgraph cluster { color=blue; d [class="x,y"] }
            "with \\"quotes\\""
        }
        """
        graph = parse_graph(source)
        assert parse_graph(print_graph(graph)) == graph


# ---------------------------------------------------------------------------
# Stylesheets
# ---------------------------------------------------------------------------


class TestPrintStylesheet:
    def test_empty(self) -> None:
        assert print_stylesheet(Stylesheet.EMPTY) == ""

    def test_rule(self) -> None:
        sheet = parse_stylesheet("node { color: red; shape: box; }")
        assert print_stylesheet(sheet) == 'node {\n  "color": "red";\n  "shape": "box";\n}\n'

    def test_classes_are_sorted(self) -> None:
        sheet = Stylesheet(
            (StyleRule(Selector(Entity.EDGE, frozenset({"b", "a"})), text_attributes({"x": "y"})),)
        )
        assert print_stylesheet(sheet) == 'edge.a.b {\n  "x": "y";\n}\n'

    def test_empty_rules_are_omitted(self) -> None:
        sheet = parse_stylesheet("node {} graph { a: b; }")
        assert print_stylesheet(sheet) == 'graph {\n  "a": "b";\n}\n'

    def test_class_selectors_are_printed_per_entity(self) -> None:
        sheet = parse_stylesheet(".x { a: b; }")
        assert print_stylesheet(sheet) == (
            'node.x {\n  "a": "b";\n}\n'
            'edge.x {\n  "a": "b";\n}\n'
            'graph.x {\n  "a": "b";\n}\n'
        )

    def test_write_stylesheet_to_stream(self) -> None:
        out = io.StringIO()
        write_stylesheet(parse_stylesheet("node { a: b; }"), out, indent=4)
        assert out.getvalue() == 'node {\n    "a": "b";\n}\n'

    def test_output_parses_back(self) -> None:
        sheet = parse_stylesheet(
            'node.b.a { "font name": Helvetica; label: <<i>x</i>>; } edge { penwidth: 2; }'
        )
        assert parse_stylesheet(print_stylesheet(sheet)) == sheet
