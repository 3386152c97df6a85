"""Tests for DOT / DSS lexical rules: keywords, atoms, comments, positions."""

import pytest

from dotstyle.model import KEYWORDS, Edge, Entity, Node, NodeId, Text
from dotstyle.parser import ParseError, parse_graph
from dotstyle.stylesheet import Selector, parse_stylesheet


def _names(body: str) -> list[str]:
    """Node names declared by a digraph body."""
    return [
        statement.id.value
        for statement in parse_graph(f"digraph {{ {body} }}").statements
        if isinstance(statement, Node)
    ]


def _label(value: str) -> Text:
    (node,) = parse_graph(f"digraph {{ a [label={value}] }}").statements
    return node.attributes[Text("label")]


# ---------------------------------------------------------------------------
# Keywords & identifiers
# ---------------------------------------------------------------------------


class TestKeywords:
    @pytest.mark.parametrize("keyword", sorted(KEYWORDS))
    def test_keywords_are_not_node_names(self, keyword: str) -> None:
        with pytest.raises(ParseError):
            parse_graph(f"digraph {{ a -> {keyword} }}")

    def test_keywords_are_case_sensitive(self) -> None:
        assert _names("Node EDGE Graph") == ["Node", "EDGE", "Graph"]

    def test_keyword_prefixes_are_identifiers(self) -> None:
        assert _names("nodes edge_1 graph2 subgraphs") == ["nodes", "edge_1", "graph2", "subgraphs"]

    def test_quoted_keyword_is_a_name(self) -> None:
        assert _names('"node"') == ["node"]

    def test_strict_is_a_graph_name(self) -> None:
        assert parse_graph("digraph strict {}").id == Text("strict")

    def test_strict_is_an_edge_endpoint(self) -> None:
        assert parse_graph("digraph { a -> strict }").statements == (
            Edge(NodeId(Text("a")), NodeId(Text("strict"))),
        )

    def test_strict_only_before_the_graph_keyword(self) -> None:
        with pytest.raises(ParseError):
            parse_graph("digraph strict strict {}")

    def test_identifier_characters(self) -> None:
        assert _names("_private node_1 café") == ["_private", "node_1", "café"]


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


class TestNumbers:
    @pytest.mark.parametrize("source", ["42", "-1", "3.14", "-0.5", ".5", "-.5"])
    def test_number_forms(self, source: str) -> None:
        assert _label(source) == Text(source)

    def test_number_before_edge_operator(self) -> None:
        assert parse_graph("digraph { 1->2 }").statements == (
            Edge(NodeId(Text("1")), NodeId(Text("2"))),
        )

    def test_undirected_operator_between_numbers(self) -> None:
        assert parse_graph("graph { 1--2 }").statements == (
            Edge(NodeId(Text("1")), NodeId(Text("2"))),
        )


# ---------------------------------------------------------------------------
# Quoted strings
# ---------------------------------------------------------------------------


class TestQuotedStrings:
    def test_plain(self) -> None:
        assert _label('"hello world"') == Text("hello world")

    def test_escaped_quote(self) -> None:
        assert _label(r'"say \"hi\""') == Text('say "hi"')

    def test_line_continuation_is_removed(self) -> None:
        assert _label('"multi\\\nline"') == Text("multiline")

    def test_other_escapes_are_kept_verbatim(self) -> None:
        assert _label(r'"left\lright\n"') == Text(r"left\lright\n")

    def test_escapes_in_concatenated_parts(self) -> None:
        assert _label(r'"a\"" + "b"') == Text('a"b')

    def test_comment_markers_inside_quotes(self) -> None:
        assert _label('"// not /* a comment"') == Text("// not /* a comment")

    def test_unterminated(self) -> None:
        with pytest.raises(ParseError, match="Unexpected character") as exc_info:
            parse_graph('digraph { a "abc }')
        assert exc_info.value.line == 1
        assert exc_info.value.column == 13


# ---------------------------------------------------------------------------
# Comments & whitespace
# ---------------------------------------------------------------------------


class TestIgnored:
    def test_line_comment(self) -> None:
        assert _names("a // comment -> b\nc") == ["a", "c"]

    def test_line_comment_at_end_of_input(self) -> None:
        assert parse_graph("digraph { a } // trailing").statements == (Node(Text("a")),)

    def test_block_comment(self) -> None:
        assert _names("a /* b -> c\n more */ d") == ["a", "d"]

    def test_unterminated_block_comment(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_graph("digraph { a /* never closed")
        assert exc_info.value.column == 13

    def test_comment_only_stylesheet(self) -> None:
        assert parse_stylesheet("  \n\t // only a comment\n/* and this */").rules == ()


# ---------------------------------------------------------------------------
# Stylesheet tokens
# ---------------------------------------------------------------------------


class TestClassNames:
    def test_class_names_follow_the_entity(self) -> None:
        (rule,) = parse_stylesheet("node.red.bold { x: y }").rules
        assert rule.selector == Selector(Entity.NODE, frozenset({"red", "bold"}))

    def test_dangling_dot(self) -> None:
        with pytest.raises(ParseError):
            parse_stylesheet("node. { }")

    def test_class_name_cannot_start_with_a_digit(self) -> None:
        with pytest.raises(ParseError):
            parse_stylesheet(".1st { x: y }")


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------


class TestPositions:
    def test_unexpected_character(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_graph("digraph {\n  a -> $ }")
        error = exc_info.value
        assert (error.line, error.column) == (2, 8)
        assert "identifier" in error.expected

    def test_position_after_multiline_comment(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_graph("digraph { /* one\ntwo */ $ }")
        assert (exc_info.value.line, exc_info.value.column) == (2, 8)

    def test_ignored_terminals_are_not_listed_as_expected(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_graph("digraph { a -> $ }")
        assert all("COMMENT" not in label and label != "WS" for label in exc_info.value.expected)
