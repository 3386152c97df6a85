"""dotstyle: DOT graphs styled with DSS, a CSS-like stylesheet language."""
from __future__ import annotations

from dotstyle.config import DotStyleConfig
from dotstyle.model import (
    AttributeDirective,
    Edge,
    Entity,
    Graph,
    GraphContent,
    Markup,
    MarkupElement,
    MarkupText,
    Node,
    NodeId,
    Port,
    Subgraph,
    Text,
)
from dotstyle.parser import ParseError, parse_graph
from dotstyle.printer import print_graph, print_stylesheet, write_graph, write_stylesheet
from dotstyle.stylesheet import Selector, StyleRule, Stylesheet, parse_stylesheet
from dotstyle.transforms import StylesheetTransform, apply_stylesheet

__version__ = "0.1.0"

apply = apply_stylesheet

__all__ = [
    # operations
    "parse_graph",
    "parse_stylesheet",
    "apply",
    "apply_stylesheet",
    "print_graph",
    "print_stylesheet",
    "write_graph",
    "write_stylesheet",
    "ParseError",
    "StylesheetTransform",
    "DotStyleConfig",
    # model
    "Text",
    "Markup",
    "MarkupText",
    "MarkupElement",
    "Port",
    "NodeId",
    "Entity",
    "AttributeDirective",
    "Node",
    "Edge",
    "Subgraph",
    "GraphContent",
    "Graph",
    "Selector",
    "StyleRule",
    "Stylesheet",
]
