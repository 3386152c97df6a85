"""dotstyle model layer -- public type re-exports."""

from dotstyle.model.graph import (
    KEYWORDS,
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
    extract_classes,
    text_attributes,
)
from dotstyle.model.markup import MarkupElement, MarkupNode, MarkupText, normalize_children

__all__ = [
    # identifiers
    "Text",
    "Markup",
    "Identifier",
    "Attributes",
    "text_attributes",
    "KEYWORDS",
    # markup
    "MarkupText",
    "MarkupElement",
    "MarkupNode",
    "normalize_children",
    # node ids
    "Port",
    "NodeId",
    # statements
    "Entity",
    "AttributeDirective",
    "Node",
    "Edge",
    "Subgraph",
    "Statement",
    # graph
    "GraphContent",
    "Graph",
    "extract_classes",
]
