"""Parser for DSS, the CSS-like stylesheet language for DOT graphs.

Syntax example:
    node { shape: box; }
    node.important, edge.important { color: red; }
    .muted { fontcolor: gray; }

A selector without an entity keyword (``.muted``) matches any kind of
element, so it expands to one selector per entity.
"""

from __future__ import annotations

import logging

from lark import Token

from dotstyle.model.graph import Entity, Identifier
from dotstyle.parser.transformer import DotTransformer, parse_tree
from dotstyle.stylesheet.model import Selector, StyleRule, Stylesheet

__all__ = ["parse_stylesheet"]

logger = logging.getLogger(__name__)

_ENTITIES = {"NODE": Entity.NODE, "EDGE": Entity.EDGE, "GRAPH": Entity.GRAPH}


class StylesheetTransformer(DotTransformer):
    """Transform a stylesheet parse tree; atoms are handled as in DOT."""

    def entity_selector(self, items: list[Token]) -> list[Selector]:
        keyword, *classes = items
        return [Selector(_ENTITIES[keyword.type], frozenset(c.value[1:] for c in classes))]

    def class_selector(self, items: list[Token]) -> list[Selector]:
        classes = frozenset(c.value[1:] for c in items)
        return [Selector(entity, classes) for entity in (Entity.NODE, Entity.EDGE, Entity.GRAPH)]

    def declaration(self, items: list[Identifier]) -> tuple[Identifier, Identifier]:
        return (items[0], items[1])

    def rule(self, items: list[object]) -> list[StyleRule]:
        selectors = [s for group in items if isinstance(group, list) for s in group]
        # Later declarations of the same key win.
        attributes = dict(item for item in items if isinstance(item, tuple))
        return [StyleRule(selector, attributes) for selector in selectors]

    def stylesheet(self, items: list[list[StyleRule]]) -> Stylesheet:
        return Stylesheet(tuple(rule for group in items for rule in group))


def parse_stylesheet(source: str) -> Stylesheet:
    """Parse a DSS source string into a Stylesheet.

    Rules keep their source order; a rule with several selectors becomes one
    StyleRule per selector. Raises :class:`~dotstyle.parser.ParseError` on
    malformed input.
    """
    tree = parse_tree(source, "stylesheet")
    stylesheet: Stylesheet = StylesheetTransformer().transform(tree)
    logger.debug("Parsed stylesheet with %d rule(s)", len(stylesheet.rules))
    return stylesheet
