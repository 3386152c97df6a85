"""Stylesheet application transform: cascades stylesheet rules into a graph."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from dotstyle.model.graph import (
    AttributeDirective,
    Attributes,
    Edge,
    Entity,
    Graph,
    GraphContent,
    Node,
    Statement,
    Subgraph,
    extract_classes,
)
from dotstyle.stylesheet.model import StyleRule, Stylesheet

logger = logging.getLogger(__name__)


def _style_element(entity: Entity, attributes: Attributes, rules: Sequence[StyleRule]) -> Attributes:
    """Fold matching *rules* in order, then the element's own attributes on top."""
    classes = extract_classes(attributes)
    derived: Attributes = {}
    for rule in rules:
        if rule.selector.matches(entity, classes):
            derived.update(rule.attributes)
    # Attributes set on the element itself always win:
    # a[class=red color=yellow] stays yellow under node.red { color: red; }.
    derived.update(attributes)
    return derived


def _style_statement(statement: Statement, rules: Sequence[StyleRule]) -> Statement:
    if isinstance(statement, Node):
        return replace(statement, attributes=_style_element(Entity.NODE, statement.attributes, rules))
    if isinstance(statement, Edge):
        return replace(statement, attributes=_style_element(Entity.EDGE, statement.attributes, rules))
    if isinstance(statement, Subgraph):
        return replace(statement, content=_style_content(statement.content, rules))
    if isinstance(statement, AttributeDirective):
        return statement
    raise TypeError(f"Unexpected statement: {statement!r}")


def _style_content(content: GraphContent, rules: Sequence[StyleRule]) -> GraphContent:
    return GraphContent(
        attributes=_style_element(Entity.GRAPH, content.attributes, rules),
        statements=tuple(_style_statement(s, rules) for s in content.statements),
    )


def _general_content(rules: Sequence[StyleRule]) -> GraphContent:
    """Turn class-less rules into graph-wide defaults."""
    content = GraphContent.EMPTY
    for rule in rules:
        entity = rule.selector.entity
        if entity is Entity.GRAPH:
            content = content.with_attributes(rule.attributes)
        else:
            content = content.with_statement(AttributeDirective(entity, rule.attributes))
    return content


def apply_stylesheet(stylesheet: Stylesheet, graph: Graph) -> Graph:
    """Return a copy of *graph* with *stylesheet* cascaded into it.

    Rules are applied from the least to the most specific; rules of equal
    specificity keep their declaration order, so the last one declared wins.
    Class-less rules become ``node [...]`` / ``edge [...]`` defaults and root
    graph attributes, declared ahead of everything else so that they reach
    nested subgraphs too. Rules with classes are resolved per element. Values
    set explicitly on an element are never overridden.
    """
    # Empty rules must not take part in ordering.
    rules = sorted(
        (rule for rule in stylesheet.rules if rule.attributes),
        key=lambda r: r.selector.specificity,
    )
    general = [r for r in rules if not r.selector.classes]
    specific = [r for r in rules if r.selector.classes]
    logger.debug(
        "Applying %d rule(s): %d general, %d specific",
        len(rules),
        len(general),
        len(specific),
    )

    general_content = _general_content(general)
    specific_content = _style_content(graph.content, specific)
    # General statements go first so they apply to everything after them;
    # styled attributes override general graph attributes.
    return replace(graph, content=general_content.merge(specific_content))


class StylesheetTransform:
    """Apply a parsed :class:`Stylesheet` to graphs.

    Selector matching:
        - ``node`` / ``edge`` / ``graph`` match every element of that kind.
        - ``node.a.b`` matches nodes whose ``class`` attribute lists both
          ``a`` and ``b`` (comma separated).

    See :func:`apply_stylesheet` for the cascade order.
    """

    def __init__(self, stylesheet: Stylesheet) -> None:
        self.stylesheet = stylesheet

    def apply(self, graph: Graph) -> Graph:
        if not self.stylesheet.rules:
            return graph
        return apply_stylesheet(self.stylesheet, graph)
