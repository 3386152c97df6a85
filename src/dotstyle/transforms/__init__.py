"""Graph-to-graph transforms.

A transform is any object with an ``apply(graph) -> Graph`` method that
returns a new graph and leaves its input untouched.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from dotstyle.model.graph import Graph
from dotstyle.transforms.stylesheet import StylesheetTransform, apply_stylesheet

__all__ = ["Transform", "StylesheetTransform", "apply_stylesheet", "apply_transforms"]


class Transform(Protocol):
    def apply(self, graph: Graph) -> Graph: ...


def apply_transforms(graph: Graph, transforms: Iterable[Transform]) -> Graph:
    """Apply each of *transforms* to *graph*, in order."""
    for t in transforms:
        graph = t.apply(graph)
    return graph
