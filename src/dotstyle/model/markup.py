"""Markup model: the element/text trees carried by ``<...>`` atoms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class MarkupText:
    """A run of character data inside a markup atom (never contains ``<`` or ``>``)."""

    text: str


@dataclass(frozen=True)
class MarkupElement:
    """A markup element such as ``<b>bold</b>`` or ``<br/>``.

    Attributes:
        name: The tag name.
        attributes: Tag attributes as ``(name, value)`` pairs, in source order.
        children: Nested elements and text runs, in source order.
    """

    name: str
    attributes: tuple[tuple[str, str], ...] = ()
    children: tuple[MarkupNode, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Markup element name must be a non-empty string")
        object.__setattr__(self, "attributes", tuple(tuple(a) for a in self.attributes))
        object.__setattr__(self, "children", tuple(self.children))


MarkupNode = Union[MarkupText, MarkupElement]


def normalize_children(children: tuple[MarkupNode, ...]) -> tuple[MarkupNode, ...]:
    """Drop empty text runs and merge adjacent ones, recursively.

    Two trees that only differ in how their character data is split print to
    the same text, so this is the form to compare them in.
    """
    result: list[MarkupNode] = []
    for child in children:
        if isinstance(child, MarkupText):
            if not child.text:
                continue
            if result and isinstance(result[-1], MarkupText):
                result[-1] = MarkupText(result[-1].text + child.text)
            else:
                result.append(child)
        elif isinstance(child, MarkupElement):
            result.append(
                MarkupElement(
                    child.name,
                    child.attributes,
                    normalize_children(child.children),
                )
            )
        else:
            raise TypeError(f"Unexpected markup node: {child!r}")
    return tuple(result)
