"""Stylesheet model: Selector, StyleRule, and Stylesheet dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterable

from dotstyle.model.graph import Attributes, Entity


@dataclass(frozen=True)
class Selector:
    """Selects every element of one entity kind carrying a set of classes.

    Specificity is the number of required classes: ``node`` is 0,
    ``node.a.b`` is 2.
    """

    entity: Entity
    classes: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "classes", frozenset(self.classes))

    @classmethod
    def general(cls, entity: Entity) -> Selector:
        return cls(entity)

    @property
    def specificity(self) -> int:
        return len(self.classes)

    def matches(self, entity: Entity, classes: Iterable[str]) -> bool:
        return self.entity is entity and self.classes.issubset(classes)


@dataclass(frozen=True)
class StyleRule:
    """A single rule pairing a selector with the attributes it sets."""

    selector: Selector
    attributes: Attributes = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", dict(self.attributes))


@dataclass(frozen=True)
class Stylesheet:
    """Rules in declaration order."""

    rules: tuple[StyleRule, ...] = ()

    EMPTY: ClassVar[Stylesheet]
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))


Stylesheet.EMPTY = Stylesheet()
