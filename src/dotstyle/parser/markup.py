"""Element trees for ``<...>`` markup atoms.

The MARKUP terminal only checks that angle brackets balance. The callback
here turns the matched text into :class:`~dotstyle.model.Markup`, checking
tag names, tag attributes and closing tags as it goes.
"""

from __future__ import annotations

import re

from lark import Token

from dotstyle.model.graph import Markup
from dotstyle.model.markup import MarkupElement, MarkupNode, MarkupText
from dotstyle.parser.errors import ParseError

_TAG_NAME_RE = re.compile(r"[A-Za-z_\u0080-\uffff][A-Za-z0-9_\u0080-\uffff]*")
_TEXT_RUN_RE = re.compile(r"[^<>]+")
_TAG_ATTRIBUTE_RE = re.compile(
    r"""\s*([A-Za-z_][A-Za-z0-9_:.-]*)\s*=\s*(?:"([^"]*)"|'([^']*)')"""
)
_TAG_END_RE = re.compile(r"\s*(/?)>")
_CLOSING_TAG_RE = re.compile(r"</([^\s>]*)\s*>")


class _MarkupReader:
    """Reads the element tree out of one MARKUP token."""

    def __init__(self, token: Token) -> None:
        self.token = token
        self.text = str(token)

    def error(self, message: str, expected: list[str], offset: int) -> ParseError:
        newlines = self.text.count("\n", 0, offset)
        if newlines:
            line = self.token.line + newlines
            column = offset - self.text.rfind("\n", 0, offset)
        else:
            line = self.token.line
            column = self.token.column + offset
        return ParseError(
            f"{message} at line {line}, column {column}",
            line=line,
            column=column,
            expected=tuple(expected),
        )

    def read(self) -> Markup:
        _, children = self._children(1, tag=None)
        return Markup(children)

    def _children(self, i: int, tag: str | None) -> tuple[int, tuple[MarkupNode, ...]]:
        """Read children up to ``</tag`` (or the atom's closing ``>`` when *tag* is None).

        Returns the offset of that terminator and the children read.
        """
        text = self.text
        closing = f"'</{tag}>'" if tag else "'>'"
        children: list[MarkupNode] = []
        while True:
            if text.startswith("</", i):
                if tag is None:
                    raise self.error("Unexpected closing tag", [closing], i)
                return i, tuple(children)
            char = text[i]
            if char == ">":
                if tag is not None:
                    raise self.error(f"Unexpected '>' inside <{tag}>", [closing], i)
                return i, tuple(children)
            if char == "<":
                i, element = self._element(i)
                children.append(element)
            else:
                run = _TEXT_RUN_RE.match(text, i)
                assert run is not None
                children.append(MarkupText(run.group()))
                i = run.end()

    def _element(self, i: int) -> tuple[int, MarkupElement]:
        text = self.text
        name_match = _TAG_NAME_RE.match(text, i + 1)
        if name_match is None:
            raise self.error("Expected a tag name", ["tag name"], i + 1)
        name = name_match.group()
        i = name_match.end()

        attributes: list[tuple[str, str]] = []
        attribute = _TAG_ATTRIBUTE_RE.match(text, i)
        while attribute is not None:
            value = attribute.group(2) if attribute.group(2) is not None else attribute.group(3)
            attributes.append((attribute.group(1), value))
            i = attribute.end()
            attribute = _TAG_ATTRIBUTE_RE.match(text, i)

        tag_end = _TAG_END_RE.match(text, i)
        if tag_end is None:
            raise self.error(f"Malformed tag <{name}>", ["'>'", "'/>'"], i)
        i = tag_end.end()
        if tag_end.group(1):
            return i, MarkupElement(name, tuple(attributes))

        i, children = self._children(i, tag=name)
        closing = _CLOSING_TAG_RE.match(text, i)
        if closing is None or closing.group(1) != name:
            raise self.error(f"Mismatched closing tag for <{name}>", [f"'</{name}>'"], i)
        return closing.end(), MarkupElement(name, tuple(attributes), children)


def markup_token(token: Token) -> Token:
    """Lexer callback: swap a MARKUP token's text for its element tree."""
    return token.update(value=_MarkupReader(token).read())
