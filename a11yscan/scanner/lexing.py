"""Lexical helpers shared by the scanner and the resolvers."""

from __future__ import annotations

import re
from bisect import bisect_right
from typing import List, Optional, Tuple

_TEMPLATE_EXPRESSION = re.compile(r"\$\{[^}]*\}")
_QUOTES = frozenset("'\"`")

DYNAMIC_PLACEHOLDER = "${...}"


class LineIndex:
    """Maps character offsets to 1-based line numbers."""

    def __init__(self, text: str) -> None:
        self._offsets: List[int] = [0]
        self._offsets.extend(match.end() for match in re.finditer("\n", text))

    def line_at(self, offset: int) -> int:
        return bisect_right(self._offsets, offset)

    def __len__(self) -> int:
        return len(self._offsets)


def is_ident_char_before(text: str, index: int) -> bool:
    """Return True when the character before ``index`` continues an identifier."""
    if index <= 0:
        return False
    prev = text[index - 1]
    return prev.isascii() and (prev.isalnum() or prev == "_")


def skip_whitespace(text: str, index: int) -> int:
    length = len(text)
    while index < length and text[index].isspace():
        index += 1
    return index


def find_unescaped(text: str, char: str, start: int) -> int:
    """Return the index of the next unescaped ``char`` at or after ``start``, or -1."""
    index = start
    length = len(text)
    while index < length:
        current = text[index]
        if current == "\\":
            index += 2
            continue
        if current == char:
            return index
        index += 1
    return -1


def skip_string(text: str, index: int) -> int:
    """Skip the quoted literal opening at ``index``.

    Returns the index just past the closing quote, or ``len(text)`` when the
    literal is unterminated.
    """
    end = find_unescaped(text, text[index], index + 1)
    if end == -1:
        return len(text)
    return end + 1


def extract_balanced_parens(text: str, open_pos: int) -> Optional[Tuple[str, int]]:
    """Return the body between ``text[open_pos] == '('`` and its matching ``)``.

    String and template literals are skipped so parentheses inside them do not
    count. Returns ``(content, close_index)`` or ``None`` when unbalanced.
    """
    if open_pos >= len(text) or text[open_pos] != "(":
        return None

    depth = 1
    index = open_pos + 1
    length = len(text)
    while index < length:
        char = text[index]
        if char in _QUOTES:
            index = skip_string(text, index)
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return text[open_pos + 1 : index], index
        index += 1
    return None


def strip_template_expressions(template: str) -> str:
    """Remove ``${...}`` interpolations without evaluating them.

    A standalone interpolation becomes a space. One glued to class text
    (``bg-${tone}``) becomes ``DYNAMIC_PLACEHOLDER`` so the token survives
    as a recognisably dynamic class.
    """

    def _replace(match: re.Match) -> str:
        start, end = match.span()
        glued_before = start > 0 and not template[start - 1].isspace()
        glued_after = end < len(template) and not template[end].isspace()
        return DYNAMIC_PLACEHOLDER if glued_before or glued_after else " "

    return _TEMPLATE_EXPRESSION.sub(_replace, template)


def extract_string_literals(body: str) -> List[str]:
    """Collect whitespace-split class tokens from every string literal in ``body``.

    Used for ``cn()``/``clsx()`` argument lists where identifiers and
    conditionals sit between the literals.
    """
    tokens: List[str] = []
    index = 0
    length = len(body)
    while index < length:
        char = body[index]
        if char not in _QUOTES:
            index += 1
            continue
        end = find_unescaped(body, char, index + 1)
        if end == -1:
            break
        literal = body[index + 1 : end]
        if char == "`":
            literal = strip_template_expressions(literal)
        tokens.extend(literal.split())
        index = end + 1
    return tokens


def split_region_classes(content: str) -> List[str]:
    """Split a region body into class tokens.

    Bodies containing quotes come from ``cn()``/``clsx()``/``cva()`` calls and
    only their literals count; anything else is a plain class string.
    """
    if any(quote in content for quote in _QUOTES):
        return extract_string_literals(content)
    return content.split()


__all__ = [
    "DYNAMIC_PLACEHOLDER",
    "LineIndex",
    "extract_balanced_parens",
    "extract_string_literals",
    "find_unescaped",
    "is_ident_char_before",
    "skip_string",
    "skip_whitespace",
    "split_region_classes",
    "strip_template_expressions",
]
