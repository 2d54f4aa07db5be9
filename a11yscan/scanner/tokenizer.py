"""Lossy single-pass tokenizer for JSX-like source.

The tokenizer only recognises what class extraction needs: comments, opening
and closing tags, and bare ``cn()``/``clsx()``/``cva()`` calls. Everything else
is stepped over one character at a time, so every loop iteration advances the
cursor and truncated input always terminates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from .lexing import (
    extract_balanced_parens,
    find_unescaped,
    is_ident_char_before,
    skip_string,
    skip_whitespace,
    strip_template_expressions,
)
from .tags import read_tag_name, scan_tag_end

_BARE_CALL = re.compile(r"(cn|clsx|cva)\(")
_CLASS_HELPER = re.compile(r"(?:cn|clsx)\s*\(")
_CLASS_ATTRIBUTE = re.compile(r"className\s*=\s*")
_QUOTES = frozenset("'\"`")


@dataclass(frozen=True)
class Comment:
    body: str
    offset: int


@dataclass(frozen=True)
class OpenTag:
    name: str
    raw: str
    offset: int
    is_self_closing: bool


@dataclass(frozen=True)
class CloseTag:
    name: str
    offset: int


@dataclass(frozen=True)
class ClassCall:
    """A bare ``cn(...)``, ``clsx(...)`` or ``cva(...)`` call outside any tag."""

    callee: str
    body: str
    offset: int


Token = Union[Comment, OpenTag, CloseTag, ClassCall]

# Scan modes. Children of an open element are JSX text, where quotes and
# slashes are literal characters; a brace switches back to code.
_TEXT = "text"
_CODE = "code"


def _read_tag(text: str, index: int, in_text: bool) -> Tuple[Optional[Token], int]:
    """Read the tag starting at ``text[index] == '<'``.

    Returns the token (or ``None`` when this ``<`` is not a tag) and the
    position to resume from, which is always past ``index``.
    """
    if text[index + 1] == "/":
        name, end = read_tag_name(text, index + 2)
        if not name:
            return None, index + 2
        return CloseTag(name=name, offset=index), end

    # In code, `i<n` and `Array<string>` are comparisons and generics, not markup.
    if not text[index + 1].isalpha() or (not in_text and is_ident_char_before(text, index)):
        return None, index + 1

    name, name_end = read_tag_name(text, index + 1)
    if not in_text and text.startswith(",", name_end):
        return None, name_end  # `<T,>(value) => ...`
    tag_end, self_closing = scan_tag_end(text, name_end)
    if tag_end == -1:
        return None, name_end
    token = OpenTag(
        name=name,
        raw=text[index:tag_end],
        offset=index,
        is_self_closing=self_closing,
    )
    return token, tag_end


def _close_element(modes: List[Tuple[str, str]], name: str) -> None:
    """Leave the nearest open element called ``name`` within the current expression."""
    for position in range(len(modes) - 1, -1, -1):
        kind, open_name = modes[position]
        if kind == _CODE:
            return
        if open_name == name:
            del modes[position:]
            return


def _close_brace(modes: List[Tuple[str, str]]) -> None:
    # A `}` inside element text means an element was misread (`<T extends U>`);
    # with no expression left to close, fall back to plain code.
    for position in range(len(modes) - 1, -1, -1):
        if modes[position][0] == _CODE:
            del modes[position:]
            return
    modes.clear()


def iter_tokens(text: str) -> Iterator[Token]:
    """Yield scan events in source order.

    Outside element text, string literals are stepped over whole, so markup,
    comment openers and helper calls quoted in ``"..."`` produce nothing.
    """
    index = 0
    length = len(text)
    modes: List[Tuple[str, str]] = []
    while index < length:
        char = text[index]
        in_text = bool(modes) and modes[-1][0] == _TEXT

        if char == "<" and index + 1 < length:
            if text.startswith("</>", index):
                _close_element(modes, "")
                index += 3
                continue
            if text[index + 1] == ">" and (in_text or not is_ident_char_before(text, index)):
                modes.append((_TEXT, ""))
                index += 2
                continue
            token, index = _read_tag(text, index, in_text)
            if isinstance(token, OpenTag) and not token.is_self_closing:
                modes.append((_TEXT, token.name))
            elif isinstance(token, CloseTag):
                _close_element(modes, token.name)
            if token is not None:
                yield token
            continue

        if char == "{":
            modes.append((_CODE, ""))
            index += 1
            continue
        if char == "}":
            _close_brace(modes)
            index += 1
            continue
        if in_text:
            index += 1
            continue

        if char in _QUOTES:
            index = skip_string(text, index)
            continue

        if char == "/" and index + 1 < length:
            following = text[index + 1]
            if following == "/":
                end = text.find("\n", index + 2)
                if end == -1:
                    end = length
                yield Comment(body=text[index + 2 : end], offset=index)
                index = end
                continue
            if following == "*":
                end = text.find("*/", index + 2)
                if end == -1:
                    index += 2
                    continue
                yield Comment(body=text[index + 2 : end], offset=index)
                index = end + 2
                continue

        elif char == "c" and not is_ident_char_before(text, index):
            match = _BARE_CALL.match(text, index)
            if match is not None:
                parens = extract_balanced_parens(text, match.end() - 1)
                if parens is None:
                    index = match.end()
                    continue
                body, close = parens
                yield ClassCall(callee=match.group(1), body=body, offset=index)
                index = close + 1
                continue

        index += 1


def _read_class_value(raw_tag: str, start: int) -> Optional[Tuple[str, int]]:
    """Read a ``className`` value beginning at ``start``.

    Returns ``(content, index_after_value)`` or ``None`` for forms that carry
    no statically known classes (``className={variable}``) or are unterminated.
    """
    if start >= len(raw_tag):
        return None
    char = raw_tag[start]
    if char in "\"'":
        end = find_unescaped(raw_tag, char, start + 1)
        if end == -1:
            return None
        return raw_tag[start + 1 : end], end + 1
    if char != "{":
        return None

    inner = skip_whitespace(raw_tag, start + 1)
    if inner >= len(raw_tag):
        return None
    quote = raw_tag[inner]
    if quote in _QUOTES:
        end = find_unescaped(raw_tag, quote, inner + 1)
        if end == -1:
            return None
        content = raw_tag[inner + 1 : end]
        if quote == "`":
            content = strip_template_expressions(content)
        return content, end + 1

    helper = _CLASS_HELPER.match(raw_tag, inner)
    if helper is None:
        return None
    parens = extract_balanced_parens(raw_tag, helper.end() - 1)
    if parens is None:
        return None
    body, close = parens
    return body, close + 1


def iter_class_attributes(raw_tag: str) -> Iterator[Tuple[str, int]]:
    """Yield ``(content, offset)`` for each ``className`` attribute of a raw tag.

    Only attributes at brace depth zero count, so a ``className`` inside a
    nested expression or string does not.
    """
    index = 0
    depth = 0
    length = len(raw_tag)
    while index < length:
        char = raw_tag[index]
        if char in _QUOTES:
            index = skip_string(raw_tag, index)
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            if depth > 0:
                depth -= 1
        elif depth == 0 and char == "c" and not is_ident_char_before(raw_tag, index):
            match = _CLASS_ATTRIBUTE.match(raw_tag, index)
            if match is not None:
                value = _read_class_value(raw_tag, match.end())
                if value is None:
                    index = match.end()
                    continue
                content, resume = value
                yield content, index
                index = resume
                continue
        index += 1


__all__ = [
    "ClassCall",
    "CloseTag",
    "Comment",
    "OpenTag",
    "Token",
    "iter_class_attributes",
    "iter_tokens",
]
