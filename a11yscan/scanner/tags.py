"""Readers that pull attributes out of a raw opening-tag string."""

from __future__ import annotations

import re
from typing import Optional, Tuple

from ..classes import is_bg_color, is_text_color, parse_opacity_class
from ..models import InlineStyles
from .lexing import skip_string

# A class token begins at the tag start or after whitespace, a quote, "(", "," or "{".
_TOKEN_BOUNDARY = r"(?<![^\s\"'`(,{])"
_TOKEN_BODY = r"[^\s\"'`),}]+"
_BG_TOKEN = re.compile(_TOKEN_BOUNDARY + r"(bg-" + _TOKEN_BODY + r")")
_OPACITY_TOKEN = re.compile(_TOKEN_BOUNDARY + r"(opacity-" + _TOKEN_BODY + r")")
_TEXT_TOKEN = re.compile(_TOKEN_BOUNDARY + r"(text-" + _TOKEN_BODY + r")")
# Keywords that defer to the parent colour rather than setting one.
_TEXT_DEFERRING = frozenset({"text-current", "text-inherit", "text-transparent"})

_STYLE_OPEN = re.compile(r"\bstyle\s*=\s*\{\{")
_STYLE_COLOR = re.compile(r"(?<![\w-])color\s*:\s*(['\"])([^'\"]+)\1")
_STYLE_BACKGROUND = re.compile(r"(?<![\w-])backgroundColor\s*:\s*(['\"])([^'\"]+)\1")

_ARIA_DISABLED_TRUE = re.compile(
    r"\baria-disabled\s*=\s*(?:\"true\"|'true'|\{\s*true\s*\}|\{\s*[\"']true[\"']\s*\})"
)
_DISABLED_ATTR = re.compile(r"(?<![\w-])disabled(?=[\s/>=]|$)(\s*=\s*\{\s*false\s*\})?")

_QUOTES = frozenset("'\"`")


def is_tag_name_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char in ".-_")


def read_tag_name(text: str, start: int) -> Tuple[str, int]:
    """Read a tag name (``motion.div``, ``Card``, ``my-element``) starting at ``start``."""
    end = start
    length = len(text)
    while end < length and is_tag_name_char(text[end]):
        end += 1
    return text[start:end], end


def scan_tag_end(text: str, start: int) -> Tuple[int, bool]:
    """Find the end of the opening tag whose attributes begin at ``start``.

    Braces are depth-tracked and string contents skipped, so neither a ``>``
    inside ``{() => x}`` nor a ``/`` inside ``href="/a/b"`` ends the tag.
    Returns ``(index_after_tag, is_self_closing)``; an unterminated tag yields
    ``(-1, False)``.
    """
    index = start
    depth = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char in _QUOTES:
            index = skip_string(text, index)
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            if depth > 0:
                depth -= 1
        elif depth == 0:
            if char == "/" and index + 1 < length and text[index + 1] == ">":
                return index + 2, True
            if char == ">":
                return index + 1, False
        index += 1
    return -1, False


def find_explicit_bg(raw_tag: str) -> Optional[str]:
    """Return the first unprefixed background colour class in a tag, if any."""
    for match in _BG_TOKEN.finditer(raw_tag):
        cls = match.group(1)
        if is_bg_color(cls):
            return cls
    return None


def find_text_color(raw_tag: str) -> Optional[str]:
    """Return the first unprefixed text colour class in a tag.

    Descendants inherit it as ``currentColor``.
    """
    for match in _TEXT_TOKEN.finditer(raw_tag):
        cls = match.group(1)
        if cls not in _TEXT_DEFERRING and is_text_color(cls):
            return cls
    return None


def find_opacity(raw_tag: str) -> Optional[float]:
    """Return the value of the first unprefixed ``opacity-*`` utility in a tag."""
    for match in _OPACITY_TOKEN.finditer(raw_tag):
        value = parse_opacity_class(match.group(1))
        if value is not None:
            return value
    return None


def _style_body(raw_tag: str) -> Optional[str]:
    match = _STYLE_OPEN.search(raw_tag)
    if match is None:
        return None
    body_start = match.end()
    depth = 2
    index = body_start
    length = len(raw_tag)
    while index < length:
        char = raw_tag[index]
        if char in _QUOTES:
            index = skip_string(raw_tag, index)
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 1:
                return raw_tag[body_start:index]
        index += 1
    return None


def extract_inline_styles(raw_tag: str) -> Optional[InlineStyles]:
    """Pull literal ``color`` / ``backgroundColor`` values out of ``style={{ ... }}``."""
    body = _style_body(raw_tag)
    if body is None:
        return None
    color_match = _STYLE_COLOR.search(body)
    background_match = _STYLE_BACKGROUND.search(body)
    color = color_match.group(2) if color_match else None
    background = background_match.group(2) if background_match else None
    if color is None and background is None:
        return None
    return InlineStyles(color=color, background_color=background)


def is_disabled_tag(raw_tag: str) -> bool:
    """Detect ``disabled``, ``disabled={expr}`` and ``aria-disabled="true"``.

    ``disabled={false}`` and ``aria-disabled="false"`` do not count.
    """
    if _ARIA_DISABLED_TRUE.search(raw_tag):
        return True
    for match in _DISABLED_ATTR.finditer(raw_tag):
        if match.group(1) is None:
            return True
    return False


def has_disabled_variant(content: str) -> bool:
    """True when a class body styles a disabled state (``disabled:opacity-50``)."""
    return any(token.startswith("disabled:") for token in re.split(r"[\s\"'`,]+", content))


__all__ = [
    "extract_inline_styles",
    "find_explicit_bg",
    "find_opacity",
    "find_text_color",
    "has_disabled_variant",
    "is_disabled_tag",
    "read_tag_name",
    "scan_tag_end",
]
