"""Parsing of ``@a11y-context`` and ``a11y-ignore`` comment directives.

Annotations are pending until consumed: the scanner hands every comment body to
:class:`AnnotationParser`, and the next opening tag (or bare class call) takes
whatever is pending. Nothing is ever re-attached to a later element.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from ..models import ContextOverride

DEFAULT_IGNORE_REASON = "suppressed"

_SINGLE_DIRECTIVE = "@a11y-context"
_BLOCK_DIRECTIVE = "@a11y-context-block"
_IGNORE_DIRECTIVE = "a11y-ignore"
_DIRECTIVE_BOUNDARY = re.compile(r"(?:\s|$)")


@dataclass(frozen=True)
class Idle:
    """No annotation waiting for an element."""


@dataclass(frozen=True)
class PendingSingle:
    """An ``@a11y-context`` override waiting for the next class-bearing element."""

    override: ContextOverride


@dataclass(frozen=True)
class PendingBlock:
    """An ``@a11y-context-block`` override waiting for the next opening tag."""

    override: ContextOverride


AnnotationState = Union[Idle, PendingSingle, PendingBlock]

IDLE = Idle()


def parse_context_params(body: str) -> Optional[ContextOverride]:
    """Parse ``bg:<v> fg:<v> no-inherit`` tokens; ``None`` unless bg or fg is set."""
    bg: Optional[str] = None
    fg: Optional[str] = None
    no_inherit = False
    for token in body.split():
        if token.startswith("bg:"):
            bg = token[3:] or None
        elif token.startswith("fg:"):
            fg = token[3:] or None
        elif token == "no-inherit":
            no_inherit = True
    if bg is None and fg is None:
        return None
    return ContextOverride(bg=bg, fg=fg, no_inherit=no_inherit)


def parse_ignore_reason(rest: str) -> Optional[str]:
    """Return the suppression reason for the text following ``a11y-ignore``.

    ``None`` means the text was not a directive at all (``a11y-ignored`` etc.).
    """
    if rest.startswith(":"):
        return rest[1:].strip() or DEFAULT_IGNORE_REASON
    if not rest or rest[0].isspace():
        return DEFAULT_IGNORE_REASON
    return None


def _directive_lines(comment: str):
    for line in comment.splitlines():
        cleaned = line.strip().lstrip("*").strip()
        if cleaned:
            yield cleaned


def _strip_directive(line: str, directive: str) -> Optional[str]:
    if not line.startswith(directive):
        return None
    rest = line[len(directive) :]
    if not _DIRECTIVE_BOUNDARY.match(rest):
        return None
    return rest


class AnnotationParser:
    """Tracks pending annotation state for a single scan."""

    def __init__(self) -> None:
        self.state: AnnotationState = IDLE
        self.pending_ignore: Optional[str] = None

    def on_comment(self, comment: str) -> None:
        """Inspect a comment body (delimiters removed) for directives."""
        for line in _directive_lines(comment):
            block_body = _strip_directive(line, _BLOCK_DIRECTIVE)
            if block_body is not None:
                override = parse_context_params(block_body)
                if override is not None:
                    self.state = PendingBlock(override)
                return

            single_body = _strip_directive(line, _SINGLE_DIRECTIVE)
            if single_body is not None:
                override = parse_context_params(single_body)
                if override is not None:
                    self.state = PendingSingle(override)
                return

            if line.startswith(_IGNORE_DIRECTIVE):
                reason = parse_ignore_reason(line[len(_IGNORE_DIRECTIVE) :])
                if reason is not None:
                    self.pending_ignore = reason
                    return

    def take_block(self) -> Optional[ContextOverride]:
        """Consume a pending block override, leaving other state untouched."""
        if isinstance(self.state, PendingBlock):
            override = self.state.override
            self.state = IDLE
            return override
        return None

    def take_single(self) -> Optional[ContextOverride]:
        """Consume a pending single-element override."""
        if isinstance(self.state, PendingSingle):
            override = self.state.override
            self.state = IDLE
            return override
        return None

    def take_ignore(self) -> Optional[str]:
        reason = self.pending_ignore
        self.pending_ignore = None
        return reason


__all__ = [
    "DEFAULT_IGNORE_REASON",
    "AnnotationParser",
    "AnnotationState",
    "IDLE",
    "Idle",
    "PendingBlock",
    "PendingSingle",
    "parse_context_params",
    "parse_ignore_reason",
]
