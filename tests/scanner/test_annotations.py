from __future__ import annotations

from a11yscan.models import ContextOverride
from a11yscan.scanner.annotations import (
    IDLE,
    AnnotationParser,
    PendingBlock,
    PendingSingle,
    parse_context_params,
    parse_ignore_reason,
)


def test_parse_context_params() -> None:
    assert parse_context_params(" bg:bg-card fg:#fff no-inherit") == ContextOverride(
        bg="bg-card", fg="#fff", no_inherit=True
    )
    assert parse_context_params(" fg:text-white") == ContextOverride(fg="text-white")
    assert parse_context_params(" no-inherit") is None
    assert parse_context_params(" bg:") is None


def test_parse_ignore_reason() -> None:
    assert parse_ignore_reason(": low priority ") == "low priority"
    assert parse_ignore_reason(":") == "suppressed"
    assert parse_ignore_reason("") == "suppressed"
    assert parse_ignore_reason(" trailing words") == "suppressed"
    assert parse_ignore_reason("d") is None


def test_single_and_block_states() -> None:
    parser = AnnotationParser()

    parser.on_comment(" @a11y-context bg:#000")
    assert isinstance(parser.state, PendingSingle)
    assert parser.take_block() is None
    assert parser.take_single() == ContextOverride(bg="#000")
    assert parser.state is IDLE

    parser.on_comment(" @a11y-context-block bg:bg-card ")
    assert isinstance(parser.state, PendingBlock)
    assert parser.take_single() is None
    assert parser.take_block() == ContextOverride(bg="bg-card")
    assert parser.take_block() is None


def test_later_annotation_replaces_pending_one() -> None:
    parser = AnnotationParser()

    parser.on_comment(" @a11y-context bg:#000")
    parser.on_comment(" @a11y-context-block bg:#fff")

    assert parser.take_single() is None
    assert parser.take_block() == ContextOverride(bg="#fff")


def test_directive_lookalikes_are_ignored() -> None:
    parser = AnnotationParser()

    parser.on_comment(" @a11y-contextual bg:#000")
    parser.on_comment(" a11y-ignored")

    assert parser.state is IDLE
    assert parser.take_ignore() is None


def test_multiline_block_comment_lines_are_scanned() -> None:
    parser = AnnotationParser()

    parser.on_comment("*\n * Card header\n * a11y-ignore: decorative\n ")

    assert parser.take_ignore() == "decorative"
    assert parser.take_ignore() is None
