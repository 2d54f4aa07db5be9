"""Turn the token stream of one file into ordered :class:`ClassRegion` records."""

from __future__ import annotations

from typing import List, Mapping, Optional

from ..models import ClassRegion, ContextOverride, InlineStyles
from .annotations import AnnotationParser
from .context import VISIBILITY_FLOOR, ContextTracker
from .lexing import LineIndex
from .tags import extract_inline_styles, has_disabled_variant, is_disabled_tag
from .tokenizer import ClassCall, CloseTag, Comment, OpenTag, iter_class_attributes, iter_tokens

DISABLED_REASON = "disabled element (WCAG SC 1.4.3 exemption)"
INVISIBLE_REASON = "effectively invisible (opacity below 10%)"

# Opacities this close to 1 are rendered fully opaque.
_OPAQUE_THRESHOLD = 0.999


def _region(
    content: str,
    line: int,
    context_bg: str,
    *,
    opacity: float,
    raw_tag: str = "",
    inline_styles: Optional[InlineStyles] = None,
    override: Optional[ContextOverride] = None,
    ignore_reason: Optional[str] = None,
    inherited_text_color: Optional[str] = None,
) -> ClassRegion:
    if ignore_reason is None and (is_disabled_tag(raw_tag) or has_disabled_variant(content)):
        ignore_reason = DISABLED_REASON
    if ignore_reason is None and opacity < VISIBILITY_FLOOR:
        ignore_reason = INVISIBLE_REASON
    return ClassRegion(
        content=content,
        start_line=line,
        context_bg=context_bg,
        inline_styles=inline_styles,
        context_override=override,
        effective_opacity=opacity if opacity < _OPAQUE_THRESHOLD else None,
        ignore_reason=ignore_reason,
        inherited_text_color=inherited_text_color,
    )


def extract_class_regions(
    source: str,
    container_map: Optional[Mapping[str, str]] = None,
    default_bg: str = "bg-background",
    portal_map: Optional[Mapping[str, str]] = None,
) -> List[ClassRegion]:
    """Extract every class-bearing construct of ``source`` in source order.

    Malformed input never raises: unterminated constructs are abandoned and
    whatever was collected is returned.
    """
    lines = LineIndex(source)
    annotations = AnnotationParser()
    tracker = ContextTracker(container_map, default_bg, portal_map)
    regions: List[ClassRegion] = []

    for token in iter_tokens(source):
        if isinstance(token, Comment):
            annotations.on_comment(token.body)

        elif isinstance(token, CloseTag):
            tracker.close_tag(token.name)

        elif isinstance(token, OpenTag):
            block = annotations.take_block()
            override = annotations.take_single() or block
            ignore_reason = annotations.take_ignore()
            element = tracker.open_tag(
                token.name,
                token.raw,
                is_self_closing=token.is_self_closing,
                block_override=block,
            )
            inline_styles = extract_inline_styles(token.raw)
            for content, offset in iter_class_attributes(token.raw):
                regions.append(
                    _region(
                        content,
                        lines.line_at(token.offset + offset),
                        element.bg,
                        opacity=element.opacity,
                        raw_tag=token.raw,
                        inline_styles=inline_styles,
                        override=override,
                        ignore_reason=ignore_reason,
                        inherited_text_color=element.text_color,
                    )
                )
                # Annotations attach to the first class attribute only.
                override = None
                ignore_reason = None

        elif isinstance(token, ClassCall):
            override = annotations.take_single()
            ignore_reason = annotations.take_ignore()
            regions.append(
                _region(
                    token.body,
                    lines.line_at(token.offset),
                    tracker.current_bg,
                    opacity=tracker.current_opacity,
                    override=override,
                    ignore_reason=ignore_reason,
                    inherited_text_color=tracker.current_text_color,
                )
            )

    return regions


__all__ = ["DISABLED_REASON", "INVISIBLE_REASON", "extract_class_regions"]
