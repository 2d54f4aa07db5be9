"""Pair foreground and background classes of extracted regions.

Skip policy for unresolved colours:

* base text pair, explicit background unresolved: skipped with a reason
* base text pair, inherited background unresolved: pair kept with ``bg_hex=None``
* base border/ring/outline pair, background unresolved: dropped silently
* base pair, foreground unresolved: skipped with a category-specific reason
* interactive-state pairs never report skips; the base state already did

``*-current`` foregrounds resolve to the text colour in effect on the element:
its own text colour, otherwise the nearest ancestor's. With neither they are
skipped as unresolvable.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from ..colors import ColorResolver
from ..models import (
    ClassRegion,
    ColorPair,
    ContextSource,
    InlineStyles,
    InteractiveState,
    PairType,
    ResolvedColor,
    ResolvedRegions,
    SkippedClass,
    TaggedClass,
    ThemeMode,
)
from ..scanner.lexing import split_region_classes
from .categorizer import ClassBuckets, categorize_classes

DYNAMIC_REASON = "Dynamic class (template expression)"
IMPLICIT_PREFIX = "(implicit) "
INLINE_PREFIX = "(inline) "
ANNOTATION_PREFIX = "(@a11y-context) "


@dataclass(frozen=True)
class PairMeta:
    """Metadata shared by every pair generated from one region."""

    file: str
    line: int
    ignore_reason: Optional[str] = None
    is_large_text: bool = False
    interactive_state: Optional[InteractiveState] = None
    effective_opacity: Optional[float] = None
    context_source: ContextSource = ContextSource.INFERRED
    current_color: Optional[str] = None


@dataclass(frozen=True)
class ForegroundGroup:
    classes: Sequence[TaggedClass]
    pair_type: PairType = PairType.TEXT


def _is_hex(value: Optional[str]) -> bool:
    return bool(value) and value.startswith("#") and len(value) >= 4


def _synthetic(label: str, base: str) -> TaggedClass:
    return TaggedClass(raw=label, base=base)


def build_effective_bg(
    bg_classes: Sequence[TaggedClass],
    context_bg: str,
    inline_styles: Optional[InlineStyles] = None,
    annotation_bg: Optional[str] = None,
) -> List[TaggedClass]:
    """Backgrounds a region's foregrounds are paired against.

    Precedence, highest first: annotation, inline ``backgroundColor`` hex,
    explicit classes, inherited context. The ``raw`` field of each entry is
    the label reported in pairs.
    """
    if annotation_bg:
        base = f"bg-[{annotation_bg}]" if _is_hex(annotation_bg) else annotation_bg
        return [_synthetic(ANNOTATION_PREFIX + annotation_bg, base)]
    if inline_styles is not None and _is_hex(inline_styles.background_color):
        hex_value = inline_styles.background_color
        return [_synthetic(INLINE_PREFIX + hex_value, f"bg-[{hex_value}]")]
    if bg_classes:
        return list(bg_classes)
    return [_synthetic(IMPLICIT_PREFIX + context_bg, context_bg)]


def build_foreground(
    text_classes: Sequence[TaggedClass],
    inline_styles: Optional[InlineStyles] = None,
    annotation_fg: Optional[str] = None,
) -> List[TaggedClass]:
    """Text classes after inline ``color`` and annotation ``fg`` are applied."""
    if annotation_fg:
        base = f"text-[{annotation_fg}]" if _is_hex(annotation_fg) else annotation_fg
        return [_synthetic(ANNOTATION_PREFIX + annotation_fg, base)]
    classes = list(text_classes)
    if inline_styles is not None and _is_hex(inline_styles.color):
        hex_value = inline_styles.color
        classes.append(_synthetic(INLINE_PREFIX + hex_value, f"text-[{hex_value}]"))
    return classes


def _is_current(base: str) -> bool:
    return base.partition("/")[0].endswith("-current")


def current_color_for(text: Sequence[TaggedClass], inherited: Optional[str]) -> Optional[str]:
    """Text colour class that ``currentColor`` means for an element.

    The last own colour wins, so an inline ``color`` or annotation ``fg`` beats
    the classes; without one the inherited colour applies.
    """
    for cls in reversed(text):
        if not _is_current(cls.base):
            return cls.base
    return inherited


def _resolve_foreground(
    foreground: TaggedClass, meta: PairMeta, resolver: ColorResolver, theme_mode: ThemeMode
) -> Optional[ResolvedColor]:
    if not _is_current(foreground.base):
        return resolver.resolve(foreground.base, theme_mode)
    if meta.current_color is None:
        return None
    _, slash, alpha = foreground.base.partition("/")
    target = meta.current_color
    if slash:
        target = target.partition("/")[0] + slash + alpha
    return resolver.resolve(target, theme_mode)


def _scaled(alpha: Optional[float], opacity: Optional[float]) -> Optional[float]:
    if opacity is None:
        return alpha
    return (1.0 if alpha is None else alpha) * opacity


def generate_pairs(
    groups: Iterable[ForegroundGroup],
    backgrounds: Sequence[TaggedClass],
    meta: PairMeta,
    resolver: ColorResolver,
    theme_mode: ThemeMode,
    has_explicit_bg: bool,
) -> ResolvedRegions:
    result = ResolvedRegions()
    interactive = meta.interactive_state is not None
    opacity = meta.effective_opacity if meta.effective_opacity is not None and meta.effective_opacity < 1 else None

    for group in groups:
        if not group.classes:
            continue
        is_text = group.pair_type == PairType.TEXT

        for background in backgrounds:
            bg_color = resolver.resolve(background.base, theme_mode)
            if bg_color is None:
                if not interactive and is_text and has_explicit_bg:
                    result.skipped.append(
                        SkippedClass(
                            file=meta.file,
                            line=meta.line,
                            class_name=background.raw,
                            reason=f"Unresolvable background: {background.raw}",
                        )
                    )
                if interactive or not is_text or has_explicit_bg:
                    continue

            for foreground in group.classes:
                fg_color = _resolve_foreground(foreground, meta, resolver, theme_mode)
                if fg_color is None:
                    if not interactive:
                        result.skipped.append(
                            SkippedClass(
                                file=meta.file,
                                line=meta.line,
                                class_name=foreground.raw,
                                reason=f"Unresolvable {group.pair_type.value} color: {foreground.raw}",
                            )
                        )
                    continue

                result.pairs.append(
                    ColorPair(
                        file=meta.file,
                        line=meta.line,
                        bg_class=background.raw,
                        text_class=foreground.raw,
                        bg_hex=bg_color.hex if bg_color else None,
                        text_hex=fg_color.hex,
                        bg_alpha=_scaled(bg_color.alpha if bg_color else None, opacity),
                        text_alpha=_scaled(fg_color.alpha, opacity),
                        is_large_text=meta.is_large_text if is_text else None,
                        pair_type=group.pair_type,
                        interactive_state=meta.interactive_state,
                        ignored=meta.ignore_reason is not None,
                        ignore_reason=meta.ignore_reason,
                        context_source=meta.context_source,
                        effective_opacity=opacity,
                    )
                )
    return result


def _groups(text: Sequence[TaggedClass], buckets: ClassBuckets) -> Tuple[ForegroundGroup, ...]:
    return (
        ForegroundGroup(text, PairType.TEXT),
        ForegroundGroup(buckets.border, PairType.BORDER),
        ForegroundGroup(buckets.ring, PairType.RING),
        ForegroundGroup(buckets.outline, PairType.OUTLINE),
    )


def resolve_region(
    file: str,
    region: ClassRegion,
    resolver: ColorResolver,
    theme_mode: ThemeMode,
) -> ResolvedRegions:
    result = ResolvedRegions()
    categorized = categorize_classes(split_region_classes(region.content), theme_mode)

    for cls in categorized.dynamic:
        result.skipped.append(
            SkippedClass(file=file, line=region.start_line, class_name=cls, reason=DYNAMIC_REASON)
        )

    override = region.context_override
    annotation_bg = override.bg if override is not None else None
    annotation_fg = override.fg if override is not None else None
    has_explicit_bg = bool(categorized.base.bg)

    backgrounds = build_effective_bg(
        categorized.base.bg, region.context_bg, region.inline_styles, annotation_bg
    )
    text = build_foreground(categorized.base.text, region.inline_styles, annotation_fg)
    meta = PairMeta(
        file=file,
        line=region.start_line,
        ignore_reason=region.ignore_reason,
        is_large_text=categorized.is_large_text,
        effective_opacity=region.effective_opacity,
        context_source=ContextSource.ANNOTATION if override is not None else ContextSource.INFERRED,
        current_color=current_color_for(text, region.inherited_text_color),
    )
    result.extend(
        generate_pairs(_groups(text, categorized.base), backgrounds, meta, resolver, theme_mode, has_explicit_bg)
    )

    for state, buckets in categorized.iter_states():
        state_bg = list(buckets.bg) or backgrounds
        if annotation_fg:
            state_text = text
        else:
            state_text = list(buckets.text) or text
        result.extend(
            generate_pairs(
                _groups(state_text, buckets),
                state_bg,
                replace(
                    meta,
                    interactive_state=state,
                    current_color=current_color_for(state_text, meta.current_color),
                ),
                resolver,
                theme_mode,
                has_explicit_bg,
            )
        )
    return result


def resolve_regions(
    file: str,
    regions: Iterable[ClassRegion],
    resolver: ColorResolver,
    theme_mode: ThemeMode = ThemeMode.LIGHT,
) -> ResolvedRegions:
    """Pairs and skips for every region of one file, in region order."""
    result = ResolvedRegions()
    for region in regions:
        result.extend(resolve_region(file, region, resolver, theme_mode))
    return result


__all__ = [
    "ANNOTATION_PREFIX",
    "DYNAMIC_REASON",
    "ForegroundGroup",
    "IMPLICIT_PREFIX",
    "INLINE_PREFIX",
    "PairMeta",
    "build_effective_bg",
    "build_foreground",
    "current_color_for",
    "generate_pairs",
    "resolve_region",
    "resolve_regions",
]
