"""Sort the class tokens of a region into colour buckets for one theme mode."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..classes import (
    ALWAYS_LARGE,
    BOLD_CLASSES,
    LARGE_IF_BOLD,
    is_bg_color,
    is_border_color,
    is_outline_color,
    is_ring_color,
    is_text_color,
)
from ..models import InteractiveState, TaggedClass, ThemeMode

DARK_VARIANT = "dark"

TRACKED_STATES: Dict[str, InteractiveState] = {state.value: state for state in InteractiveState}

BUCKET_NAMES = ("bg", "text", "border", "ring", "outline")

_ROUTES: Tuple[Tuple[str, Callable[[str], bool]], ...] = (
    ("bg", is_bg_color),
    ("text", is_text_color),
    ("border", is_border_color),
    ("ring", is_ring_color),
    ("outline", is_outline_color),
)


def _split_variants(cls: str) -> List[str]:
    """Split ``sm:dark:hover:bg-x`` on colons outside ``[...]`` arbitrary values."""
    parts: List[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(cls):
        if char == "[":
            depth += 1
        elif char == "]":
            if depth > 0:
                depth -= 1
        elif char == ":" and depth == 0:
            parts.append(cls[start:index])
            start = index + 1
    parts.append(cls[start:])
    return parts


def strip_variants(cls: str) -> TaggedClass:
    """Strip every variant prefix from ``cls``, recording what was removed.

    ``dark:`` marks the class dark. Any other prefix marks it interactive;
    ``hover:``, ``focus-visible:`` and ``aria-disabled:`` also record which
    state it belongs to. The last tracked prefix wins.
    """
    *variants, base = _split_variants(cls)
    is_dark = False
    is_interactive = False
    state: Optional[InteractiveState] = None
    for variant in variants:
        if variant == DARK_VARIANT:
            is_dark = True
            continue
        is_interactive = True
        if variant in TRACKED_STATES:
            state = TRACKED_STATES[variant]
    if base.startswith("!"):
        base = base[1:]
    return TaggedClass(
        raw=cls,
        base=base,
        is_dark=is_dark,
        is_interactive=is_interactive,
        interactive_state=state,
    )


def route(base: str) -> Optional[str]:
    """Name of the colour bucket a stripped class belongs to, if any."""
    for name, predicate in _ROUTES:
        if predicate(base):
            return name
    return None


@dataclass
class ClassBuckets:
    bg: List[TaggedClass] = field(default_factory=list)
    text: List[TaggedClass] = field(default_factory=list)
    border: List[TaggedClass] = field(default_factory=list)
    ring: List[TaggedClass] = field(default_factory=list)
    outline: List[TaggedClass] = field(default_factory=list)

    def bucket(self, name: str) -> List[TaggedClass]:
        return getattr(self, name)

    def add(self, tagged: TaggedClass) -> bool:
        name = route(tagged.base)
        if name is None:
            return False
        self.bucket(name).append(tagged)
        return True

    def is_empty(self) -> bool:
        return not any(self.bucket(name) for name in BUCKET_NAMES)

    def for_theme(self, theme_mode: ThemeMode) -> "ClassBuckets":
        """Apply dark-mode semantics bucket by bucket.

        Light mode drops ``dark:`` classes. Dark mode lets ``dark:`` classes
        replace the base classes of a bucket when at least one is present.
        """
        selected = ClassBuckets()
        for name in BUCKET_NAMES:
            classes = self.bucket(name)
            if theme_mode == ThemeMode.LIGHT:
                chosen = [tagged for tagged in classes if not tagged.is_dark]
            elif any(tagged.is_dark for tagged in classes):
                chosen = [tagged for tagged in classes if tagged.is_dark]
            else:
                chosen = list(classes)
            setattr(selected, name, chosen)
        return selected


@dataclass
class CategorizedClasses:
    """Colour buckets of one region for one theme mode."""

    base: ClassBuckets
    states: Dict[InteractiveState, ClassBuckets] = field(default_factory=dict)
    dynamic: List[str] = field(default_factory=list)
    font_size: Optional[str] = None
    is_bold: bool = False

    @property
    def is_large_text(self) -> bool:
        return is_large_text(self.font_size, self.is_bold)

    def iter_states(self) -> Iterable[Tuple[InteractiveState, ClassBuckets]]:
        for state in InteractiveState:
            buckets = self.states.get(state)
            if buckets is not None:
                yield state, buckets


def is_large_text(font_size: Optional[str], is_bold: bool) -> bool:
    """WCAG large text: 24px and up at any weight, 20px only when bold."""
    if font_size is None:
        return False
    if font_size in ALWAYS_LARGE:
        return True
    return font_size in LARGE_IF_BOLD and is_bold


def categorize_classes(classes: Iterable[str], theme_mode: ThemeMode) -> CategorizedClasses:
    base = ClassBuckets()
    states: Dict[InteractiveState, ClassBuckets] = {}
    dynamic: List[str] = []
    font_size: Optional[str] = None
    is_bold = False

    for cls in classes:
        if not cls:
            continue
        if "$" in cls:
            dynamic.append(cls)
            continue

        tagged = strip_variants(cls)
        if tagged.base in ALWAYS_LARGE or tagged.base in LARGE_IF_BOLD:
            font_size = tagged.base
        if tagged.base in BOLD_CLASSES:
            is_bold = True

        if tagged.is_interactive:
            # Untracked variants (sm:, active:, group-hover:) are not observable statically.
            if tagged.interactive_state is not None:
                states.setdefault(tagged.interactive_state, ClassBuckets()).add(tagged)
            continue
        base.add(tagged)

    themed_states = {}
    for state, buckets in states.items():
        themed = buckets.for_theme(theme_mode)
        if not themed.is_empty():
            themed_states[state] = themed

    return CategorizedClasses(
        base=base.for_theme(theme_mode),
        states=themed_states,
        dynamic=dynamic,
        font_size=font_size,
        is_bold=is_bold,
    )


__all__ = [
    "BUCKET_NAMES",
    "CategorizedClasses",
    "ClassBuckets",
    "categorize_classes",
    "is_large_text",
    "route",
    "strip_variants",
]
