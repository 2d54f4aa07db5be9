"""Core data models shared across a11yscan components."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional


class ThemeMode(str, Enum):
    """Theme the class lists are resolved for."""

    LIGHT = "light"
    DARK = "dark"


class InteractiveState(str, Enum):
    """Pseudo-states whose classes are paired separately from the base state."""

    HOVER = "hover"
    FOCUS_VISIBLE = "focus-visible"
    ARIA_DISABLED = "aria-disabled"


class PairType(str, Enum):
    """WCAG success criterion family a pair is checked under."""

    TEXT = "text"
    BORDER = "border"
    RING = "ring"
    OUTLINE = "outline"


class ContextSource(str, Enum):
    """Where the background of a pair came from."""

    INFERRED = "inferred"
    ANNOTATION = "annotation"


def _serialise(instance: object) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for item in fields(instance):  # type: ignore[arg-type]
        value = getattr(instance, item.name)
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        elif hasattr(value, "to_dict"):
            value = value.to_dict()
        data[item.name] = value
    return data


@dataclass(frozen=True)
class ContextOverride:
    """Override parsed from an ``@a11y-context`` style annotation."""

    bg: Optional[str] = None
    fg: Optional[str] = None
    no_inherit: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return _serialise(self)


@dataclass(frozen=True)
class InlineStyles:
    """Literal colours found in a ``style={{ ... }}`` attribute."""

    color: Optional[str] = None
    background_color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _serialise(self)


@dataclass(frozen=True)
class ClassRegion:
    """One class-bearing construct plus the structural context it was found in."""

    content: str
    start_line: int
    context_bg: str
    inline_styles: Optional[InlineStyles] = None
    context_override: Optional[ContextOverride] = None
    effective_opacity: Optional[float] = None
    ignore_reason: Optional[str] = None
    # Nearest ancestor text colour; what `*-current` utilities resolve to.
    inherited_text_color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _serialise(self)


@dataclass
class ContextStackFrame:
    """Entry of the structural context stack."""

    component_name: str
    bg: str
    is_annotation_frame: bool = False
    no_inherit: bool = False
    cumulative_opacity: float = 1.0


@dataclass(frozen=True)
class TaggedClass:
    """A class token after variant-prefix stripping."""

    raw: str
    base: str
    is_dark: bool = False
    is_interactive: bool = False
    interactive_state: Optional[InteractiveState] = None


@dataclass(frozen=True)
class ResolvedColor:
    """A colour resolved from a utility class."""

    hex: str
    alpha: Optional[float] = None


@dataclass
class ColorPair:
    """A background/foreground combination found in a source file."""

    file: str
    line: int
    bg_class: str
    text_class: str
    bg_hex: Optional[str]
    text_hex: Optional[str]
    bg_alpha: Optional[float] = None
    text_alpha: Optional[float] = None
    is_large_text: Optional[bool] = None
    pair_type: PairType = PairType.TEXT
    interactive_state: Optional[InteractiveState] = None
    ignored: bool = False
    ignore_reason: Optional[str] = None
    context_source: ContextSource = ContextSource.INFERRED
    effective_opacity: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return _serialise(self)


@dataclass(frozen=True)
class SkippedClass:
    """A class that could not be paired, with the reason why."""

    file: str
    line: int
    class_name: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return _serialise(self)


@dataclass
class FileRegions:
    """Theme-agnostic extraction result for one source file."""

    rel_path: str
    regions: List[ClassRegion] = field(default_factory=list)


@dataclass
class ResolvedRegions:
    """Pairs and skipped classes produced for one theme mode."""

    pairs: List[ColorPair] = field(default_factory=list)
    skipped: List[SkippedClass] = field(default_factory=list)

    def extend(self, other: "ResolvedRegions") -> None:
        self.pairs.extend(other.pairs)
        self.skipped.extend(other.skipped)


__all__ = [
    "ClassRegion",
    "ColorPair",
    "ContextOverride",
    "ContextSource",
    "ContextStackFrame",
    "FileRegions",
    "InlineStyles",
    "InteractiveState",
    "PairType",
    "ResolvedColor",
    "ResolvedRegions",
    "SkippedClass",
    "TaggedClass",
    "ThemeMode",
]
