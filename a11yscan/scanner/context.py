"""Stack of structural frames giving the inherited background and opacity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from ..models import ContextOverride, ContextStackFrame
from .tags import find_explicit_bg, find_opacity, find_text_color

PORTAL_RESET = "reset"
VISIBILITY_FLOOR = 0.1
ROOT_COMPONENT = "_root"


@dataclass(frozen=True)
class ElementContext:
    """Context seen by the class attributes of the element that was just opened."""

    bg: str
    opacity: float
    text_color: Optional[str] = None


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


class ContextTracker:
    """LIFO stack of container, portal, annotation and opacity frames.

    Every open element is remembered together with the number of frames it
    pushed and the text colour it sets, so a closing tag removes exactly the
    frames of the elements it closes even when same-named elements are nested.
    """

    def __init__(
        self,
        container_map: Optional[Mapping[str, str]] = None,
        default_bg: str = "bg-background",
        portal_map: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.container_map: Dict[str, str] = dict(container_map or {})
        self.portal_map: Dict[str, str] = dict(portal_map or {})
        self.default_bg = default_bg
        self.stack: List[ContextStackFrame] = [
            ContextStackFrame(component_name=ROOT_COMPONENT, bg=default_bg)
        ]
        self._elements: List[Tuple[str, int, Optional[str]]] = []

    @property
    def current_bg(self) -> str:
        return self.stack[-1].bg

    @property
    def current_opacity(self) -> float:
        return self.stack[-1].cumulative_opacity

    @property
    def current_text_color(self) -> Optional[str]:
        """Text colour class that ``currentColor`` refers to at this point, if any."""
        for _, _, text_color in reversed(self._elements):
            if text_color is not None:
                return text_color
        return None

    @property
    def open_elements(self) -> int:
        return len(self._elements)

    def open_tag(
        self,
        tag_name: str,
        raw_tag: str,
        *,
        is_self_closing: bool = False,
        block_override: Optional[ContextOverride] = None,
    ) -> ElementContext:
        """Process an opening tag and return the context its own classes see.

        Self-closing tags never push frames but still report the context they
        render in, portal and container configuration included.
        """
        parent_bg = self.current_bg
        parent_opacity = self.current_opacity
        inherited_color = self.current_text_color
        frames: List[ContextStackFrame] = []

        own_opacity = find_opacity(raw_tag)
        explicit_bg = find_explicit_bg(raw_tag)
        opacity_factor = own_opacity if own_opacity is not None else 1.0

        if tag_name in self.portal_map:
            configured = self.portal_map[tag_name]
            self_bg = self.default_bg if configured == PORTAL_RESET else configured
            cumulative = _clamp(opacity_factor)
            frames.append(self._frame(tag_name, self_bg, cumulative))
        elif tag_name in self.container_map:
            self_bg = self.container_map[tag_name]
            cumulative = _clamp(parent_opacity * opacity_factor)
            frames.append(self._frame(tag_name, explicit_bg or self_bg, cumulative))
        else:
            self_bg = parent_bg
            cumulative = _clamp(parent_opacity * opacity_factor)
            if explicit_bg is not None or own_opacity is not None:
                frames.append(self._frame(tag_name, explicit_bg or parent_bg, cumulative))

        if block_override is not None:
            annotation_bg = block_override.bg or self_bg
            # no-inherit scopes the override to this element's own classes.
            if block_override.bg and not block_override.no_inherit:
                for frame in frames:
                    frame.bg = annotation_bg
            frames.insert(
                0,
                ContextStackFrame(
                    component_name=tag_name,
                    bg=parent_bg if block_override.no_inherit else annotation_bg,
                    is_annotation_frame=True,
                    no_inherit=block_override.no_inherit,
                    cumulative_opacity=parent_opacity,
                ),
            )
            self_bg = annotation_bg

        if not is_self_closing:
            self.stack.extend(frames)
            self._elements.append((tag_name, len(frames), find_text_color(raw_tag)))

        return ElementContext(bg=self_bg, opacity=cumulative, text_color=inherited_color)

    def close_tag(self, tag_name: str) -> bool:
        """Close the nearest open element named ``tag_name``.

        Elements opened inside it and never closed (``<Card><p>text</Card>``)
        are closed with it. A closing tag with no open element of that name is
        a no-op and returns ``False``.
        """
        for position in range(len(self._elements) - 1, -1, -1):
            if self._elements[position][0] == tag_name:
                break
        else:
            return False
        frame_count = sum(count for _, count, _ in self._elements[position:])
        del self._elements[position:]
        if frame_count:
            del self.stack[len(self.stack) - frame_count :]
        return True

    @staticmethod
    def _frame(tag_name: str, bg: str, cumulative: float) -> ContextStackFrame:
        return ContextStackFrame(component_name=tag_name, bg=bg, cumulative_opacity=cumulative)


__all__ = [
    "ContextTracker",
    "ElementContext",
    "PORTAL_RESET",
    "ROOT_COMPONENT",
    "VISIBILITY_FLOOR",
]
