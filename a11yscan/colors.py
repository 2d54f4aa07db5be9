"""Colour collaborators: resolver and checker contracts plus a palette resolver."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Protocol, Tuple

from .models import ColorPair, ResolvedColor, ThemeMode

_COLOR_PREFIX = re.compile(r"^(?:bg-|text-|border-(?:[trblxyse]-)?|divide-|ring-|outline-)")
_HEX = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_UNRESOLVABLE = frozenset({"transparent", "current", "inherit"})

BUILTIN_COLORS: Dict[str, str] = {"white": "#ffffff", "black": "#000000"}


class ColorResolver(Protocol):
    """Resolves a utility class name to a concrete colour for a theme."""

    def resolve(self, class_name: str, theme_mode: ThemeMode) -> Optional[ResolvedColor]:
        ...


@dataclass(frozen=True)
class ContrastResult:
    ratio: float
    pass_aa: bool
    pass_aaa: bool
    apca_lc: Optional[float] = None


class ContrastChecker(Protocol):
    """Computes contrast for an emitted pair against the page background."""

    def check(self, pair: ColorPair, page_background: str) -> ContrastResult:
        ...


def normalize_hex(value: str) -> Optional[Tuple[str, Optional[float]]]:
    """Return ``(#rrggbb, alpha)`` for a 3, 4, 6 or 8 digit hex literal."""
    value = value.strip()
    if not _HEX.match(value):
        return None
    digits = value[1:].lower()
    if len(digits) in (3, 4):
        digits = "".join(char * 2 for char in digits)
    alpha: Optional[float] = None
    if len(digits) == 8:
        alpha = round(int(digits[6:], 16) / 255.0, 3)
        digits = digits[:6]
    return "#" + digits, alpha


def _split_alpha(token: str) -> Tuple[str, Optional[float]]:
    """Split ``red-500/50`` or ``[#fff]/[.3]`` into the colour and its alpha."""
    depth = 0
    slash = -1
    for index, char in enumerate(token):
        if char == "[":
            depth += 1
        elif char == "]":
            depth = max(depth - 1, 0)
        elif char == "/" and depth == 0:
            slash = index
    if slash == -1:
        return token, None
    color, modifier = token[:slash], token[slash + 1 :]
    if modifier.startswith("[") and modifier.endswith("]"):
        modifier = modifier[1:-1]
        try:
            if modifier.endswith("%"):
                return color, float(modifier[:-1]) / 100.0
            return color, float(modifier)
        except ValueError:
            return token, None
    if modifier.isdigit():
        return color, int(modifier) / 100.0
    return token, None


def _combine(first: Optional[float], second: Optional[float]) -> Optional[float]:
    if first is None:
        return second
    if second is None:
        return first
    return first * second


class PaletteColorResolver:
    """Resolves classes through per-theme maps of class or token to hex.

    Keys may be full class names (``bg-background``) or bare tokens
    (``background``, ``red-500``). Arbitrary values such as ``bg-[#0a0a0a]``
    resolve without a palette entry, and ``/NN`` opacity modifiers become alpha.
    """

    def __init__(self, palettes: Optional[Mapping[str, Mapping[str, str]]] = None) -> None:
        self._palettes: Dict[ThemeMode, Dict[str, str]] = {mode: {} for mode in ThemeMode}
        for mode_name, palette in (palettes or {}).items():
            mode = ThemeMode(mode_name)
            self._palettes[mode] = {str(key): str(value) for key, value in palette.items()}

    def _lookup(self, name: str, token: str, theme_mode: ThemeMode) -> Optional[str]:
        palette = self._palettes[ThemeMode(theme_mode)]
        for key in (name, token):
            if key in palette:
                return palette[key]
        # Dark palettes fall back to the light palette.
        if theme_mode == ThemeMode.DARK:
            light = self._palettes[ThemeMode.LIGHT]
            for key in (name, token):
                if key in light:
                    return light[key]
        return BUILTIN_COLORS.get(token)

    def resolve(self, class_name: str, theme_mode: ThemeMode) -> Optional[ResolvedColor]:
        prefix = _COLOR_PREFIX.match(class_name)
        prefix_text = prefix.group(0) if prefix else ""
        token, modifier_alpha = _split_alpha(class_name[len(prefix_text) :])
        if not token or token in _UNRESOLVABLE:
            return None

        if token.startswith("[") and token.endswith("]"):
            value: Optional[str] = token[1:-1]
        else:
            value = self._lookup(prefix_text + token, token, theme_mode)
        if value is None:
            return None

        parsed = normalize_hex(value)
        if parsed is None:
            return None
        hex_value, hex_alpha = parsed
        alpha = _combine(hex_alpha, modifier_alpha)
        return ResolvedColor(hex=hex_value, alpha=alpha)


__all__ = [
    "BUILTIN_COLORS",
    "ColorResolver",
    "ContrastChecker",
    "ContrastResult",
    "PaletteColorResolver",
    "normalize_hex",
]
