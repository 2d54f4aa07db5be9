"""Vocabulary of utility-class families that carry (or look like they carry) colours."""

from __future__ import annotations

import re
from typing import Optional

TEXT_NON_COLOR = frozenset(
    {
        "text-xs",
        "text-sm",
        "text-base",
        "text-lg",
        "text-xl",
        "text-2xl",
        "text-3xl",
        "text-4xl",
        "text-5xl",
        "text-6xl",
        "text-7xl",
        "text-8xl",
        "text-9xl",
        "text-left",
        "text-center",
        "text-right",
        "text-justify",
        "text-start",
        "text-end",
        "text-wrap",
        "text-nowrap",
        "text-balance",
        "text-pretty",
        "text-clip",
        "text-ellipsis",
        "text-truncate",
        "text-underline",
        "text-overline",
        "text-line-through",
        "text-no-underline",
        "text-uppercase",
        "text-lowercase",
        "text-capitalize",
        "text-normal-case",
    }
)

BG_NON_COLOR = frozenset(
    {
        "bg-clip-text",
        "bg-clip-border",
        "bg-clip-padding",
        "bg-clip-content",
        "bg-no-repeat",
        "bg-repeat",
        "bg-cover",
        "bg-contain",
        "bg-fixed",
        "bg-local",
        "bg-scroll",
        "bg-center",
        "bg-none",
    }
)

BG_NON_COLOR_PREFIXES = ("bg-linear-", "bg-gradient-", "bg-radial", "bg-conic")

BORDER_NON_COLOR = frozenset(
    {
        "border",
        "border-x",
        "border-y",
        "border-t",
        "border-b",
        "border-l",
        "border-r",
        "border-s",
        "border-e",
        "border-solid",
        "border-dashed",
        "border-dotted",
        "border-double",
        "border-none",
        "border-hidden",
        "border-collapse",
        "border-separate",
        "divide-x",
        "divide-y",
        "divide-solid",
        "divide-dashed",
        "divide-dotted",
        "divide-double",
        "divide-none",
        "divide-x-reverse",
        "divide-y-reverse",
    }
)

# border-2, border-t-4, divide-x-0, border-spacing-*: widths and spacing, not colours.
_BORDER_WIDTH = re.compile(r"^(?:border|divide)(?:-[xytblrse])?-(?:\d+|px|\[\d[^\]]*\])$")

RING_NON_COLOR = frozenset({"ring", "ring-inset"})
_RING_WIDTH = re.compile(r"^ring-(?:\d+|px|\[\d[^\]]*\])$")

OUTLINE_NON_COLOR = frozenset(
    {
        "outline",
        "outline-none",
        "outline-hidden",
        "outline-dashed",
        "outline-dotted",
        "outline-double",
        "outline-solid",
    }
)
_OUTLINE_WIDTH = re.compile(r"^outline-(?:\d+|px|\[\d[^\]]*\])$")

_TEXT_SIZE_ARBITRARY = re.compile(r"^text-\[\d")

# WCAG SC 1.4.3 large text: >=24px any weight, or >=18.67px (text-xl, 20px) when bold.
ALWAYS_LARGE = frozenset(
    {
        "text-2xl",
        "text-3xl",
        "text-4xl",
        "text-5xl",
        "text-6xl",
        "text-7xl",
        "text-8xl",
        "text-9xl",
    }
)
LARGE_IF_BOLD = frozenset({"text-xl"})
BOLD_CLASSES = frozenset({"font-bold", "font-extrabold", "font-black"})


def is_bg_color(base: str) -> bool:
    if not base.startswith("bg-"):
        return False
    if base.startswith(BG_NON_COLOR_PREFIXES) or base in BG_NON_COLOR:
        return False
    return True


def is_text_color(base: str) -> bool:
    if not base.startswith("text-"):
        return False
    if base in TEXT_NON_COLOR or _TEXT_SIZE_ARBITRARY.match(base):
        return False
    if base.startswith("text-opacity-"):
        return False
    return True


def is_border_color(base: str) -> bool:
    if not (base.startswith("border-") or base.startswith("divide-")):
        return False
    if base in BORDER_NON_COLOR or _BORDER_WIDTH.match(base):
        return False
    if base.startswith("border-spacing-") or base.startswith("border-opacity-"):
        return False
    return True


def is_ring_color(base: str) -> bool:
    if not base.startswith("ring-"):
        return False
    if base in RING_NON_COLOR or _RING_WIDTH.match(base):
        return False
    if base.startswith("ring-offset-") or base.startswith("ring-opacity-"):
        return False
    return True


def is_outline_color(base: str) -> bool:
    if not base.startswith("outline-"):
        return False
    if base in OUTLINE_NON_COLOR or _OUTLINE_WIDTH.match(base):
        return False
    if base.startswith("outline-offset-"):
        return False
    return True


def parse_opacity_class(cls: str) -> Optional[float]:
    """Return the 0-1 value of an ``opacity-*`` utility, or ``None``.

    Supports the scale (``opacity-50``) and arbitrary values
    (``opacity-[.33]``, ``opacity-[33%]``).
    """
    if not cls.startswith("opacity-"):
        return None
    suffix = cls[len("opacity-") :]
    if not suffix:
        return None

    if suffix.startswith("[") and suffix.endswith("]"):
        inner = suffix[1:-1]
        if not inner:
            return None
        try:
            if inner.endswith("%"):
                value = float(inner[:-1]) / 100.0
            else:
                value = float(inner)
        except ValueError:
            return None
        return min(max(value, 0.0), 1.0)

    if not suffix.isdigit():
        return None
    number = int(suffix)
    if number > 100:
        return None
    return number / 100.0


__all__ = [
    "ALWAYS_LARGE",
    "BG_NON_COLOR",
    "BOLD_CLASSES",
    "LARGE_IF_BOLD",
    "TEXT_NON_COLOR",
    "is_bg_color",
    "is_border_color",
    "is_outline_color",
    "is_ring_color",
    "is_text_color",
    "parse_opacity_class",
]
