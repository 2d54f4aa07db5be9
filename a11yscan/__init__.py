"""Static extraction of colour-contrast pairs from JSX-like sources."""

from __future__ import annotations

from .models import ClassRegion, ColorPair, SkippedClass, ThemeMode
from .scanner import extract_class_regions

__version__ = "0.1.0"

__all__ = [
    "ClassRegion",
    "ColorPair",
    "SkippedClass",
    "ThemeMode",
    "extract_class_regions",
]
