"""Single-pass extraction of class regions and their inherited context."""

from __future__ import annotations

from .annotations import AnnotationParser
from .context import PORTAL_RESET, ContextTracker
from .extractor import DISABLED_REASON, INVISIBLE_REASON, extract_class_regions

__all__ = [
    "AnnotationParser",
    "ContextTracker",
    "DISABLED_REASON",
    "INVISIBLE_REASON",
    "PORTAL_RESET",
    "extract_class_regions",
]
