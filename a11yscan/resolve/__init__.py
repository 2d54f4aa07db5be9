"""Turn extracted regions into colour pairs for a theme mode."""

from __future__ import annotations

from .categorizer import categorize_classes, is_large_text, strip_variants
from .cva import expand_cva_regions, expand_file_regions, is_cva_content
from .pairs import resolve_region, resolve_regions

__all__ = [
    "categorize_classes",
    "expand_cva_regions",
    "expand_file_regions",
    "is_cva_content",
    "is_large_text",
    "resolve_region",
    "resolve_regions",
    "strip_variants",
]
