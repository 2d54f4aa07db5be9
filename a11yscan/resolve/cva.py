"""Expansion of ``cva()`` variant definitions into concrete class regions.

The body of a ``cva(...)`` call is read textually: the first string literal is
the base class list, ``variants: { axis: { option: "classes" } }`` gives the
options, and ``defaultVariants`` selects one option per axis.
``compoundVariants`` and options whose value is not a string literal are
ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional

from ..models import ClassRegion, FileRegions

_BASE_LITERAL = re.compile(r"^\s*[\"'`]([^\"'`]*)[\"'`]")
_LEADING_QUOTE = re.compile(r"^\s*[\"'`]")
_AXIS = re.compile(r"(\w+)\s*:\s*\{")
_OPTION = re.compile(r"(\w+)\s*:\s*[\"'`]([^\"'`]*)[\"'`]")
_VARIANTS_KEY = re.compile(r"(?<![\w])variants\s*:")
_DEFAULTS_KEY = re.compile(r"(?<![\w])defaultVariants\s*:")


@dataclass(frozen=True)
class CvaOption:
    name: str
    classes: str


@dataclass
class CvaAxis:
    name: str
    options: List[CvaOption] = field(default_factory=list)

    def option(self, name: str) -> Optional[CvaOption]:
        for option in self.options:
            if option.name == name:
                return option
        return None


@dataclass
class CvaConfig:
    base: str
    axes: List[CvaAxis] = field(default_factory=list)
    defaults: Dict[str, str] = field(default_factory=dict)

    def default_classes(self) -> str:
        parts = [self.base]
        for axis in self.axes:
            chosen = self.defaults.get(axis.name)
            option = axis.option(chosen) if chosen is not None else None
            if option is not None:
                parts.append(option.classes)
        return " ".join(part for part in parts if part)


def is_cva_content(content: str) -> bool:
    """Heuristic: a leading string literal followed somewhere by ``variants:``."""
    return bool(_LEADING_QUOTE.match(content)) and "variants:" in content


def extract_cva_base(content: str) -> str:
    match = _BASE_LITERAL.match(content)
    return match.group(1).strip() if match else ""


def find_closing_brace(content: str, open_pos: int) -> int:
    """Index of the ``}`` matching ``content[open_pos]``, or -1.

    Braces inside string and template literals are ignored.
    """
    depth = 0
    quote = None
    for index in range(open_pos, len(content)):
        char = content[index]
        if quote is not None:
            if char == quote and content[index - 1] != "\\":
                quote = None
            continue
        if char in "\"'`":
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return -1


def _object_body(content: str, key: re.Pattern) -> str:
    """Body of the object literal following ``key``, or an empty string."""
    match = key.search(content)
    if match is None:
        return ""
    start = content.find("{", match.end())
    if start == -1:
        return ""
    end = find_closing_brace(content, start)
    if end == -1:
        return ""
    return content[start + 1 : end]


def _parse_axes(block: str) -> List[CvaAxis]:
    axes: List[CvaAxis] = []
    position = 0
    while True:
        match = _AXIS.search(block, position)
        if match is None:
            break
        open_pos = match.end() - 1
        close = find_closing_brace(block, open_pos)
        if close == -1:
            break
        axis = CvaAxis(name=match.group(1))
        for option in _OPTION.finditer(block[open_pos + 1 : close]):
            axis.options.append(CvaOption(name=option.group(1), classes=option.group(2)))
        if axis.options:
            axes.append(axis)
        position = close + 1
    return axes


def parse_cva_variants(content: str) -> CvaConfig:
    config = CvaConfig(base=extract_cva_base(content))
    config.axes = _parse_axes(_object_body(content, _VARIANTS_KEY))
    for match in _OPTION.finditer(_object_body(content, _DEFAULTS_KEY)):
        config.defaults[match.group(1)] = match.group(2)
    return config


def expand_cva_region(region: ClassRegion, check_all_variants: bool = False) -> List[ClassRegion]:
    """Rewrite a ``cva()`` region into concrete class lists.

    The default combination always comes first. With ``check_all_variants``
    every non-default option follows as base plus that option alone; axes are
    never cross-combined.
    """
    config = parse_cva_variants(region.content)
    expanded = [replace(region, content=config.default_classes())]
    if not check_all_variants:
        return expanded
    for axis in config.axes:
        default = config.defaults.get(axis.name)
        for option in axis.options:
            if option.name == default:
                continue
            content = " ".join(part for part in (config.base, option.classes) if part)
            expanded.append(replace(region, content=content))
    return expanded


def expand_cva_regions(
    regions: Iterable[ClassRegion], check_all_variants: bool = False
) -> List[ClassRegion]:
    """Expand ``cva()`` regions in place of the original; others pass through."""
    result: List[ClassRegion] = []
    for region in regions:
        if is_cva_content(region.content):
            result.extend(expand_cva_region(region, check_all_variants))
        else:
            result.append(region)
    return result


def expand_file_regions(files: Iterable[FileRegions], check_all_variants: bool = False) -> List[FileRegions]:
    return [
        FileRegions(rel_path=item.rel_path, regions=expand_cva_regions(item.regions, check_all_variants))
        for item in files
    ]


__all__ = [
    "CvaAxis",
    "CvaConfig",
    "CvaOption",
    "expand_cva_region",
    "expand_cva_regions",
    "expand_file_regions",
    "extract_cva_base",
    "find_closing_brace",
    "is_cva_content",
    "parse_cva_variants",
]
