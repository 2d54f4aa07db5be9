from __future__ import annotations

from a11yscan.models import ClassRegion, FileRegions
from a11yscan.resolve.cva import (
    expand_cva_region,
    expand_cva_regions,
    expand_file_regions,
    find_closing_brace,
    is_cva_content,
    parse_cva_variants,
)

BUTTON_CVA = """
  "inline-flex rounded-md",
  {
    variants: {
      variant: {
        default: "bg-primary text-primary-foreground",
        destructive: "bg-destructive text-white",
        ghost: "hover:bg-accent",
      },
      size: {
        sm: "h-8 px-3",
        lg: "h-10 px-6",
      },
    },
    compoundVariants: [{ variant: "ghost", size: "sm", class: "bg-red-500" }],
    defaultVariants: {
      variant: "default",
      size: "sm",
    },
  }
"""


def _region(content: str = BUTTON_CVA) -> ClassRegion:
    return ClassRegion(content=content, start_line=3, context_bg="bg-card")


def test_detects_cva_content() -> None:
    assert is_cva_content(BUTTON_CVA)
    assert not is_cva_content('"p-2", isOpen && "bg-card"')
    assert not is_cva_content("variants: foo")


def test_parse_cva_variants() -> None:
    config = parse_cva_variants(BUTTON_CVA)

    assert config.base == "inline-flex rounded-md"
    assert [axis.name for axis in config.axes] == ["variant", "size"]
    assert [option.name for option in config.axes[0].options] == ["default", "destructive", "ghost"]
    assert config.defaults == {"variant": "default", "size": "sm"}


def test_default_expansion_yields_one_region() -> None:
    expanded = expand_cva_region(_region())

    assert len(expanded) == 1
    assert expanded[0].content == "inline-flex rounded-md bg-primary text-primary-foreground h-8 px-3"
    assert expanded[0].start_line == 3
    assert expanded[0].context_bg == "bg-card"


def test_exhaustive_expansion_adds_each_non_default_option() -> None:
    expanded = expand_cva_region(_region(), check_all_variants=True)

    assert [region.content for region in expanded[1:]] == [
        "inline-flex rounded-md bg-destructive text-white",
        "inline-flex rounded-md hover:bg-accent",
        "inline-flex rounded-md h-10 px-6",
    ]
    assert len(expanded) == 1 + (3 - 1) + (2 - 1)
    assert all("bg-red-500" not in region.content for region in expanded)


def test_axis_without_default_is_not_in_default_combination() -> None:
    content = '"p-2", { variants: { tone: { info: "bg-blue-600", warn: "bg-red-500" } } }'

    default_only = expand_cva_region(_region(content))
    exhaustive = expand_cva_region(_region(content), check_all_variants=True)

    assert [region.content for region in default_only] == ["p-2"]
    assert [region.content for region in exhaustive] == ["p-2", "p-2 bg-blue-600", "p-2 bg-red-500"]


def test_non_cva_regions_pass_through_in_order() -> None:
    plain = ClassRegion(content="text-white", start_line=1, context_bg="bg-background")

    regions = expand_cva_regions([plain, _region()])

    assert regions[0] is plain
    assert len(regions) == 2


def test_expand_file_regions_keeps_paths() -> None:
    files = [FileRegions(rel_path="src/button.tsx", regions=[_region()])]

    expanded = expand_file_regions(files, check_all_variants=True)

    assert expanded[0].rel_path == "src/button.tsx"
    assert len(expanded[0].regions) == 4


def test_find_closing_brace_skips_strings() -> None:
    content = '{ a: "}", b: { c: 1 } }'

    assert find_closing_brace(content, 0) == len(content) - 1
    assert find_closing_brace("{ open", 0) == -1
