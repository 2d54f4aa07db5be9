from __future__ import annotations

import json

import pytest

from a11yscan.models import ColorPair, InteractiveState, PairType, SkippedClass, ThemeMode
from a11yscan.pipeline import ThemeResult
from a11yscan.report import SKIPPED_LIMIT, render_json, render_markdown, render_report


def _result() -> ThemeResult:
    return ThemeResult(
        mode=ThemeMode.LIGHT,
        files_scanned=2,
        pairs=[
            ColorPair(
                file="src/a.tsx",
                line=3,
                bg_class="bg-card",
                text_class="text-white",
                bg_hex="#f4f4f5",
                text_hex="#ffffff",
                is_large_text=False,
            ),
            ColorPair(
                file="src/a.tsx",
                line=4,
                bg_class="(implicit) bg-background",
                text_class="hover:border-gray-200",
                bg_hex=None,
                text_hex="#e5e7eb",
                pair_type=PairType.BORDER,
                interactive_state=InteractiveState.HOVER,
                effective_opacity=0.5,
            ),
            ColorPair(
                file="src/b.tsx",
                line=9,
                bg_class="bg-red-500",
                text_class="text-red-500",
                bg_hex="#ef4444",
                text_hex="#ef4444",
                ignored=True,
                ignore_reason="brand",
            ),
        ],
        skipped=[
            SkippedClass(file="src/b.tsx", line=2, class_name="text-${...}", reason="Dynamic class (template expression)"),
            SkippedClass(file="src/b.tsx", line=2, class_name="text-${...}", reason="Dynamic class (template expression)"),
        ],
    )


def test_render_json_round_trips_through_json() -> None:
    payload = json.loads(render_json([_result()]))

    theme = payload["themes"][0]
    assert theme["mode"] == "light"
    assert theme["files_scanned"] == 2
    assert theme["pairs"][1]["pair_type"] == "border"
    assert theme["pairs"][1]["interactive_state"] == "hover"
    assert "bg_hex" not in theme["pairs"][1]
    assert theme["skipped"][0]["class_name"] == "text-${...}"


def test_render_markdown_sections() -> None:
    markdown = render_markdown([_result()])

    assert markdown.startswith("# Accessibility Contrast Audit")
    assert "## Light theme" in markdown
    assert "| Files scanned | 2 |" in markdown
    assert "| Text pairs (SC 1.4.3) | 1 |" in markdown
    assert "| Non-text pairs (SC 1.4.11) | 1 |" in markdown
    assert "| Ignored (a11y-ignore, disabled, invisible) | 1 |" in markdown
    assert "| Skipped (dynamic/unresolvable) | 1 |" in markdown
    assert "#### `src/a.tsx`" in markdown
    assert "| 3 | base | bg-card (#f4f4f5) | text-white (#ffffff) | no |  | inferred |" in markdown
    assert "| 4 | hover | border | hover:border-gray-200 (#e5e7eb) | (implicit) bg-background (unresolved) | 0.50 | inferred |" in markdown
    assert "| 9 | bg-red-500 (#ef4444) | text-red-500 (#ef4444) | brand |" in markdown


def test_skipped_overflow_row() -> None:
    result = ThemeResult(
        mode=ThemeMode.DARK,
        skipped=[
            SkippedClass(file="a.tsx", line=line, class_name="bg-x", reason="Unresolvable background: bg-x")
            for line in range(SKIPPED_LIMIT + 5)
        ],
    )

    markdown = render_markdown([result])

    assert "## Dark theme" in markdown
    assert "| ... | ... | ... | 5 more skipped |" in markdown


def test_render_report_dispatch() -> None:
    assert render_report([_result()], "json").startswith("{")
    assert render_report([_result()]).startswith("# ")
    with pytest.raises(ValueError):
        render_report([_result()], "html")
