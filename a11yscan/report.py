"""Rendering of audit results as JSON or Markdown."""

from __future__ import annotations

import json
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Sequence

from jinja2 import Environment, FileSystemLoader

from .models import ColorPair, PairType
from .pipeline import ThemeResult

_TEMPLATE_NAME = "report.md.j2"
SKIPPED_LIMIT = 50


def render_json(results: Sequence[ThemeResult]) -> str:
    payload = {"themes": [result.to_dict() for result in results]}
    return json.dumps(payload, indent=2)


def _create_env(templates_dir: Path | None = None) -> Environment:
    directories = []
    if templates_dir:
        directories.append(str(templates_dir))
    directories.append(str(Path(__file__).with_name("templates")))
    return Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def _color_label(cls: str, hex_value: str | None) -> str:
    return f"{cls} ({hex_value})" if hex_value else f"{cls} (unresolved)"


def _pair_row(pair: ColorPair) -> Dict[str, object]:
    return {
        "line": pair.line,
        "state": pair.interactive_state.value if pair.interactive_state else "base",
        "type": pair.pair_type.value,
        "background": _color_label(pair.bg_class, pair.bg_hex),
        "foreground": _color_label(pair.text_class, pair.text_hex),
        "large": "yes" if pair.is_large_text else ("-" if pair.is_large_text is None else "no"),
        "opacity": f"{pair.effective_opacity:.2f}" if pair.effective_opacity is not None else "",
        "source": pair.context_source.value,
        "reason": pair.ignore_reason or "",
    }


def _group_by_file(pairs: Sequence[ColorPair]) -> Dict[str, List[Dict[str, object]]]:
    grouped: Dict[str, List[Dict[str, object]]] = defaultdict(list)
    for pair in pairs:
        grouped[pair.file].append(_pair_row(pair))
    return dict(grouped)


def _theme_context(result: ThemeResult) -> Dict[str, object]:
    active = [pair for pair in result.pairs if not pair.ignored]
    text_pairs = [pair for pair in active if pair.pair_type == PairType.TEXT]
    non_text_pairs = [pair for pair in active if pair.pair_type != PairType.TEXT]

    seen = set()
    skipped = []
    for item in result.skipped:
        key = (item.file, item.line, item.class_name)
        if key in seen:
            continue
        seen.add(key)
        skipped.append(item)

    return {
        "mode": result.mode.value,
        "files_scanned": result.files_scanned,
        "total_pairs": len(result.pairs),
        "text_count": len(text_pairs),
        "non_text_count": len(non_text_pairs),
        "ignored_count": len(result.ignored),
        "skipped_count": len(skipped),
        "text_files": _group_by_file(text_pairs),
        "non_text_files": _group_by_file(non_text_pairs),
        "ignored_files": _group_by_file(result.ignored),
        "skipped": skipped[:SKIPPED_LIMIT],
        "skipped_overflow": max(len(skipped) - SKIPPED_LIMIT, 0),
    }


def render_markdown(results: Sequence[ThemeResult], templates_dir: Path | None = None) -> str:
    env = _create_env(templates_dir)
    template = env.get_template(_TEMPLATE_NAME)
    return template.render(themes=[_theme_context(result) for result in results])


def render_report(results: Sequence[ThemeResult], report_format: str = "markdown") -> str:
    if report_format == "json":
        return render_json(results)
    if report_format == "markdown":
        return render_markdown(results)
    raise ValueError(f"Unsupported report format: {report_format}")


__all__ = ["render_json", "render_markdown", "render_report"]
