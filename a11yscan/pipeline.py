"""Audit orchestration: discover, extract in parallel, expand, resolve per theme."""

from __future__ import annotations

import concurrent.futures
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .colors import ColorResolver, ContrastChecker, ContrastResult, PaletteColorResolver
from .config import AuditConfig
from .logging import get_logger
from .models import ColorPair, FileRegions, SkippedClass, ThemeMode
from .resolve import expand_file_regions, resolve_regions
from .scanner import extract_class_regions
from .sources import SourceFile, discover_config_sources

READ_ERROR_CLASS = "(file)"

_LOGGER = get_logger("pipeline")


@dataclass
class ExtractionResult:
    """Theme-agnostic regions of every readable file plus the read failures."""

    files: List[FileRegions] = field(default_factory=list)
    read_errors: List[SkippedClass] = field(default_factory=list)
    files_scanned: int = 0


@dataclass
class ThemeResult:
    mode: ThemeMode
    pairs: List[ColorPair] = field(default_factory=list)
    skipped: List[SkippedClass] = field(default_factory=list)
    files_scanned: int = 0
    checks: List[ContrastResult] = field(default_factory=list)

    @property
    def ignored(self) -> List[ColorPair]:
        return [pair for pair in self.pairs if pair.ignored]

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            "mode": self.mode.value,
            "files_scanned": self.files_scanned,
            "pairs": [pair.to_dict() for pair in self.pairs],
            "skipped": [item.to_dict() for item in self.skipped],
        }
        if self.checks:
            data["checks"] = [
                {
                    "ratio": check.ratio,
                    "pass_aa": check.pass_aa,
                    "pass_aaa": check.pass_aaa,
                    "apca_lc": check.apca_lc,
                }
                for check in self.checks
            ]
        return data


class _FileReadError(Exception):
    def __init__(self, rel_path: str, message: str) -> None:
        super().__init__(message)
        self.rel_path = rel_path
        self.message = message


def _extract_file(source: SourceFile, config: AuditConfig) -> FileRegions:
    try:
        text = source.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise _FileReadError(source.rel_path, str(exc)) from exc
    regions = extract_class_regions(text, config.containers, config.default_bg, config.portals)
    return FileRegions(rel_path=source.rel_path, regions=regions)


def scan_sources(
    sources: Sequence[SourceFile],
    config: AuditConfig,
    workers: Optional[int] = None,
) -> ExtractionResult:
    """Read and extract every source on a thread pool.

    Results are stored by input index, so the output follows ``sources`` order
    regardless of completion order.
    """
    slots: List[Optional[FileRegions]] = [None] * len(sources)
    errors: List[Optional[SkippedClass]] = [None] * len(sources)
    max_workers = workers or config.workers

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_idx = {
            executor.submit(_extract_file, source, config): index
            for index, source in enumerate(sources)
        }
        for future in concurrent.futures.as_completed(future_to_idx):
            index = future_to_idx[future]
            try:
                slots[index] = future.result()
            except _FileReadError as exc:
                _LOGGER.warning("Skipping %s: %s", exc.rel_path, exc.message)
                errors[index] = SkippedClass(
                    file=exc.rel_path,
                    line=0,
                    class_name=READ_ERROR_CLASS,
                    reason=f"File read error: {exc.message}",
                )

    return ExtractionResult(
        files=[item for item in slots if item is not None],
        read_errors=[item for item in errors if item is not None],
        files_scanned=len(sources),
    )


def resolve_extraction(
    extraction: ExtractionResult,
    resolver: ColorResolver,
    theme_mode: ThemeMode,
) -> ThemeResult:
    result = ThemeResult(mode=theme_mode, files_scanned=extraction.files_scanned)
    result.skipped.extend(extraction.read_errors)
    for item in extraction.files:
        resolved = resolve_regions(item.rel_path, item.regions, resolver, theme_mode)
        result.pairs.extend(resolved.pairs)
        result.skipped.extend(resolved.skipped)
    return result


class AuditPipeline:
    """Runs a full audit for one project configuration."""

    def __init__(
        self,
        config: AuditConfig,
        resolver: Optional[ColorResolver] = None,
        checker: Optional[ContrastChecker] = None,
    ) -> None:
        self.config = config
        self.resolver = resolver or PaletteColorResolver(config.colors)
        self.checker = checker

    def extract(self, sources: Optional[Sequence[SourceFile]] = None) -> ExtractionResult:
        if sources is None:
            sources = discover_config_sources(self.config)
        _LOGGER.info("Scanning %d source file(s) under %s", len(sources), self.config.root)
        extraction = scan_sources(sources, self.config)
        extraction.files = expand_file_regions(extraction.files, self.config.check_all_variants)
        return extraction

    def run(self, sources: Optional[Sequence[SourceFile]] = None) -> List[ThemeResult]:
        extraction = self.extract(sources)
        results: List[ThemeResult] = []
        for mode in self.config.theme_modes:
            result = resolve_extraction(extraction, self.resolver, mode)
            if self.checker is not None:
                page_background = self.config.page_bg[mode]
                result.checks = [self.checker.check(pair, page_background) for pair in result.pairs]
            _LOGGER.debug(
                "%s theme: %d pair(s), %d skipped", mode.value, len(result.pairs), len(result.skipped)
            )
            results.append(result)
        return results


__all__ = [
    "AuditPipeline",
    "ExtractionResult",
    "READ_ERROR_CLASS",
    "ThemeResult",
    "resolve_extraction",
    "scan_sources",
]
