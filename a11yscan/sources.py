"""Discovery of the source files an audit scans."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Pattern, Sequence

from .config import AuditConfig

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    ".next",
    ".turbo",
    ".cache",
    "dist",
    "build",
    "coverage",
    "__pycache__",
}


@dataclass(frozen=True)
class SourceFile:
    path: Path
    rel_path: str


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or exclude_paths."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            if self.directory_only and rel_path.startswith(f"{self.pattern}/"):
                return True
            return False

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if pattern.startswith("!"):
        negate = not negate
        pattern = pattern[1:]
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        rule = build_ignore_rule(line)
        if rule is not None:
            rules.append(rule)
    return rules


def load_ignore_rules(root: Path, exclude_paths: Sequence[str] = ()) -> List[IgnoreRule]:
    rules = _parse_gitignore(root / ".gitignore")
    for pattern in exclude_paths:
        rule = build_ignore_rule(pattern)
        if rule is not None:
            rules.append(rule)
    return rules


def should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def glob_to_regex(pattern: str) -> Pattern[str]:
    """Compile a ``src`` glob where ``**/`` spans directories and ``{a,b}`` alternates."""
    parts: List[str] = []
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if pattern.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
            continue
        if pattern.startswith("**", index):
            parts.append(".*")
            index += 2
            continue
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "{":
            close = pattern.find("}", index)
            if close == -1:
                parts.append(re.escape(char))
            else:
                options = pattern[index + 1 : close].split(",")
                parts.append("(?:" + "|".join(re.escape(option) for option in options) + ")")
                index = close
        else:
            parts.append(re.escape(char))
        index += 1
    return re.compile("^" + "".join(parts) + "$")


def _iter_files(root: Path, rules: Sequence[IgnoreRule]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        filtered_dirs = []
        for name in dirnames:
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if should_ignore(rel_path, True, rules):
                continue
            filtered_dirs.append(name)
        dirnames[:] = filtered_dirs

        for filename in filenames:
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if should_ignore(rel_path, False, rules):
                continue
            yield current_dir / filename


def discover_sources(root: Path, patterns: Sequence[str], exclude_paths: Sequence[str] = ()) -> List[SourceFile]:
    """Return files under ``root`` matching any of ``patterns``, sorted by path."""
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise FileNotFoundError(f"Project path not found: {root}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Project path is not a directory: {root}")

    matchers = [glob_to_regex(pattern[2:] if pattern.startswith("./") else pattern) for pattern in patterns]
    rules = load_ignore_rules(root_path, exclude_paths)

    sources: List[SourceFile] = []
    for path in _iter_files(root_path, rules):
        rel_path = path.relative_to(root_path).as_posix()
        if any(matcher.match(rel_path) for matcher in matchers):
            sources.append(SourceFile(path=path, rel_path=rel_path))
    sources.sort(key=lambda item: item.rel_path)
    return sources


def discover_config_sources(config: AuditConfig) -> List[SourceFile]:
    return discover_sources(config.root, config.src, config.exclude_paths)


__all__ = [
    "IgnoreRule",
    "SourceFile",
    "build_ignore_rule",
    "discover_config_sources",
    "discover_sources",
    "glob_to_regex",
    "load_ignore_rules",
    "should_ignore",
]
