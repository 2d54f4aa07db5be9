"""Configuration loading for a11yscan (.a11y-audit.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .models import ThemeMode

CONFIG_FILENAME = ".a11y-audit.yml"
REPORT_FORMATS = ("json", "markdown")

DEFAULT_SRC = ["src/**/*.tsx", "src/**/*.jsx"]
DEFAULT_BG = "bg-background"
DEFAULT_PAGE_BG = {ThemeMode.LIGHT: "#ffffff", ThemeMode.DARK: "#09090b"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ReportConfig:
    """Report rendering settings."""

    format: str = "markdown"


@dataclass
class AuditConfig:
    """Represents the settings defined in .a11y-audit.yml."""

    root: Path
    src: List[str] = field(default_factory=lambda: list(DEFAULT_SRC))
    exclude_paths: List[str] = field(default_factory=list)
    default_bg: str = DEFAULT_BG
    containers: Dict[str, str] = field(default_factory=dict)
    portals: Dict[str, str] = field(default_factory=dict)
    dark: bool = True
    check_all_variants: bool = False
    workers: Optional[int] = None
    page_bg: Dict[ThemeMode, str] = field(default_factory=lambda: dict(DEFAULT_PAGE_BG))
    colors: Dict[str, Dict[str, str]] = field(default_factory=dict)
    report: ReportConfig = field(default_factory=ReportConfig)

    @property
    def theme_modes(self) -> List[ThemeMode]:
        modes = [ThemeMode.LIGHT]
        if self.dark:
            modes.append(ThemeMode.DARK)
        return modes


def load_config(config_path: Path) -> AuditConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AuditConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = AuditConfig(root=root)

    src = _as_str_list(data.get("src"))
    if src:
        config.src = src
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))
    config.default_bg = _as_str(data.get("default_bg")) or DEFAULT_BG
    config.containers = _as_str_dict(data.get("containers"))
    config.portals = _as_str_dict(data.get("portals"))

    dark = _as_bool(data.get("dark"))
    if dark is not None:
        config.dark = dark
    config.check_all_variants = _as_bool(data.get("check_all_variants")) or False

    workers = _as_int(data.get("workers"))
    if workers is not None and workers < 1:
        raise ConfigError("workers must be a positive integer")
    config.workers = workers

    page_bg_data = _as_dict(data.get("page_bg"))
    for mode in ThemeMode:
        value = _as_str(page_bg_data.get(mode.value))
        if value:
            config.page_bg[mode] = value

    colors_data = _as_dict(data.get("colors"))
    for mode_name, palette in colors_data.items():
        if mode_name not in {mode.value for mode in ThemeMode}:
            raise ConfigError(f"Unknown colors theme '{mode_name}' (expected light or dark)")
        config.colors[mode_name] = _as_str_dict(palette)

    report_data = _as_dict(data.get("report"))
    if report_data:
        report_format = _as_str(report_data.get("format")) or config.report.format
        if report_format not in REPORT_FORMATS:
            raise ConfigError(
                f"Unsupported report format '{report_format}' (expected one of {', '.join(REPORT_FORMATS)})"
            )
        config.report = ReportConfig(format=report_format)

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


def _as_str_dict(value: Any) -> Dict[str, str]:
    result: Dict[str, str] = {}
    for key, item in _as_dict(value).items():
        text = _as_str(item)
        if text is not None:
            result[str(key)] = text
    return result


__all__ = [
    "AuditConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "ReportConfig",
    "load_config",
]
