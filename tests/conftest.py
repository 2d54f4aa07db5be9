from __future__ import annotations

from pathlib import Path

import pytest

from a11yscan.models import ResolvedColor, ThemeMode
from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project_builder(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


class FakeResolver:
    """Resolves exact class names from a per-theme table."""

    def __init__(self, light: dict[str, str], dark: dict[str, str] | None = None) -> None:
        self.tables = {ThemeMode.LIGHT: light, ThemeMode.DARK: dark if dark is not None else light}
        self.calls: list[tuple[str, ThemeMode]] = []

    def resolve(self, class_name: str, theme_mode: ThemeMode) -> ResolvedColor | None:
        self.calls.append((class_name, theme_mode))
        value = self.tables[ThemeMode(theme_mode)].get(class_name)
        if value is None:
            return None
        return ResolvedColor(hex=value)


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver(
        {
            "bg-background": "#ffffff",
            "bg-card": "#f4f4f5",
            "bg-red-500": "#ef4444",
            "bg-blue-600": "#2563eb",
            "bg-slate-900": "#0f172a",
            "text-white": "#ffffff",
            "text-black": "#000000",
            "text-red-500": "#ef4444",
            "text-gray-500": "#6b7280",
            "border-gray-200": "#e5e7eb",
            "ring-blue-500": "#3b82f6",
            "outline-red-500": "#ef4444",
        },
        {
            "bg-background": "#09090b",
            "bg-card": "#18181b",
            "bg-red-500": "#ef4444",
            "bg-slate-900": "#0f172a",
            "text-white": "#ffffff",
            "text-black": "#000000",
            "text-gray-500": "#6b7280",
            "border-gray-200": "#e5e7eb",
        },
    )
