from __future__ import annotations

import pytest

from a11yscan.colors import PaletteColorResolver, normalize_hex
from a11yscan.models import ResolvedColor, ThemeMode


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("#FFF", ("#ffffff", None)),
        ("#0008", ("#000000", 0.533)),
        ("#0f172a", ("#0f172a", None)),
        ("#0f172a80", ("#0f172a", 0.502)),
        ("red", None),
        ("#12345", None),
    ],
)
def test_normalize_hex(value, expected) -> None:
    assert normalize_hex(value) == expected


@pytest.fixture
def resolver() -> PaletteColorResolver:
    return PaletteColorResolver(
        {
            "light": {"background": "#ffffff", "primary": "#18181b", "bg-card": "#f4f4f5"},
            "dark": {"background": "#09090b"},
        }
    )


def test_token_and_full_name_lookup(resolver) -> None:
    assert resolver.resolve("bg-background", ThemeMode.LIGHT) == ResolvedColor(hex="#ffffff")
    assert resolver.resolve("text-primary", ThemeMode.LIGHT) == ResolvedColor(hex="#18181b")
    assert resolver.resolve("bg-card", ThemeMode.LIGHT) == ResolvedColor(hex="#f4f4f5")
    assert resolver.resolve("border-t-primary", ThemeMode.LIGHT) == ResolvedColor(hex="#18181b")


def test_dark_palette_falls_back_to_light(resolver) -> None:
    assert resolver.resolve("bg-background", ThemeMode.DARK).hex == "#09090b"
    assert resolver.resolve("text-primary", ThemeMode.DARK).hex == "#18181b"


def test_builtins_arbitrary_and_unresolvable(resolver) -> None:
    assert resolver.resolve("text-white", ThemeMode.LIGHT).hex == "#ffffff"
    assert resolver.resolve("bg-[#0a0a0a]", ThemeMode.LIGHT) == ResolvedColor(hex="#0a0a0a")
    assert resolver.resolve("bg-transparent", ThemeMode.LIGHT) is None
    assert resolver.resolve("text-current", ThemeMode.LIGHT) is None
    assert resolver.resolve("text-brand", ThemeMode.LIGHT) is None
    assert resolver.resolve("bg-[var(--x)]", ThemeMode.LIGHT) is None


def test_opacity_modifiers(resolver) -> None:
    assert resolver.resolve("bg-primary/50", ThemeMode.LIGHT) == ResolvedColor(hex="#18181b", alpha=0.5)
    assert resolver.resolve("bg-[#fff]/[.3]", ThemeMode.LIGHT) == ResolvedColor(hex="#ffffff", alpha=0.3)
    assert resolver.resolve("bg-black/[25%]", ThemeMode.LIGHT) == ResolvedColor(hex="#000000", alpha=0.25)


def test_unknown_theme_name_rejected() -> None:
    with pytest.raises(ValueError):
        PaletteColorResolver({"sepia": {}})
