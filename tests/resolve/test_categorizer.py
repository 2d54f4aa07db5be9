from __future__ import annotations

from a11yscan.models import InteractiveState, ThemeMode
from a11yscan.resolve.categorizer import (
    categorize_classes,
    is_large_text,
    route,
    strip_variants,
)


def _bases(tagged_list) -> list[str]:
    return [tagged.base for tagged in tagged_list]


def test_strip_variants() -> None:
    tagged = strip_variants("sm:dark:hover:!bg-red-500")

    assert tagged.base == "bg-red-500"
    assert tagged.is_dark is True
    assert tagged.is_interactive is True
    assert tagged.interactive_state == InteractiveState.HOVER


def test_strip_variants_keeps_colons_inside_arbitrary_values() -> None:
    tagged = strip_variants("focus-visible:bg-[url(a:b)]")

    assert tagged.base == "bg-[url(a:b)]"
    assert tagged.interactive_state == InteractiveState.FOCUS_VISIBLE


def test_route() -> None:
    assert route("bg-card") == "bg"
    assert route("text-sm") is None
    assert route("text-white") == "text"
    assert route("border-2") is None
    assert route("divide-gray-200") == "border"
    assert route("ring-offset-2") is None
    assert route("ring-blue-500") == "ring"
    assert route("outline-none") is None
    assert route("outline-red-500") == "outline"


def test_light_mode_drops_dark_classes() -> None:
    result = categorize_classes(["bg-white", "dark:bg-slate-900", "text-black"], ThemeMode.LIGHT)

    assert _bases(result.base.bg) == ["bg-white"]
    assert _bases(result.base.text) == ["text-black"]


def test_dark_mode_replaces_per_bucket() -> None:
    classes = ["bg-white", "dark:bg-slate-900", "text-black", "border-gray-200", "dark:border-gray-800"]

    result = categorize_classes(classes, ThemeMode.DARK)

    assert _bases(result.base.bg) == ["bg-slate-900"]
    assert _bases(result.base.text) == ["text-black"]
    assert _bases(result.base.border) == ["border-gray-800"]


def test_tracked_states_are_bucketed_and_untracked_dropped() -> None:
    classes = [
        "bg-card",
        "hover:bg-red-500",
        "focus-visible:ring-blue-500",
        "active:bg-blue-600",
        "sm:text-white",
        "hover:underline",
    ]

    result = categorize_classes(classes, ThemeMode.LIGHT)

    assert _bases(result.base.bg) == ["bg-card"]
    assert result.base.text == []
    assert [state for state, _ in result.iter_states()] == [
        InteractiveState.HOVER,
        InteractiveState.FOCUS_VISIBLE,
    ]
    assert _bases(result.states[InteractiveState.HOVER].bg) == ["bg-red-500"]
    assert _bases(result.states[InteractiveState.FOCUS_VISIBLE].ring) == ["ring-blue-500"]


def test_dark_only_state_dropped_in_light_mode() -> None:
    result = categorize_classes(["dark:hover:bg-slate-900"], ThemeMode.LIGHT)

    assert result.states == {}


def test_dynamic_tokens_are_set_aside() -> None:
    result = categorize_classes(["bg-${...}", "text-${color}", "p-2"], ThemeMode.LIGHT)

    assert result.dynamic == ["bg-${...}", "text-${color}"]
    assert result.base.is_empty()


def test_large_text() -> None:
    assert is_large_text("text-2xl", False)
    assert is_large_text("text-xl", True)
    assert not is_large_text("text-xl", False)
    assert not is_large_text(None, True)

    bold_heading = categorize_classes(["text-xl", "font-bold", "text-white"], ThemeMode.LIGHT)
    assert bold_heading.is_large_text is True
    assert categorize_classes(["md:text-3xl"], ThemeMode.LIGHT).font_size == "text-3xl"
