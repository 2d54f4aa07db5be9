from __future__ import annotations

from a11yscan.scanner.lexing import (
    DYNAMIC_PLACEHOLDER,
    LineIndex,
    extract_balanced_parens,
    extract_string_literals,
    is_ident_char_before,
    skip_string,
    split_region_classes,
    strip_template_expressions,
)


def test_line_index() -> None:
    index = LineIndex("a\nbc\n\nd")

    assert [index.line_at(offset) for offset in (0, 1, 2, 4, 5, 6)] == [1, 1, 2, 2, 3, 4]
    assert len(index) == 4


def test_is_ident_char_before() -> None:
    assert is_ident_char_before("a<b", 1)
    assert is_ident_char_before("x_<", 2)
    assert not is_ident_char_before(" <", 1)
    assert not is_ident_char_before("<", 0)


def test_skip_string_respects_escapes() -> None:
    text = r'"a\"b" rest'
    assert skip_string(text, 0) == 6
    assert skip_string('"open', 0) == 5


def test_extract_balanced_parens() -> None:
    assert extract_balanced_parens('f(a, (b), ")")', 1) == ('a, (b), ")"', 13)
    assert extract_balanced_parens("f(a", 1) is None
    assert extract_balanced_parens("f", 0) is None


def test_strip_template_expressions() -> None:
    assert strip_template_expressions("p-2 ${a} m-1") == "p-2   m-1"
    assert strip_template_expressions("bg-${tone}") == "bg-" + DYNAMIC_PLACEHOLDER
    assert strip_template_expressions("${a}-x y") == DYNAMIC_PLACEHOLDER + "-x y"


def test_extract_string_literals() -> None:
    body = "\"p-2  text-white\", active && 'bg-card', `m-${x} ring-1`"

    assert extract_string_literals(body) == ["p-2", "text-white", "bg-card", "m-${...}", "ring-1"]


def test_split_region_classes() -> None:
    assert split_region_classes(" a  b ") == ["a", "b"]
    assert split_region_classes('"a b", c && "d"') == ["a", "b", "d"]
