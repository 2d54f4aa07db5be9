from __future__ import annotations

from a11yscan.scanner.tokenizer import (
    ClassCall,
    CloseTag,
    Comment,
    OpenTag,
    iter_class_attributes,
    iter_tokens,
)


def test_tokens_in_source_order() -> None:
    text = '// hi\n<Card title="x"><img src="/a.png" /></Card>\nconst c = cn("p-2")'

    tokens = list(iter_tokens(text))

    assert [type(token) for token in tokens] == [Comment, OpenTag, OpenTag, CloseTag, ClassCall]
    assert tokens[0].body == " hi"
    assert tokens[1].name == "Card"
    assert tokens[1].raw == '<Card title="x">'
    assert tokens[1].is_self_closing is False
    assert tokens[2].is_self_closing is True
    assert tokens[3].name == "Card"
    assert tokens[4].callee == "cn"
    assert tokens[4].body == '"p-2"'


def test_fragments_and_generics_are_not_tags() -> None:
    tokens = list(iter_tokens("<><p>x</p></> Array<string> a < b"))

    names = [(type(token).__name__, token.name) for token in tokens]
    assert names == [("OpenTag", "p"), ("CloseTag", "p")]


def test_fragment_children_are_element_text() -> None:
    tokens = list(iter_tokens("<>it's // fine<b>x</b></>\nconst s = '<i>'"))

    names = [(type(token).__name__, token.name) for token in tokens]
    assert names == [("OpenTag", "b"), ("CloseTag", "b")]


def test_generic_arrow_parameter_is_not_a_tag() -> None:
    tokens = list(iter_tokens('const id = <T,>(value: T) => value;\nconst c = cn("p-2")'))

    assert [type(token) for token in tokens] == [ClassCall]


def test_expression_inside_element_text_returns_to_code() -> None:
    tokens = list(iter_tokens('<ul>{items.map((item) => <li key={item}>{"</ul>"}</li>)}</ul>'))

    names = [(type(token).__name__, token.name) for token in tokens]
    assert names == [("OpenTag", "ul"), ("OpenTag", "li"), ("CloseTag", "li"), ("CloseTag", "ul")]


def test_member_expression_tag_names() -> None:
    tokens = list(iter_tokens("<motion.div className='x'></motion.div>"))

    assert tokens[0].name == "motion.div"
    assert tokens[1].name == "motion.div"


def test_unterminated_block_comment_is_stepped_over() -> None:
    tokens = list(iter_tokens('/* open <p className="a">'))

    assert [type(token) for token in tokens] == [OpenTag]


def test_parens_inside_strings_do_not_close_call() -> None:
    tokens = list(iter_tokens('cva("a)b", { x: ")" })'))

    assert tokens == [ClassCall(callee="cva", body='"a)b", { x: ")" }', offset=0)]


def test_class_attributes_with_offsets() -> None:
    raw = '<div id="a" className="p-2 text-white">'

    assert list(iter_class_attributes(raw)) == [("p-2 text-white", 12)]


def test_nested_class_name_is_not_an_attribute() -> None:
    raw = '<Tooltip render={() => <b className="x" />} className="text-black">'

    assert [content for content, _ in iter_class_attributes(raw)] == ["text-black"]


def test_class_name_inside_string_is_ignored() -> None:
    raw = "<div title=\"className='x'\" data-x=\"1\">"

    assert list(iter_class_attributes(raw)) == []
