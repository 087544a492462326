import typing as t

import pytest

from jsondoc import UnreachableTokenError
from jsondoc._layout import Emission, Fold, Layout, decide_fold
from jsondoc._schema import FoldStyle
from jsondoc._tokens import Annotation, IdentifierToken, TokenType

from .helpers import parametrized


@parametrized(
    "case",
    {
        "empty-auto": (FoldStyle.AUTO, None, Fold.EMPTY),
        "empty-block": (FoldStyle.BLOCK, None, Fold.EMPTY),
        "empty-inline": (FoldStyle.INLINE, None, Fold.EMPTY),
        "auto-container": (FoldStyle.AUTO, Emission.CONTAINER, Fold.INLINE),
        "auto-atom": (FoldStyle.AUTO, Emission.ATOM, Fold.BLOCK),
        "block-container": (FoldStyle.BLOCK, Emission.CONTAINER, Fold.BLOCK),
        "inline-atom": (FoldStyle.INLINE, Emission.ATOM, Fold.INLINE),
    },
)
def test_decide_fold(case: tuple[FoldStyle, Emission | None, Fold]) -> None:
    style, first, expected = case
    assert decide_fold(style, first) is expected


def _lines(layout: Layout) -> list[tuple[int, str]]:
    return [
        (line.indent, line.text)
        for section in layout.sections.sections
        for line in section.lines
        if line.tokens
    ]


def test_empty_block_closes_on_same_line() -> None:
    layout = Layout()
    with layout.block(TokenType.L_CURLY, TokenType.R_CURLY, Fold.EMPTY):
        pass
    assert _lines(layout) == [(0, "{}")]
    assert layout.indent == 0
    assert layout.inline_stack == [False]


def test_block_inside_inline() -> None:
    layout = Layout()
    with layout.block(TokenType.L_BRACKET, TokenType.R_BRACKET, Fold.INLINE):
        with layout.block(TokenType.L_CURLY, TokenType.R_CURLY, Fold.BLOCK):
            layout.push_identifier("a")
            layout.push_tokens(TokenType.COLON, TokenType.SPACE)
            layout.push_literal(1)
            layout.separator(is_last=True)
        layout.separator(is_last=True)
    assert _lines(layout) == [(0, "[{"), (1, "a: 1,"), (0, "}]")]


def test_indent_is_fixed_by_first_token() -> None:
    layout = Layout()
    layout.indent = 3
    layout.push_literal("x")
    layout.indent = 0
    layout.push_tokens(TokenType.COMMA)
    assert _lines(layout) == [(3, '"x",')]


def test_identifier_links_to_current_section() -> None:
    layout = Layout()
    layout.push_identifier("outside")
    layout.sections.open("a", Annotation("A"))
    layout.push_identifier("inside")
    assert _tokens(layout) == [
        IdentifierToken("outside", anchor=None),
        IdentifierToken("inside", anchor="a"),
    ]


def test_unreachable_token() -> None:
    layout = Layout()
    with pytest.raises(UnreachableTokenError) as errinfo:
        layout.push_token(t.cast(TokenType, "?"))
    assert isinstance(errinfo.value, AssertionError)
    assert str(errinfo.value) == "Unsupported token type '?'"


def _tokens(layout: Layout) -> list[t.Any]:
    return [
        token
        for section in layout.sections.sections
        for line in section.lines
        for token in line.tokens
    ]
