"""Indentation and folding of containers.

Each container decides up front whether its children share a line
("inline") or get one indented line each ("block").
The decision depends on the first thing the container will emit,
which the caller has to peek before opening the container.

Example: block layout puts each item on its own line, with a trailing comma.

>>> layout = Layout()
>>> with layout.block(TokenType.L_BRACKET, TokenType.R_BRACKET, Fold.BLOCK):
...     for index in range(2):
...         layout.push(LiteralToken(index))
...         layout.separator(is_last=index == 1)
>>> [(line.indent, line.text) for line in layout.sections.current.lines]
[(0, '['), (1, '0,'), (1, '1,'), (0, ']')]

Example: inline layout only separates items.

>>> layout = Layout()
>>> with layout.block(TokenType.L_BRACKET, TokenType.R_BRACKET, Fold.INLINE):
...     for index in range(2):
...         layout.push(LiteralToken(index))
...         layout.separator(is_last=index == 1)
>>> [line.text for line in layout.sections.current.lines]
['[0, 1]']
"""

import contextlib
import enum
import typing as t
from dataclasses import dataclass, field

from ._errors import UnreachableTokenError
from ._schema import FoldStyle
from ._sections import SectionBuilder
from ._tokens import (
    IdentifierToken,
    LiteralToken,
    LiteralValue,
    SpaceToken,
    SyntaxToken,
    Token,
    TokenType,
)


class Emission(enum.Enum):
    """The kind of the first unit that a container's first child emits."""

    CONTAINER = enum.auto()
    """An opening bracket or brace."""

    ATOM = enum.auto()
    """Anything else, e.g. a literal or a property name."""


class Fold(enum.Enum):
    EMPTY = enum.auto()
    INLINE = enum.auto()
    BLOCK = enum.auto()


def decide_fold(style: FoldStyle, first: Emission | None) -> Fold:
    """Choose the layout of a container, given what its first child looks like.

    Empty containers always stay on one line:

    >>> decide_fold(FoldStyle.BLOCK, None).name
    'EMPTY'

    An explicit style wins:

    >>> decide_fold(FoldStyle.INLINE, Emission.ATOM).name
    'INLINE'

    Otherwise, directly nested containers are not indented twice:

    >>> decide_fold(FoldStyle.AUTO, Emission.CONTAINER).name
    'INLINE'
    >>> decide_fold(FoldStyle.AUTO, Emission.ATOM).name
    'BLOCK'
    """
    if first is None:
        return Fold.EMPTY
    match style:
        case FoldStyle.INLINE:
            return Fold.INLINE
        case FoldStyle.BLOCK:
            return Fold.BLOCK
        case FoldStyle.AUTO:
            if first is Emission.CONTAINER:
                return Fold.INLINE
            return Fold.BLOCK
        case other:  # pragma: no cover
            t.assert_never(other)


@dataclass
class Layout:
    """Mutable state for laying out tokens during one render."""

    sections: SectionBuilder = field(default_factory=SectionBuilder)
    indent: int = 0
    inline_stack: list[bool] = field(default_factory=lambda: [False])
    """One entry per open container, True if it is laid out inline."""

    def is_inline(self) -> bool:
        return self.inline_stack[-1]

    def push(self, token: Token) -> None:
        self.sections.line_for_push(indent=self.indent).tokens.append(token)

    def push_literal(self, value: LiteralValue) -> None:
        self.push(LiteralToken(value))

    def push_identifier(self, name: str) -> None:
        """Emit a property name that links to the current section."""
        anchor = self.sections.current_id()
        self.push(IdentifierToken(name, anchor))

    def push_token(self, token: TokenType) -> None:
        match token:
            case TokenType.SPACE:
                self.push(SpaceToken())
            case TokenType.NL:
                self.sections.new_line()
            case (
                TokenType.L_CURLY
                | TokenType.R_CURLY
                | TokenType.L_BRACKET
                | TokenType.R_BRACKET
                | TokenType.COMMA
                | TokenType.COLON
                | TokenType.PIPE
            ):
                self.push(SyntaxToken(token.value))
            case other:
                raise UnreachableTokenError(f"Unsupported token type {other!r}")

    def push_tokens(self, *tokens: TokenType) -> None:
        for token in tokens:
            self.push_token(token)

    @contextlib.contextmanager
    def block(self, open: TokenType, close: TokenType, fold: Fold) -> t.Iterator[None]:
        """Surround the children emitted in this scope with punctuation."""
        self.push_token(open)
        match fold:
            case Fold.EMPTY:
                pass
            case Fold.INLINE:
                self.inline_stack.append(True)
            case Fold.BLOCK:
                self.push_token(TokenType.NL)
                self.indent += 1
                self.inline_stack.append(False)
            case other:  # pragma: no cover
                t.assert_never(other)

        yield

        if fold is not Fold.EMPTY:
            was_inline = self.inline_stack.pop()
            if not was_inline:
                self.indent -= 1
        self.push_token(close)

    def separator(self, *, is_last: bool) -> None:
        """Emit the separator after an array item or object property."""
        if self.is_inline():
            if not is_last:
                self.push_tokens(TokenType.COMMA, TokenType.SPACE)
        else:
            self.push_tokens(TokenType.COMMA, TokenType.NL)
