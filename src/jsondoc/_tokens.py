"""The rendered document: sections of lines of tokens.

A `Document` carries every layout decision, so that presentation
adapters only need to apply styling and hyperlinks.
"""

import enum
import json
import typing as t
from dataclasses import dataclass, field

import pydantic

type Category = t.Literal[
    "punctuation", "string", "number", "keyword", "null", "attr-name"
]
"""Style lookup key for a token, using the usual syntax-highlighting names."""

type LiteralValue = bool | int | float | str | None


class TokenType(enum.Enum):
    """Punctuation and whitespace that the layout engine knows how to emit."""

    L_CURLY = "{"
    R_CURLY = "}"
    L_BRACKET = "["
    R_BRACKET = "]"
    COMMA = ","
    COLON = ":"
    PIPE = "|"
    SPACE = " "
    NL = "\n"


@dataclass(frozen=True)
class LiteralToken:
    """An example value.

    >>> [LiteralToken(v).text for v in ("a", 1, True, None)]
    ['"a"', '1', 'true', 'null']
    >>> [LiteralToken(v).category for v in ("a", 1, True, None)]
    ['string', 'number', 'keyword', 'null']
    """

    value: LiteralValue
    kind: t.Literal["literal"] = "literal"

    @property
    def category(self) -> Category:
        match self.value:
            case None:
                return "null"
            case bool():
                return "keyword"
            case int() | float():
                return "number"
            case str():
                return "string"
            case other:  # pragma: no cover
                t.assert_never(other)

    @property
    def text(self) -> str:
        return json.dumps(self.value, ensure_ascii=False)


@dataclass(frozen=True)
class SyntaxToken:
    text: str
    kind: t.Literal["syntax"] = "syntax"

    @property
    def category(self) -> Category:
        return "punctuation"


@dataclass(frozen=True)
class IdentifierToken:
    """A property name, linking to the section it was emitted in."""

    name: str
    anchor: str | None
    kind: t.Literal["identifier"] = "identifier"

    @property
    def category(self) -> Category:
        return "attr-name"

    @property
    def text(self) -> str:
        return self.name


@dataclass(frozen=True)
class ReferenceToken:
    """A pointer to another documented property."""

    target: str
    """The anchor id of the referenced property."""
    kind: t.Literal["reference"] = "reference"

    @property
    def category(self) -> Category:
        return "attr-name"

    @property
    def text(self) -> str:
        return f"See {self.target}"


@dataclass(frozen=True)
class SpaceToken:
    kind: t.Literal["space"] = "space"

    @property
    def category(self) -> None:
        return None

    @property
    def text(self) -> str:
        return " "


Token: t.TypeAlias = t.Annotated[
    LiteralToken | SyntaxToken | IdentifierToken | ReferenceToken | SpaceToken,
    pydantic.Field(discriminator="kind"),
]


@dataclass
class Line:
    indent: int = 0
    """Nesting depth, fixed when the first token is pushed."""
    tokens: list[Token] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(token.text for token in self.tokens)


@dataclass(frozen=True)
class Annotation:
    """Documentation text shown above a section."""

    text: str


@dataclass
class Section:
    id: str | None
    """The dotted property path, or None for continuations and repeated paths."""
    header: Annotation | None = None
    closed: bool = False
    lines: list[Line] = field(default_factory=lambda: [Line()])
    base_indent: int = 0
    """Indentation of the section as a whole, line indents are relative to it."""
    active: bool = False
    """Whether this section is the current navigation target."""

    def is_empty(self) -> bool:
        return not any(line.tokens for line in self.lines)


class Anchor(t.TypedDict):
    id: str
    annotation: str


@dataclass
class Document:
    sections: list[Section]

    def anchors(self) -> list[Anchor]:
        """All documented sections, in document order."""
        return [
            Anchor(id=section.id, annotation=section.header.text)
            for section in self.sections
            if section.id is not None and section.header is not None
        ]

    def tokens(self) -> t.Iterator[Token]:
        for section in self.sections:
            for line in section.lines:
                yield from line.tokens
