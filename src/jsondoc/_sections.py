"""Group emitted lines into sections that can be linked to.

A documented property gets its own section, anchored at its property path.
Once that property is done, the section is closed,
and whatever comes next lands in a new anonymous section.

>>> builder = SectionBuilder()
>>> builder.line_for_push(indent=0).tokens.append(SyntaxToken("{"))
>>> builder.open("name", Annotation("The name."))
>>> builder.current_id()
'name'
>>> builder.line_for_push(indent=1).tokens.append(SyntaxToken("x"))
>>> builder.close()
>>> builder.current_id() is None
True
>>> builder.line_for_push(indent=0).tokens.append(SyntaxToken("}"))
>>> [(s.id, [line.text for line in s.lines]) for s in builder.sections]
[(None, ['{']), ('name', ['x']), (None, ['}'])]
"""

from dataclasses import dataclass, field

from ._tokens import Annotation, Document, Line, Section, SyntaxToken


@dataclass
class SectionBuilder:
    sections: list[Section] = field(default_factory=lambda: [Section(id=None)])

    anchored: set[str] = field(default_factory=set)
    """Ids that already have a section."""

    @property
    def current(self) -> Section:
        return self.sections[-1]

    def open(self, id: str, header: Annotation) -> None:
        """Start a documented section.

        Only the first section for an id is anchored.
        Repeats, like the same property in later array items,
        keep their header but get no id.

        >>> builder = SectionBuilder()
        >>> for _ in range(2):
        ...     builder.open("item.name", Annotation("Name"))
        ...     builder.close()
        >>> [(s.id, s.header) for s in builder.sections[1:]]
        [('item.name', Annotation(text='Name')), (None, Annotation(text='Name'))]
        """
        if id in self.anchored:
            self.sections.append(Section(id=None, header=header))
            return
        self.anchored.add(id)
        self.sections.append(Section(id=id, header=header))

    def close(self) -> None:
        """Close the current section, unless it is an anonymous one."""
        if self.current.header is not None:
            self.current.closed = True

    def current_id(self) -> str | None:
        if self.current.closed:
            return None
        return self.current.id

    def new_line(self) -> None:
        if self.current.closed:
            self._open_continuation()
            return
        self.current.lines.append(Line())

    def line_for_push(self, *, indent: int) -> Line:
        """Get the line that the next token should be appended to."""
        if self.current.closed:
            self._open_continuation()
        line = self.current.lines[-1]
        if not line.tokens:
            line.indent = indent
        return line

    def _open_continuation(self) -> None:
        self.sections.append(Section(id=None))

    def finish(self, *, active_id: str | None = None) -> Document:
        """Produce the final document, with indentation normalized per section."""
        return Document(
            sections=[_normalized(s, active_id=active_id) for s in self.sections]
        )


def _normalized(section: Section, *, active_id: str | None) -> Section:
    """Rebase line indents onto the least indented non-empty line.

    >>> section = Section(
    ...     id=None,
    ...     lines=[Line(2, [SyntaxToken("a")]), Line(3), Line(4, [SyntaxToken("b")])],
    ... )
    >>> normalized = _normalized(section, active_id=None)
    >>> normalized.base_indent, [line.indent for line in normalized.lines]
    (2, [0, 0, 2])
    """
    base_indent = min((line.indent for line in section.lines if line.tokens), default=0)
    return Section(
        id=section.id,
        header=section.header,
        closed=section.closed,
        lines=[
            Line(
                indent=line.indent - base_indent if line.tokens else 0,
                tokens=list(line.tokens),
            )
            for line in section.lines
        ],
        base_indent=base_indent,
        active=section.id is not None and section.id == active_id,
    )
