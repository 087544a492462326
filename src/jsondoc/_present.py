r"""Show a rendered document as plain text or on the console.

Example: annotations become comments above their section.

>>> from jsondoc import render
>>> doc = render(
...     {
...         "type": "object",
...         "properties": {
...             "name": {"type": "string", "examples": ["Ada"], "title": "Full name"},
...             "age": {"type": "number", "default": 36},
...         },
...     }
... )
>>> print(text_from_document(doc))
// Full name
name: "Ada",
age: 36,
"""

import re
import typing as t

import rich.console
import rich.markdown
import rich.padding
import rich.style
import rich.text

from ._theme import StyleLookup, rich_style_from_css
from ._tokens import Document, IdentifierToken, Line, ReferenceToken, Section


def text_from_document(document: Document, *, indent_width: int = 2) -> str:
    """Render the document as plain text, without styles or links."""
    return "\n".join(_text_lines(document, indent_width=indent_width))


def _text_lines(document: Document, *, indent_width: int) -> t.Iterator[str]:
    for section in document.sections:
        margin = " " * (section.base_indent * indent_width)
        if section.header is not None:
            for line in section.header.text.splitlines():
                yield f"{margin}// {line}" if line else f"{margin}//"
        for line in section.lines:
            if line.tokens:
                yield margin + " " * (line.indent * indent_width) + line.text


def rich_from_document(
    document: Document,
    *,
    styles: StyleLookup | None = None,
    indent_width: int = 2,
) -> rich.console.Group:
    """Render the document for the console.

    Tokens are styled by category, and property names link to their section.

    >>> from jsondoc import render
    >>> doc = render(
    ...     {
    ...         "type": "object",
    ...         "properties": {
    ...             "point": {
    ...                 "type": "array",
    ...                 "items": {"type": "number"},
    ...                 "exampleItems": [1, 2],
    ...                 "foldStyle": False,
    ...             },
    ...         },
    ...     }
    ... )
    >>> doctest_render(rich_from_document(doc))
    point: [1, 2],
    """
    if styles is None:
        styles = StyleLookup.from_theme()
    return rich.console.Group(
        *(
            _rich_section(section, styles=styles, indent_width=indent_width)
            for section in document.sections
            if section.header is not None or not section.is_empty()
        )
    )


def _rich_section(
    section: Section, *, styles: StyleLookup, indent_width: int
) -> rich.console.RenderableType:
    renderables: list[rich.console.RenderableType] = []
    if section.header is not None:
        header_key = "activeHeader" if section.active else "inactiveHeader"
        header_style = rich_style_from_css(
            {**styles.extra_css("annotation"), **styles.extra_css(header_key)}
        )
        renderables.append(
            rich.markdown.Markdown(
                section.header.text, style=header_style, hyperlinks=False
            )
        )
    renderables.extend(
        _rich_line(line, styles=styles, indent_width=indent_width)
        for line in section.lines
        if line.tokens
    )
    return rich.padding.Padding(
        rich.console.Group(*renderables),
        pad=(0, 0, 0, section.base_indent * indent_width),
    )


def _rich_line(line: Line, *, styles: StyleLookup, indent_width: int) -> rich.text.Text:
    text = rich.text.Text(
        " " * (line.indent * indent_width),
        style=rich_style_from_css(styles.extra_css("section")),
        no_wrap=True,
        overflow="ellipsis",
    )
    for token in line.tokens:
        match token:
            case IdentifierToken(anchor=str(anchor)):
                text.append(token.text, styles.rich(token.category) + _link(anchor))
            case ReferenceToken(target=target):
                text.append("See ")
                text.append(target, styles.rich(token.category) + _link(target))
            case _:
                text.append(token.text, styles.rich(token.category))
    return text


def _link(anchor: str) -> rich.style.Style:
    return rich.style.Style(link=f"#{anchor}")


def doctest_render(renderable: rich.console.RenderableType, *, width: int = 80) -> None:
    """Print any renderable via Rich console formatting, intended for tests."""
    from io import StringIO  # noqa: PLC0415

    file = StringIO()
    rich.console.Console(width=width, file=file).print(renderable)
    print(re.sub(r"(?m) +$", "", file.getvalue().strip()))  # strip trailing space
