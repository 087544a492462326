"""Render a document as an HTML fragment, e.g. for embedding into docs sites.

Every documented section gets an invisible `<h3>` anchor,
so that property names and references can link to it.

>>> from jsondoc import render
>>> doc = render(
...     {"type": "object", "properties": {"on": {"type": "boolean", "default": True}}}
... )
>>> print(html_from_document(doc, styles=StyleLookup.from_theme(_BARE_THEME)))
<div class="rjd-container" style="padding: 1rem 2rem; padding-top: 2rem; white-space: pre">
<div style="margin-top: -1rem; margin-left: 0px">
<div style="margin-left: 0px; white-space: nowrap; text-overflow: ellipsis; overflow: hidden"><span>on</span><span>:</span> <span>true</span><span>,</span></div>
<div style="margin-left: 0px; white-space: nowrap; text-overflow: ellipsis; overflow: hidden"></div>
</div>
</div>
"""

import html
import typing as t

from ._theme import CssProperties, StyleLookup, Theme, css_declarations
from ._tokens import (
    Document,
    IdentifierToken,
    Line,
    ReferenceToken,
    Section,
    SpaceToken,
    Token,
)

type LinkRenderer = t.Callable[[str, str], str]
"""Produces a hyperlink, given the `href` and the already escaped inner HTML."""

type DescriptionRenderer = t.Callable[[str], str]
"""Turns annotation text into HTML."""

_BARE_THEME: Theme = {"plain": {}, "styles": []}

_SEE_STYLE: CssProperties = {"color": "#ffffff"}


def html_link(href: str, inner_html: str) -> str:
    """The default link primitive, a plain anchor element.

    >>> html_link("#a&b", "<span>a</span>")
    '<a href="#a&amp;b"><span>a</span></a>'
    """
    return f'<a href="{html.escape(href)}">{inner_html}</a>'


def prettify(text: str) -> str:
    """The default description renderer: one paragraph per line.

    >>> print(prettify("Title\\n\\n<b>not bold</b>"))
    <div style="margin-top: 0">Title</div>
    <div style="margin-top: 1rem"></div>
    <div style="margin-top: 1rem">&lt;b&gt;not bold&lt;/b&gt;</div>
    """
    return "\n".join(
        _tag("div", html.escape(line), style={"marginTop": "1rem" if index else "0"})
        for index, line in enumerate(text.split("\n"))
    )


def html_from_document(
    document: Document,
    *,
    styles: StyleLookup | None = None,
    link: LinkRenderer = html_link,
    describe: DescriptionRenderer = prettify,
    indent_size: int = 24,
) -> str:
    """Render the document as HTML with inline styles.

    Args:
      document: the rendered document.
      styles: colors and extra styles, defaults to the default theme.
      link: how hyperlinks are produced, e.g. to integrate with a router.
      describe: how annotations are turned into HTML.
      indent_size: pixels per indentation level.
    """
    if styles is None:
        styles = StyleLookup.from_theme()
    sections = document.sections
    first_has_header = bool(sections) and sections[0].header is not None
    container_style: CssProperties = {
        "padding": "1rem 2rem",
        "paddingTop": "1rem" if first_has_header else "2rem",
        "whiteSpace": "pre",
    }
    renderer = _HtmlRenderer(
        styles=styles, link=link, describe=describe, indent_size=indent_size
    )
    parts = [renderer.section(section) for section in sections]
    return _tag(
        "div",
        "\n" + "".join(part + "\n" for part in parts),
        class_="rjd-container",
        style=container_style | styles.plain | styles.extra_css("container"),
    )


class _HtmlRenderer(t.NamedTuple):
    styles: StyleLookup
    link: LinkRenderer
    describe: DescriptionRenderer
    indent_size: int

    def section(self, section: Section) -> str:
        body = "".join(self.line(line) + "\n" for line in section.lines)
        if section.header is not None:
            header_key = "activeHeader" if section.active else "inactiveHeader"
            parts: list[str] = []
            if section.id is not None:
                parts.append(
                    _tag(
                        "h3",
                        html.escape(section.id),
                        id=section.id,
                        style={
                            "position": "absolute",
                            "display": "block",
                            "marginTop": "-2rem",
                            "width": "100%",
                            "fontSize": 0,
                            "userSelect": "none",
                        }
                        | self.styles.extra_css("anchor"),
                    )
                )
            parts.append(
                _tag(
                    "div",
                    self.describe(section.header.text),
                    class_="rjd-annotation",
                    style={
                        "marginBottom": "1rem",
                        "borderRadius": "var(--ifm-pre-background, 0.25rem)",
                        "padding": "1rem",
                        "whiteSpace": "normal",
                    }
                    | self.styles.extra_css("annotation"),
                )
            )
            header_style: CssProperties = {
                "position": "relative",
                "margin": "1rem -1rem",
                "padding": "1rem",
            }
            wrapper = _tag(
                "div",
                "".join(f"\n{part}" for part in (*parts, body)),
                style=header_style | self.styles.extra_css(header_key),
            )
            body = wrapper + "\n"
        return _tag(
            "div",
            "\n" + body,
            style={
                "marginTop": "-1rem",
                "marginLeft": section.base_indent * self.indent_size,
            },
        )

    def line(self, line: Line) -> str:
        return _tag(
            "div",
            "".join(self.token(token) for token in line.tokens),
            style={
                "marginLeft": line.indent * self.indent_size,
                "whiteSpace": "nowrap",
                "textOverflow": "ellipsis",
                "overflow": "hidden",
            }
            | self.styles.extra_css("section"),
        )

    def token(self, token: Token) -> str:
        match token:
            case SpaceToken():
                return " "
            case IdentifierToken(name=name, anchor=str(anchor)):
                return self.link(f"#{anchor}", self._span(token, name))
            case ReferenceToken(target=target):
                see = _tag("span", "See", style=_SEE_STYLE)
                return f"{see} " + self.link(f"#{target}", self._span(token, target))
            case _:
                return self._span(token, token.text)

    def _span(self, token: Token, text: str) -> str:
        return _tag("span", html.escape(text), style=self.styles.css(token.category))


def _tag(
    name: str,
    inner_html: str,
    *,
    style: t.Mapping[str, str | int | float] | None = None,
    class_: str | None = None,
    id: str | None = None,
) -> str:
    attributes = ""
    if class_ is not None:
        attributes += f' class="{html.escape(class_)}"'
    if id is not None:
        attributes += f' id="{html.escape(id)}"'
    if style:
        attributes += f' style="{html.escape(css_declarations(style))}"'
    return f"<{name}{attributes}>{inner_html}</{name}>"
