"""Styles for the presentation adapters.

Themes use the shape of syntax-highlighting themes for the web:
a list of CSS property sets, each applying to some token categories.
The console adapter translates the CSS properties it understands into Rich styles.
"""

import logging
import pathlib
import re
import typing as t
from dataclasses import dataclass

import pydantic
import rich.color
import rich.style

from ._tokens import Category
from ._utils import error_context

logger = logging.getLogger(__name__)

CssProperties: t.TypeAlias = dict[str, str | int | float]

type ExtraKey = t.Literal[
    "container",
    "activeHeader",
    "inactiveHeader",
    "annotation",
    "anchor",
    "section",
    "identifier",
]


class ThemeStyle(t.TypedDict):
    types: list[str]
    style: CssProperties


class ExtraTheme(t.TypedDict, total=False):
    """Styles for the document structure, rather than for tokens."""

    container: CssProperties
    activeHeader: CssProperties
    """Header of the section that is the current navigation target."""
    inactiveHeader: CssProperties
    annotation: CssProperties
    anchor: CssProperties
    section: CssProperties
    """Applied to every line."""
    identifier: CssProperties
    """Applied to property names and references, on top of `attr-name`."""


class Theme(t.TypedDict):
    plain: CssProperties
    styles: list[ThemeStyle]
    extra: t.NotRequired[ExtraTheme]


THEME_SCHEMA = pydantic.TypeAdapter(Theme)

DEFAULT_THEME: Theme = {
    "plain": {"color": "#d4d4d4", "backgroundColor": "#1e1e1e"},
    "styles": [
        {"types": ["punctuation"], "style": {"color": "#d4d4d4"}},
        {"types": ["string"], "style": {"color": "#ce9178"}},
        {"types": ["number"], "style": {"color": "#b5cea8"}},
        {"types": ["keyword", "null"], "style": {"color": "#569cd6"}},
        {"types": ["attr-name"], "style": {"color": "#9cdcfe"}},
    ],
    "extra": {
        "activeHeader": {"backgroundColor": "#264f78"},
        "annotation": {"backgroundColor": "#252526", "color": "#d4d4d4"},
    },
}


def load_theme(path: pathlib.Path) -> Theme:
    """Load a theme from a JSON file."""
    with error_context(f"while loading theme {path}"):
        return THEME_SCHEMA.validate_json(path.read_bytes())


@dataclass(frozen=True)
class StyleLookup:
    """Answers "what does category X look like", for a given theme.

    >>> styles = StyleLookup.from_theme(DEFAULT_THEME)
    >>> styles.css("string")
    {'color': '#ce9178'}
    >>> styles.css(None)
    {}
    """

    plain: CssProperties
    by_category: dict[str, CssProperties]
    extra: ExtraTheme

    @classmethod
    def from_theme(cls, theme: Theme = DEFAULT_THEME) -> t.Self:
        by_category: dict[str, CssProperties] = {}
        for entry in theme["styles"]:
            for category in entry["types"]:
                by_category[category] = entry["style"]
        return cls(
            plain=theme["plain"], by_category=by_category, extra=theme.get("extra", {})
        )

    def css(self, category: Category | None) -> CssProperties:
        if category is None:
            return {}
        style = dict(self.by_category.get(category, {}))
        if category == "attr-name":
            style.update(self.extra.get("identifier", {}))
        return style

    def extra_css(self, key: ExtraKey) -> CssProperties:
        return dict(self.extra.get(key, {}))

    def rich(self, category: Category | None) -> rich.style.Style:
        return rich_style_from_css(self.css(category))


def rich_style_from_css(css: t.Mapping[str, str | int | float]) -> rich.style.Style:
    """Approximate CSS properties with a Rich style, ignoring the rest.

    >>> str(rich_style_from_css({"color": "#ce9178", "fontWeight": "bold"}))
    'bold #ce9178'
    >>> str(rich_style_from_css({"marginLeft": 24}))
    'none'
    """
    attributes: dict[str, t.Any] = {}
    for key, value in css.items():
        match key, value:
            case "color", str(color) if _is_rich_color(color):
                attributes["color"] = color
            case "backgroundColor", str(color) if _is_rich_color(color):
                attributes["bgcolor"] = color
            case "fontWeight", "bold" | "bolder":
                attributes["bold"] = True
            case "fontWeight", int(weight) if weight >= 600:  # noqa: PLR2004
                attributes["bold"] = True
            case "fontStyle", "italic":
                attributes["italic"] = True
            case "textDecoration", str(decoration):
                if "underline" in decoration:
                    attributes["underline"] = True
                if "line-through" in decoration:
                    attributes["strike"] = True
            case _:
                pass
    return rich.style.Style(**attributes)


def _is_rich_color(color: str) -> bool:
    try:
        rich.color.Color.parse(color)
    except rich.color.ColorParseError:
        logger.debug("ignoring color %r, which the console cannot show", color)
        return False
    return True


_UNITLESS = frozenset(("fontWeight", "lineHeight", "opacity", "zIndex", "flex"))


def css_declarations(*styles: t.Mapping[str, str | int | float]) -> str:
    """Merge the style mappings into an inline CSS `style` attribute value.

    Later styles override earlier ones. Numbers become pixel lengths.

    >>> css_declarations({"marginLeft": 24, "color": "red"}, {"color": "blue"})
    'margin-left: 24px; color: blue'
    >>> css_declarations({"fontWeight": 700})
    'font-weight: 700'
    """
    merged: dict[str, str | int | float] = {}
    for style in styles:
        merged.update(style)
    return "; ".join(
        f"{_kebab_case(key)}: {_css_value(key, value)}" for key, value in merged.items()
    )


def _kebab_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "-", name).lower()


def _css_value(key: str, value: str | int | float) -> str:
    if isinstance(value, int | float) and key not in _UNITLESS:
        return f"{value}px"
    return str(value)
