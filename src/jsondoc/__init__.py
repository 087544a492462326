from ._errors import (
    CyclicReferenceError,
    MissingExampleError,
    SchemaNotSupportedError,
    UnreachableTokenError,
    UnresolvedReferenceError,
    UnsupportedTypeError,
)
from ._html import html_from_document, html_link, prettify
from ._markdown import md_from_anchors
from ._present import rich_from_document, text_from_document
from ._render import render
from ._schema import FoldStyle, SchemaNode, parse_schema
from ._theme import DEFAULT_THEME, THEME_SCHEMA, StyleLookup, Theme, load_theme
from ._tokens import Anchor, Document, Line, Section, Token

__all__ = [
    "DEFAULT_THEME",
    "THEME_SCHEMA",
    "Anchor",
    "CyclicReferenceError",
    "Document",
    "FoldStyle",
    "Line",
    "MissingExampleError",
    "SchemaNode",
    "SchemaNotSupportedError",
    "Section",
    "StyleLookup",
    "Theme",
    "Token",
    "UnreachableTokenError",
    "UnresolvedReferenceError",
    "UnsupportedTypeError",
    "html_from_document",
    "html_link",
    "load_theme",
    "md_from_anchors",
    "parse_schema",
    "prettify",
    "render",
    "rich_from_document",
    "text_from_document",
]
