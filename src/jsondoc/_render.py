"""Compile a schema into a laid-out, annotated example document."""

import contextlib
import logging
import typing as t
from dataclasses import dataclass, field

import pydantic

from ._errors import (
    CyclicReferenceError,
    SchemaNotSupportedError,
    UnresolvedReferenceError,
    UnsupportedTypeError,
)
from ._examples import array_items, scalar_example, visible_properties
from ._layout import Emission, Layout, decide_fold
from ._schema import (
    Array,
    Mixed,
    Object,
    Reference,
    Scalar,
    SchemaNode,
    json_type_name,
    parse_schema,
)
from ._tokens import Annotation, Document, ReferenceToken, TokenType

logger = logging.getLogger(__name__)

_NODE_TYPES = (Scalar, Mixed, Array, Object, Reference)

_REF_PREFIX = "#/properties/"


def render(
    schema: pydantic.JsonValue | SchemaNode,
    *,
    active_id: str | None = None,
    skip_first_indent: bool = True,
) -> Document:
    """Render the schema as an annotated example document.

    Args:
      schema: a JSON-Schema document, or an already parsed schema node.
      active_id: anchor of the section that should be marked as active.
      skip_first_indent: whether to omit the braces around a root object.

    Raises:
      SchemaNotSupportedError: if the schema cannot be rendered.

    Example: documented properties get their own section.

    >>> doc = render(
    ...     {
    ...         "type": "object",
    ...         "properties": {
    ...             "id": {"type": "number", "examples": [7], "title": "The ID"},
    ...             "tags": {
    ...                 "type": "array",
    ...                 "items": {"type": "string"},
    ...                 "exampleItems": ["a", "b"],
    ...             },
    ...         },
    ...     }
    ... )
    >>> for section in doc.sections:
    ...     print(section.id, [line.text for line in section.lines if line.tokens])
    None []
    id ['id: 7,']
    None ['tags: [', '"a",', '"b",', '],']
    """
    root = schema if isinstance(schema, _NODE_TYPES) else parse_schema(schema)
    renderer = _Renderer(root)
    renderer.process(root, skip_braces=skip_first_indent)
    document = renderer.layout.sections.finish(active_id=active_id)
    logger.debug("rendered %d sections", len(document.sections))
    return document


@dataclass
class _Renderer:
    root: SchemaNode
    """The top-level schema, needed for resolving refs."""

    layout: Layout = field(default_factory=Layout)

    id_segments: list[str] = field(default_factory=list)
    """Property names from the root to the node that is currently visited."""

    visiting: set[str] = field(default_factory=set)
    """Property paths that are currently being visited, to detect cyclic refs."""

    @property
    def path(self) -> str:
        return ".".join(self.id_segments)

    def process(self, node: SchemaNode, *, skip_braces: bool = False) -> None:
        match node:
            case Scalar() | Mixed():
                self._process_scalar(node)
            case Array():
                self._process_array(node)
            case Object():
                self._process_object(node, skip_braces=skip_braces)
            case Reference():
                self._process_reference(node)
            case other:  # pragma: no cover
                t.assert_never(other)

    def _process_scalar(self, node: Scalar | Mixed) -> None:
        if node.enum is None:
            self._push_typed(scalar_example(node, path=self.path))
            return

        first, *rest = node.enum
        self._push_typed(first)
        for value in rest:
            self.layout.push_tokens(TokenType.SPACE, TokenType.PIPE, TokenType.SPACE)
            self._push_typed(value)

    def _push_typed(self, value: pydantic.JsonValue) -> None:
        match value:
            case None | bool() | int() | float() | str():
                self.layout.push_literal(value)
            case other:
                raise UnsupportedTypeError(json_type_name(other), path=self.path)

    def _process_array(self, node: Array) -> None:
        items = array_items(node, path=self.path)
        first = _first_emission(items[0]) if items else None
        fold = decide_fold(node.fold_style, first)
        with self.layout.block(TokenType.L_BRACKET, TokenType.R_BRACKET, fold):
            for index, item in enumerate(items):
                self.process(item)
                self.layout.separator(is_last=index + 1 == len(items))

    def _process_object(self, node: Object, *, skip_braces: bool) -> None:
        if node.example_keys is not None:
            first = Emission.ATOM if node.example_keys else None
            with self._braces(node, first, skip=skip_braces):
                self._inject_pattern_entries(node, node.example_keys)
            return

        properties = visible_properties(node, path=self.path)
        first = Emission.ATOM if properties else None
        with self._braces(node, first, skip=skip_braces):
            self._inject_properties(properties)

    @contextlib.contextmanager
    def _braces(
        self, node: Object, first: Emission | None, *, skip: bool
    ) -> t.Iterator[None]:
        if skip:
            yield
            return
        fold = decide_fold(node.fold_style, first)
        with self.layout.block(TokenType.L_CURLY, TokenType.R_CURLY, fold):
            yield

    def _inject_pattern_entries(self, node: Object, keys: t.Sequence[str]) -> None:
        for key in keys:
            self.layout.push_identifier(key)
            self.layout.push_tokens(TokenType.COLON, TokenType.SPACE)
            self._process_pattern(node, key)
            self.layout.push_tokens(TokenType.COMMA, TokenType.NL)

    def _process_pattern(self, node: Object, key: str) -> None:
        for entry in node.pattern_properties:
            if entry.pattern.search(key):
                # The key is part of the path, like a property name.
                self.id_segments.append(key)
                try:
                    self.process(entry.schema)
                finally:
                    self.id_segments.pop()
                return

        # Keep rendering the rest of the document, but make the problem visible.
        logger.debug(
            "no patternProperties match key %r (in %s)", key, self.path or "<root>"
        )
        self.layout.push_identifier("error")

    def _inject_properties(self, properties: t.Sequence[tuple[str, SchemaNode]]) -> None:
        for index, (name, child) in enumerate(properties):
            with self._property(name, child):
                self.layout.push_identifier(name)
                self.layout.push_tokens(TokenType.COLON, TokenType.SPACE)
                self.process(child)
                self.layout.separator(is_last=index + 1 == len(properties))

    @contextlib.contextmanager
    def _property(self, name: str, node: SchemaNode) -> t.Iterator[None]:
        """Visit a named property, in its own section if it is documented."""
        self.id_segments.append(name)
        path = self.path
        self.visiting.add(path)

        annotation = node.annotation
        if annotation:
            self.layout.sections.open(path, Annotation(annotation))

        try:
            yield
        finally:
            self.visiting.discard(path)
            self.id_segments.pop()
            if annotation:
                self.layout.sections.close()

    def _process_reference(self, node: Reference) -> None:
        anchor = self._resolve_ref(node.target)
        if anchor in self.visiting:
            raise CyclicReferenceError(node.target, path=self.path)
        self.layout.push(ReferenceToken(anchor))

    def _resolve_ref(self, ptr: str) -> str:
        """Find the anchor of the property that the pointer refers to.

        Only pointers into the root's property tree are supported,
        like `#/properties/foo/properties/bar` (anchor `foo.bar`).
        """
        if not ptr.startswith(_REF_PREFIX):
            raise SchemaNotSupportedError(f"Unsupported reference {ptr}", path=self.path)

        target = self.root
        names: list[str] = []
        for segment in ptr.removeprefix("#").split("/properties/")[1:]:
            name = segment.replace("~1", "/").replace("~0", "~")
            if not isinstance(target, Object) or name not in target.properties:
                raise UnresolvedReferenceError(ptr, path=self.path)
            target = target.properties[name]
            names.append(name)
        return ".".join(names)


def _first_emission(node: SchemaNode) -> Emission:
    """Peek at what a child node emits first, without rendering it."""
    match node:
        case Array() | Object():
            return Emission.CONTAINER
        case _:
            return Emission.ATOM
