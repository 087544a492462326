r"""Typed schema nodes, parsed once from the raw JSON-Schema document.

Only a small subset of JSON-Schema is understood, plus a few extensions
that control how the example document is rendered:

* `exampleItems`: the items to show for an array
* `exampleKeys`: the keys to show for an object with `patternProperties`
* `foldStyle`: `true` puts each child on its own line, `false` keeps them inline

>>> node = parse_schema(
...     {
...         "type": "object",
...         "properties": {
...             "name": {"type": "string", "examples": ["Alice"]},
...             "tags": {"type": "array", "items": {"type": "string"}},
...         },
...     }
... )
>>> type(node).__name__, list(node.properties)
('Object', ['name', 'tags'])
>>> node.properties["name"].examples
('Alice',)

Mixed types are only allowed for scalars:

>>> parse_schema({"type": ["string", "null"], "default": None}).kinds == {"string", "null"}
True
>>> parse_schema({"type": ["string", "object"]})
Traceback (most recent call last):
jsondoc._errors.UnsupportedTypeError: Unsupported type string, object (in <root>)
"""

import dataclasses
import enum
import re
import typing as t
from dataclasses import dataclass

import pydantic

from ._errors import SchemaNotSupportedError, UnsupportedTypeError

type ScalarKind = t.Literal["null", "number", "boolean", "string"]

_SCALAR_KINDS = frozenset(("null", "number", "boolean", "string"))


class Unset(enum.Enum):
    """Marker for absent keywords where `null` is a legal value."""

    UNSET = enum.auto()

    @t.override
    def __repr__(self) -> str:
        return "UNSET"


UNSET = Unset.UNSET


class FoldStyle(enum.Enum):
    """Whether a container puts its children on one line or one per line."""

    AUTO = "auto"
    """Inline if the first child is itself a container, otherwise block."""

    INLINE = "inline"

    BLOCK = "block"


@dataclass(frozen=True, kw_only=True)
class _Node:
    title: str | None = None
    description: str | None = None
    examples: tuple[pydantic.JsonValue, ...] = ()
    """Only the first example is ever shown."""
    default: pydantic.JsonValue | Unset = UNSET

    @property
    def annotation(self) -> str:
        r"""Documentation text for this node, empty if there is none.

        >>> Scalar(kind="string", title="Name").annotation
        'Name'
        >>> Scalar(kind="string", title="Name", description="Full name.").annotation
        'Name\n\nFull name.'
        """
        return f"{self.title or ''}\n\n{self.description or ''}".strip()


@dataclass(frozen=True, kw_only=True)
class Scalar(_Node):
    kind: ScalarKind
    enum: tuple[pydantic.JsonValue, ...] | None = None


@dataclass(frozen=True, kw_only=True)
class Mixed(_Node):
    kinds: frozenset[ScalarKind]
    enum: tuple[pydantic.JsonValue, ...] | None = None


@dataclass(frozen=True, kw_only=True)
class Array(_Node):
    items: "SchemaNode | None" = None
    """Schema for all items not covered by `prefix_items`."""
    prefix_items: tuple["SchemaNode", ...] = ()
    example_items: tuple[pydantic.JsonValue, ...] | None = None
    fold_style: FoldStyle = FoldStyle.AUTO


@dataclass(frozen=True)
class PatternProperty:
    pattern: re.Pattern[str]
    schema: "SchemaNode"


@dataclass(frozen=True, kw_only=True)
class Object(_Node):
    properties: dict[str, "SchemaNode"] = dataclasses.field(default_factory=dict)
    pattern_properties: tuple[PatternProperty, ...] = ()
    example_keys: tuple[str, ...] | None = None
    """If set, render these keys via `pattern_properties` instead of `properties`."""
    fold_style: FoldStyle = FoldStyle.AUTO


@dataclass(frozen=True, kw_only=True)
class Reference(_Node):
    target: str
    """A JSON pointer like `#/properties/foo`."""


type SchemaNode = Scalar | Mixed | Array | Object | Reference


def parse_schema(raw: pydantic.JsonValue) -> SchemaNode:
    """Convert a JSON-Schema document into a tree of schema nodes.

    Raises `SchemaNotSupportedError` if the schema uses unknown types
    or malformed keywords.
    """
    return _parse(raw, path=())


def json_type_name(value: object) -> str:
    """Describe the JSON type of a Python value.

    >>> [json_type_name(v) for v in (None, True, 3, 1.5, "x", [], {})]
    ['null', 'boolean', 'number', 'number', 'string', 'array', 'object']
    """
    match value:
        case None:
            return "null"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case [*_]:
            return "array"
        case {}:
            return "object"
        case other:
            return type(other).__name__


class _Common(t.TypedDict):
    title: str | None
    description: str | None
    examples: tuple[pydantic.JsonValue, ...]
    default: pydantic.JsonValue | Unset


type _RawSchema = t.Mapping[str, pydantic.JsonValue]


def _parse(raw: pydantic.JsonValue, *, path: tuple[str, ...]) -> SchemaNode:
    where = _where(path)
    if not isinstance(raw, t.Mapping):
        msg = f"Expected a schema object, got {json_type_name(raw)}"
        raise SchemaNotSupportedError(msg, path=where)

    common = _parse_common(raw, where)

    match raw.get("type"):
        case "null" | "number" | "boolean" | "string" as kind:
            return Scalar(kind=kind, enum=_parse_enum(raw, where), **common)
        case [*kinds]:
            if not all(isinstance(k, str) and k in _SCALAR_KINDS for k in kinds):
                type_name = ", ".join(str(k) for k in kinds)
                raise UnsupportedTypeError(type_name, path=where)
            return Mixed(
                kinds=frozenset(t.cast(list[ScalarKind], kinds)),
                enum=_parse_enum(raw, where),
                **common,
            )
        case "array":
            return _parse_array(raw, common, path=path)
        case "object":
            return _parse_object(raw, common, path=path)
        case other:
            if isinstance(target := raw.get("$ref"), str):
                return Reference(target=target, **common)
            type_name = "(none)" if other is None else str(other)
            raise UnsupportedTypeError(type_name, path=where)


def _parse_common(raw: _RawSchema, where: str) -> _Common:
    return _Common(
        title=_optional_str(raw, "title", where),
        description=_optional_str(raw, "description", where),
        examples=tuple(_optional_list(raw, "examples", where) or ()),
        default=raw["default"] if "default" in raw else UNSET,
    )


def _parse_enum(raw: _RawSchema, where: str) -> tuple[pydantic.JsonValue, ...] | None:
    values = _optional_list(raw, "enum", where)
    if values is None:
        return None
    if not values:
        raise SchemaNotSupportedError("Empty enum", path=where)
    return tuple(values)


def _parse_array(raw: _RawSchema, common: _Common, *, path: tuple[str, ...]) -> Array:
    where = _where(path)
    items = raw.get("items")
    example_items = _optional_list(
        raw, _first_present(raw, "exampleItems", "_exampleItems"), where
    )
    return Array(
        items=None if items is None else _parse(items, path=path),
        prefix_items=tuple(
            _parse(item, path=path)
            for item in _optional_list(raw, "prefixItems", where) or ()
        ),
        example_items=None if example_items is None else tuple(example_items),
        fold_style=_parse_fold_style(raw, where),
        **common,
    )


def _parse_object(
    raw: _RawSchema, common: _Common, *, path: tuple[str, ...]
) -> Object:
    where = _where(path)

    properties = _optional_dict(raw, "properties", where) or {}
    pattern_properties = _optional_dict(raw, "patternProperties", where)

    example_keys = _optional_list(
        raw, _first_present(raw, "exampleKeys", "_exampleKeys"), where
    )
    if example_keys is not None:
        if pattern_properties is None:
            msg = "Using exampleKeys without patternProperties is not supported"
            raise SchemaNotSupportedError(msg, path=where)
        if not all(isinstance(key, str) for key in example_keys):
            raise SchemaNotSupportedError("exampleKeys must be strings", path=where)

    return Object(
        properties={
            name: _parse(sub, path=(*path, name)) for name, sub in properties.items()
        },
        pattern_properties=tuple(
            PatternProperty(_compile_pattern(pattern, where), _parse(sub, path=path))
            for pattern, sub in (pattern_properties or {}).items()
        ),
        example_keys=(
            None if example_keys is None else tuple(t.cast(list[str], example_keys))
        ),
        fold_style=_parse_fold_style(raw, where),
        **common,
    )


def _parse_fold_style(raw: _RawSchema, where: str) -> FoldStyle:
    match raw.get("foldStyle"):
        case None | "auto":
            return FoldStyle.AUTO
        case True | "block":
            return FoldStyle.BLOCK
        case False | "inline":
            return FoldStyle.INLINE
        case other:
            raise SchemaNotSupportedError(f"Unknown foldStyle {other!r}", path=where)


def _compile_pattern(pattern: str, where: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as err:
        msg = f"Invalid patternProperties regex {pattern!r}: {err}"
        raise SchemaNotSupportedError(msg, path=where) from err


def _first_present(raw: _RawSchema, *keys: str) -> str:
    """Pick the first key that has a non-null value, defaulting to the first key."""
    for key in keys:
        if raw.get(key) is not None:
            return key
    return keys[0]


def _optional_str(raw: _RawSchema, key: str, where: str) -> str | None:
    match raw.get(key):
        case None:
            return None
        case str(value):
            return value
        case other:
            msg = f"Expected {key} to be a string, got {json_type_name(other)}"
            raise SchemaNotSupportedError(msg, path=where)


def _optional_list(
    raw: _RawSchema, key: str, where: str
) -> list[pydantic.JsonValue] | None:
    match raw.get(key):
        case None:
            return None
        case list(values):
            return values
        case other:
            msg = f"Expected {key} to be an array, got {json_type_name(other)}"
            raise SchemaNotSupportedError(msg, path=where)


def _optional_dict(
    raw: _RawSchema, key: str, where: str
) -> t.Mapping[str, pydantic.JsonValue] | None:
    match raw.get(key):
        case None:
            return None
        case dict(values):
            return values
        case other:
            msg = f"Expected {key} to be an object, got {json_type_name(other)}"
            raise SchemaNotSupportedError(msg, path=where)


def _where(path: tuple[str, ...]) -> str:
    return ".".join(path)
