import re

import pydantic
import pytest
from dirty_equals import IsStr

from jsondoc import (
    FoldStyle,
    SchemaNotSupportedError,
    UnsupportedTypeError,
    parse_schema,
)
from jsondoc._schema import (
    UNSET,
    Array,
    Mixed,
    Object,
    PatternProperty,
    Reference,
    Scalar,
)

from .helpers import parametrized


def test_scalar_keywords() -> None:
    node = parse_schema(
        {
            "type": "string",
            "title": "Name",
            "description": "Full name.",
            "examples": ["Ada", "Grace"],
        }
    )
    assert node == Scalar(
        kind="string",
        title="Name",
        description="Full name.",
        examples=("Ada", "Grace"),
    )
    assert node.default is UNSET
    assert node.annotation == "Name\n\nFull name."


def test_null_default_is_not_unset() -> None:
    node = parse_schema({"type": "null", "default": None})
    assert node.default is None


def test_description_only_annotation() -> None:
    assert parse_schema({"type": "number", "description": "Age."}).annotation == "Age."
    assert parse_schema({"type": "number"}).annotation == ""


def test_mixed_scalar_kinds() -> None:
    node = parse_schema({"type": ["number", "null"], "enum": [1, None]})
    assert node == Mixed(kinds=frozenset(("number", "null")), enum=(1, None))


def test_properties_keep_declaration_order() -> None:
    node = parse_schema(
        {
            "type": "object",
            "properties": {
                "z": {"type": "number"},
                "a": {"type": "number"},
                "m": {"type": "number"},
            },
        }
    )
    assert isinstance(node, Object)
    assert list(node.properties) == ["z", "a", "m"]


def test_array_keywords() -> None:
    node = parse_schema(
        {
            "type": "array",
            "items": {"type": "number"},
            "prefixItems": [{"type": "string"}],
            "exampleItems": ["a", 1],
        }
    )
    assert node == Array(
        items=Scalar(kind="number"),
        prefix_items=(Scalar(kind="string"),),
        example_items=("a", 1),
    )


def test_underscore_aliases() -> None:
    array = parse_schema(
        {"type": "array", "items": {"type": "number"}, "_exampleItems": [1]}
    )
    assert isinstance(array, Array)
    assert array.example_items == (1,)

    obj = parse_schema(
        {
            "type": "object",
            "patternProperties": {"^a": {"type": "number"}},
            "_exampleKeys": ["ab"],
        }
    )
    assert isinstance(obj, Object)
    assert obj.example_keys == ("ab",)


def test_pattern_properties_are_compiled() -> None:
    node = parse_schema(
        {
            "type": "object",
            "patternProperties": {"^x-": {"type": "string"}},
            "exampleKeys": ["x-a"],
        }
    )
    assert isinstance(node, Object)
    assert node.pattern_properties == (
        PatternProperty(re.compile("^x-"), Scalar(kind="string")),
    )


def test_reference() -> None:
    node = parse_schema({"$ref": "#/properties/a", "title": "Same as a"})
    assert node == Reference(target="#/properties/a", title="Same as a")


@parametrized(
    "fold_style",
    {
        "absent": (None, FoldStyle.AUTO),
        "auto": ("auto", FoldStyle.AUTO),
        "true": (True, FoldStyle.BLOCK),
        "block": ("block", FoldStyle.BLOCK),
        "false": (False, FoldStyle.INLINE),
        "inline": ("inline", FoldStyle.INLINE),
    },
)
def test_fold_style(fold_style: tuple[pydantic.JsonValue, FoldStyle]) -> None:
    raw, expected = fold_style
    node = parse_schema({"type": "array", "foldStyle": raw})
    assert isinstance(node, Array)
    assert node.fold_style is expected


@parametrized(
    "case",
    {
        "unknown-type": (
            {"type": "integer"},
            "Unsupported type integer (in <root>)",
        ),
        "missing-type": (
            {"title": "nothing"},
            "Unsupported type (none) (in <root>)",
        ),
        "nested-unknown-type": (
            {"type": "object", "properties": {"a": {"type": "integer"}}},
            "Unsupported type integer (in a)",
        ),
        "mixed-container": (
            {"type": ["array", "null"]},
            "Unsupported type array, null (in <root>)",
        ),
    },
)
def test_unsupported_types(case: tuple[pydantic.JsonValue, str]) -> None:
    raw, message = case
    with pytest.raises(UnsupportedTypeError) as errinfo:
        parse_schema(raw)
    assert str(errinfo.value) == message


@parametrized(
    "case",
    {
        "example-keys-without-patterns": (
            {"type": "object", "exampleKeys": ["a"]},
            "Using exampleKeys without patternProperties is not supported (in <root>)",
        ),
        "empty-enum": (
            {"type": "object", "properties": {"a": {"type": "string", "enum": []}}},
            "Empty enum (in a)",
        ),
        "invalid-regex": (
            {"type": "object", "patternProperties": {"(": {"type": "string"}}},
            IsStr(regex=r"Invalid patternProperties regex '\(': .+ \(in <root>\)"),
        ),
        "unknown-fold-style": (
            {"type": "array", "foldStyle": "sideways"},
            "Unknown foldStyle 'sideways' (in <root>)",
        ),
        "properties-not-a-mapping": (
            {"type": "object", "properties": ["a"]},
            "Expected properties to be an object, got array (in <root>)",
        ),
        "schema-not-a-mapping": (
            {"type": "array", "items": 42},
            "Expected a schema object, got number (in <root>)",
        ),
        "title-not-a-string": (
            {"type": "string", "title": 3},
            "Expected title to be a string, got number (in <root>)",
        ),
    },
)
def test_malformed_keywords(case: tuple[pydantic.JsonValue, object]) -> None:
    raw, message = case
    with pytest.raises(SchemaNotSupportedError) as errinfo:
        parse_schema(raw)
    assert str(errinfo.value) == message


def test_error_path_is_stored() -> None:
    with pytest.raises(SchemaNotSupportedError) as errinfo:
        parse_schema(
            {
                "type": "object",
                "properties": {
                    "a": {"type": "object", "properties": {"b": {"type": "x"}}}
                },
            }
        )
    assert errinfo.value.path == "a.b"
    assert errinfo.value.message == "Unsupported type x"
