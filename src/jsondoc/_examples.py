"""Pick the example values that are shown for a schema node.

Examples flow downwards: an example on an object or array is split up
and handed to the child nodes, where it overrides their own examples.
"""

import dataclasses
import logging
import typing as t

import pydantic

from ._errors import MissingExampleError, SchemaNotSupportedError, UnsupportedTypeError
from ._schema import (
    UNSET,
    Array,
    Mixed,
    Object,
    Scalar,
    SchemaNode,
    Unset,
    json_type_name,
)

logger = logging.getLogger(__name__)


def scalar_example(node: Scalar | Mixed, *, path: str) -> pydantic.JsonValue:
    """The value to show for a scalar: the first example, else the default.

    >>> scalar_example(Scalar(kind="number", examples=(1, 2), default=3), path="")
    1
    >>> print(scalar_example(Scalar(kind="number", default=None), path=""))
    None
    >>> scalar_example(Scalar(kind="number"), path="a.b")
    Traceback (most recent call last):
    jsondoc._errors.MissingExampleError: Missing example (in a.b)
    """
    if node.examples:
        return node.examples[0]
    if node.default is not UNSET:
        return node.default
    raise MissingExampleError(path=path)


def with_example(
    node: SchemaNode, example: pydantic.JsonValue, *, path: str
) -> SchemaNode:
    """Override the examples of the node with a value from an enclosing example.

    >>> with_example(Scalar(kind="string", examples=("a",)), "b", path="").examples
    ('b',)
    >>> with_example(Array(items=Scalar(kind="string")), ["x"], path="").example_items
    ('x',)
    """
    match node:
        case Array():
            if not isinstance(example, list):
                raise UnsupportedTypeError(json_type_name(example), path=path)
            return dataclasses.replace(node, example_items=tuple(example))
        case _:
            return dataclasses.replace(node, examples=(example,))


def array_items(node: Array, *, path: str) -> list[SchemaNode]:
    """The item schemas to render, each combined with its example value.

    Positional `prefix_items` take precedence over the shared `items` schema.

    >>> node = Array(
    ...     items=Scalar(kind="number"),
    ...     prefix_items=(Scalar(kind="string"),),
    ...     example_items=("first", 2, 3),
    ... )
    >>> [(item.kind, item.examples) for item in array_items(node, path="")]
    [('string', ('first',)), ('number', (2,)), ('number', (3,))]
    """
    items: list[SchemaNode] = []
    for index, value in enumerate(_item_examples(node, path=path)):
        if index < len(node.prefix_items):
            schema = node.prefix_items[index]
        elif node.items is not None:
            schema = node.items
        else:
            msg = f"No item schema for index {index}"
            raise SchemaNotSupportedError(msg, path=path)
        items.append(with_example(schema, value, path=path))
    return items


def _item_examples(node: Array, *, path: str) -> t.Sequence[pydantic.JsonValue]:
    if node.example_items is not None:
        return node.example_items
    match node.default:
        case Unset.UNSET | None:
            return ()
        case list(values):
            return values
        case other:
            raise UnsupportedTypeError(json_type_name(other), path=path)


def driving_example(
    node: Object, *, path: str
) -> t.Mapping[str, pydantic.JsonValue] | None:
    """The example object that decides which properties are shown, if any."""
    if not node.examples:
        return None
    match node.examples[0]:
        case dict(example):
            return example
        case other:
            raise UnsupportedTypeError(json_type_name(other), path=path)


def visible_properties(node: Object, *, path: str) -> list[tuple[str, SchemaNode]]:
    """The properties to render, in declaration order.

    If the object has an example, properties that the example doesn't use
    are omitted, and the others receive their part of the example.

    >>> node = Object(
    ...     properties={"a": Scalar(kind="number"), "b": Scalar(kind="number")},
    ...     examples=({"a": 1},),
    ... )
    >>> [(name, child.examples) for name, child in visible_properties(node, path="")]
    [('a', (1,))]
    """
    example = driving_example(node, path=path)
    if example is None:
        return list(node.properties.items())

    visible: list[tuple[str, SchemaNode]] = []
    for name, child in node.properties.items():
        child_path = join_path(path, name)
        if name not in example:
            logger.debug("omitting %s, which is not used in the example", child_path)
            continue
        visible.append((name, with_example(child, example[name], path=child_path)))
    return visible


def join_path(path: str, name: str) -> str:
    """Extend a dotted property path.

    >>> join_path("", "a"), join_path("a", "b")
    ('a', 'a.b')
    """
    return f"{path}.{name}" if path else name
