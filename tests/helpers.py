import json
import pathlib
import typing as t

import pydantic
import pytest

CLICK_ERROR = 2
"""The exit code used by Click by default."""


type Decorator[F] = t.Callable[[F], F]


def parametrized[T, F: t.Callable[..., t.Any]](
    argname: str, cases: dict[str, T]
) -> Decorator[F]:
    """More convenient test parametrization, using a dict to provide names for each case.

    ```python
    @parametrized("arg", {"foo": 1, "bar": 2})
    def test_something(arg: int): ...
    ```
    """
    return pytest.mark.parametrize(
        argname, [pytest.param(value, id=key) for key, value in cases.items()]
    )


def write_json(dest: str | pathlib.Path, data: pydantic.JsonValue) -> pathlib.Path:
    """Write the `data` into the `dest` file.

    Returns the `dest` path.
    """
    dest = pathlib.Path(dest)
    dest.write_text(json.dumps(data, indent=2))
    return dest


def object_schema(**properties: pydantic.JsonValue) -> dict[str, pydantic.JsonValue]:
    """Create an example object schema with the given properties."""
    return {"type": "object", "properties": dict(properties)}
