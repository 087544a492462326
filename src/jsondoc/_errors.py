class SchemaNotSupportedError(ValueError):
    """Some aspects of this schema weren't understood."""

    def __init__(self, message: str, *, path: str = "") -> None:
        super().__init__(f"{message} (in {path or '<root>'})")
        self.message = message
        self.path = path


class UnsupportedTypeError(SchemaNotSupportedError):
    """The node has no recognized `type` and is not a reference."""

    def __init__(self, type_name: str, *, path: str) -> None:
        super().__init__(f"Unsupported type {type_name}", path=path)
        self.type_name = type_name


class MissingExampleError(SchemaNotSupportedError):
    """A value must be shown, but the node has neither `examples` nor `default`."""

    def __init__(self, *, path: str) -> None:
        super().__init__("Missing example", path=path)


class UnresolvedReferenceError(SchemaNotSupportedError):
    """A `$ref` points to a property that the root schema doesn't declare."""

    def __init__(self, target: str, *, path: str) -> None:
        super().__init__(f"Cannot resolve reference {target}", path=path)
        self.target = target


class CyclicReferenceError(SchemaNotSupportedError):
    """A `$ref` points back to a property that is currently being rendered."""

    def __init__(self, target: str, *, path: str) -> None:
        super().__init__(f"Cyclic reference to {target}", path=path)
        self.target = target


class UnreachableTokenError(AssertionError):
    """The layout engine was asked to emit a token type it doesn't know.

    This is a bug in jsondoc, not a problem with the schema.
    """
