import contextlib
import typing as t


@contextlib.contextmanager
def error_context(note: str) -> t.Iterator[None]:
    """Attach a note to any exception that escapes this block.

    >>> try:
    ...     with error_context("while parsing example.json"):
    ...         raise ValueError("oops")
    ... except ValueError as err:
    ...     print(err, err.__notes__)
    oops ['while parsing example.json']
    """
    try:
        yield
    except Exception as err:
        err.add_note(note)
        raise
