import typing as t

from ._tokens import Anchor


def md_from_anchors(anchors: t.Sequence[Anchor]) -> str:
    """Summarize the documented sections as a Markdown table of contents.

    >>> print(
    ...     md_from_anchors(
    ...         [
    ...             Anchor(id="name", annotation="Full name\\n\\nAs on the passport."),
    ...             Anchor(id="address.zip", annotation="Postal code | ZIP"),
    ...         ]
    ...     )
    ... )
    | anchor        | summary            |
    |---------------|--------------------|
    | `name`        | Full name          |
    | `address.zip` | Postal code \\| ZIP |
    >>> md_from_anchors([])
    'No documented properties.'
    """
    if not anchors:
        return "No documented properties."
    return _table(
        ("anchor", "summary"),
        [(f"`{anchor['id']}`", _summary(anchor["annotation"])) for anchor in anchors],
    )


def _summary(annotation: str) -> str:
    first_line, _, _ = annotation.partition("\n")
    return first_line.replace("|", "\\|")


def _table[Row: tuple[str, ...]](header: Row, values: t.Sequence[Row]) -> str:
    """Render a Markdown table.

    Example: columns are properly aligned.

    >>> print(_table(("a", "bbb"), [("111", "2"), ("3", "4")]))
    | a   | bbb |
    |-----|-----|
    | 111 | 2   |
    | 3   | 4   |
    """
    col_widths = tuple(
        max(len(col_name), *(len(cell) for cell in col_values))
        for col_name, col_values in zip(header, zip(*values, strict=True), strict=True)
    )

    lines = []
    lines.append("| " + " | ".join(_justify_cols(header, col_widths)) + " |")
    lines.append("|-" + "-|-".join("-" * width for width in col_widths) + "-|")
    lines.extend(
        "| " + " | ".join(_justify_cols(row, col_widths)) + " |" for row in values
    )
    return "\n".join(lines)


def _justify_cols(row: tuple[str, ...], widths: tuple[int, ...]) -> tuple[str, ...]:
    return tuple(cell.ljust(width) for cell, width in zip(row, widths, strict=True))
