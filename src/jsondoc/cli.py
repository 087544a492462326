"""The jsondoc command-line interface."""

import enum
import functools
import pathlib
import typing as t
from dataclasses import dataclass

import click
import pydantic
import rich

import jsondoc

from ._cli_app import App
from ._markdown import md_from_anchors
from ._utils import error_context

app = App(
    name="jsondoc",
    help="""\
Render JSON schemas as annotated example documents.

Every property with a `title` or `description` becomes an anchored section,
with its documentation shown above the example value.

<!-- options -->

Log output goes to STDERR. Use `-v` for progress and `-vv` for debug details.
""",
)


class OutputFormat(enum.Enum):
    """Different output formats available for structured data."""

    JSON = enum.auto()
    MARKDOWN = enum.auto()


class RenderFormat(enum.Enum):
    """Different output formats available for rendered documents."""

    CONSOLE = enum.auto()
    TEXT = enum.auto()
    HTML = enum.auto()
    JSON = enum.auto()


@dataclass
class _with_print_json[R]:  # noqa: N801  # invalid-name
    """Decorator for pretty-printing returned data from a Click command."""

    adapter: pydantic.TypeAdapter[R]
    markdown: t.Callable[[R], str]

    def __call__[**P](
        self, command: t.Callable[P, R]
    ) -> t.Callable[t.Concatenate[OutputFormat, P], None]:
        @functools.wraps(command)
        @click.option(
            "--format",
            type=click.Choice(OutputFormat, case_sensitive=False),
            default=OutputFormat.JSON,
            show_default=True,
            help="Choose the output format, e.g. Markdown. [default: json]",
        )
        def command_with_json_output(
            format: OutputFormat, *args: P.args, **kwargs: P.kwargs
        ) -> None:
            data = command(*args, **kwargs)
            match format:
                case OutputFormat.JSON:
                    rich.print_json(data=self.adapter.dump_python(data, mode="json"))
                case OutputFormat.MARKDOWN:
                    click.echo(self.markdown(data))
                case other:  # pragma: no cover
                    t.assert_never(other)

        return command_with_json_output


_ExistingFile = click.Path(
    exists=True, path_type=pathlib.Path, file_okay=True, dir_okay=False
)

JSON_VALUE = pydantic.TypeAdapter(pydantic.JsonValue)
DOCUMENT_SCHEMA = pydantic.TypeAdapter(jsondoc.Document)
ANCHORS_SCHEMA = pydantic.TypeAdapter(list[jsondoc.Anchor])


@app.command()
@click.argument("schema", type=_ExistingFile)
@click.option(
    "--format",
    type=click.Choice(RenderFormat, case_sensitive=False),
    default=RenderFormat.CONSOLE,
    help="""\
How to show the document. [default: console]
* `console`: styled terminal output
* `text`: plain text, annotations as `//` comments
* `html`: an HTML fragment with inline styles
* `json`: the laid-out document, see `jsondoc schema render`
""",
)
@click.option(
    "--active",
    "active_id",
    type=str,
    default=None,
    help="Highlight the section with this anchor, e.g. `address.zip`.",
)
@click.option(
    "--braces/--no-braces",
    default=False,
    help="Whether to show the braces around the top-level object.",
)
@click.option(
    "--theme",
    type=_ExistingFile,
    default=None,
    help="Load colors from this JSON theme file, see `jsondoc schema theme`.",
)
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    default=2,
    show_default=True,
    help="Spaces per indentation level, for `console` and `text` output.",
)
@click.pass_context
def render(  # noqa: PLR0913  # too-many-arguments
    ctx: click.Context,
    schema: pathlib.Path,
    *,
    format: RenderFormat,
    active_id: str | None,
    braces: bool,
    theme: pathlib.Path | None,
    indent: int,
) -> None:
    """Render the `SCHEMA` file as an annotated example document.

    The schema must provide example values for everything that is shown,
    via `examples`, `default`, `exampleItems`, or the example of a parent.
    """
    document = _render_file(ctx, schema, active_id=active_id, braces=braces)
    styles = jsondoc.StyleLookup.from_theme(
        jsondoc.load_theme(theme) if theme is not None else jsondoc.DEFAULT_THEME
    )

    match format:
        case RenderFormat.CONSOLE:
            rich.print(
                jsondoc.rich_from_document(document, styles=styles, indent_width=indent)
            )
        case RenderFormat.TEXT:
            click.echo(jsondoc.text_from_document(document, indent_width=indent))
        case RenderFormat.HTML:
            click.echo(jsondoc.html_from_document(document, styles=styles))
        case RenderFormat.JSON:
            rich.print_json(data=DOCUMENT_SCHEMA.dump_python(document, mode="json"))
        case other:  # pragma: no cover
            t.assert_never(other)


@app.command()
@click.argument("schema", type=_ExistingFile)
@_with_print_json(ANCHORS_SCHEMA, md_from_anchors)
@click.pass_context
def anchors(ctx: click.Context, schema: pathlib.Path) -> list[jsondoc.Anchor]:
    """List the documented properties in the `SCHEMA` file.

    Each anchor is the dotted path of a property that has a `title` or `description`.
    """
    return _render_file(ctx, schema).anchors()


def _render_file(
    ctx: click.Context,
    path: pathlib.Path,
    *,
    active_id: str | None = None,
    braces: bool = False,
) -> jsondoc.Document:
    with error_context(f"while parsing {path}"):
        raw = JSON_VALUE.validate_json(path.read_bytes())
    try:
        return jsondoc.render(raw, active_id=active_id, skip_first_indent=not braces)
    except jsondoc.SchemaNotSupportedError as err:
        ctx.fail(f"Cannot render {path}: {err}")


SchemaName = t.Literal["render", "anchors", "theme"]


@app.command()
@click.argument("command", type=click.Choice(t.get_args(SchemaName)))
def schema(command: SchemaName) -> None:
    """Show the JSON schema for the output of the given command.

    Use `theme` for the schema of `--theme` files.
    """
    adapter: pydantic.TypeAdapter[t.Any]
    match command:
        case "render":
            adapter = DOCUMENT_SCHEMA
        case "anchors":
            adapter = ANCHORS_SCHEMA
        case "theme":
            adapter = jsondoc.THEME_SCHEMA
        case other:  # pragma: no cover
            t.assert_never(other)
    mode: t.Literal["validation", "serialization"] = (
        "validation" if command == "theme" else "serialization"
    )
    rich.print_json(data=adapter.json_schema(mode=mode))
