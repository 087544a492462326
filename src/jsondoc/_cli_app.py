import logging
import os
import typing as t
from dataclasses import dataclass

import click
import rich.console
import rich.logging

if t.TYPE_CHECKING:  # pragma: no cover
    import click.testing
    import pydantic

_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr, more of them with each `-v`.

    >>> configure_logging(5)
    >>> logging.getLogger("jsondoc").level == logging.DEBUG
    True
    >>> configure_logging(0)
    """
    level = _LOG_LEVELS[min(verbosity, len(_LOG_LEVELS) - 1)]
    logger = logging.getLogger("jsondoc")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if isinstance(handler, rich.logging.RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(
        rich.logging.RichHandler(
            console=rich.console.Console(stderr=True), show_path=False
        )
    )


def _verbose_callback(ctx: click.Context, _param: click.Parameter, count: int) -> None:
    if ctx.resilient_parsing:
        return
    configure_logging(count)


_VERBOSE_OPTION = click.Option(
    ("-v", "--verbose"),
    count=True,
    expose_value=False,
    callback=_verbose_callback,
    help="Log more details to stderr. Repeat for debug output.",
)


class _FixedGroup(click.Group):
    @t.override
    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if not args and not ctx.resilient_parsing:
            click.echo(ctx.get_help())
            ctx.exit(2)
        return super().parse_args(ctx, args)


class App:
    def __init__(self, name: str, *, help: str) -> None:
        prolog, _, epilog = help.partition("\n<!-- options -->\n")
        self.click = _FixedGroup(
            name=name,
            help=prolog.strip(),
            epilog=epilog.strip() or None,
            params=[_VERBOSE_OPTION],
        )

    def __call__(self, args: t.Sequence[str] | None = None) -> object:
        return self.click.main(args)

    def command(
        self, name: str | None = None
    ) -> t.Callable[[t.Callable], click.Command]:
        """Register a subcommand."""
        return self.click.command(name)

    def testrunner(self) -> "AppTestRunner":
        return AppTestRunner(self)


AppTestCliArg: t.TypeAlias = str | os.PathLike[str]


@t.final
@dataclass
class AppTestRunner:
    """Invoke the app in a testing context."""

    app: App
    args: t.Sequence[AppTestCliArg] = ()

    class Opts(t.TypedDict, total=False):
        expect_exit: int
        """Which exit code to expect, default `0`."""

        catch_exceptions: bool
        """Whether to catch exceptions (other than `SystemExit`), default `True`."""

    def bind(self, *args: AppTestCliArg) -> t.Self:
        """Create new runner that prefixes the given args (partial application)."""
        return type(self)(app=self.app, args=(*self.args, *args))

    def __call__(
        self, *args: AppTestCliArg, **opts: t.Unpack[Opts]
    ) -> "click.testing.Result":
        """Run an app command."""
        import click.testing  # noqa: PLC0415  # import-outside-toplevel

        __tracebackhide__ = True
        expect_exit = opts.get("expect_exit", 0)

        result = click.testing.CliRunner().invoke(
            self.app.click,
            [os.fspath(arg) for arg in (*self.args, *args)],
            catch_exceptions=opts.get("catch_exceptions", True),
        )
        print(result.output)
        if result.exit_code != expect_exit:  # pragma: no cover
            err = AssertionError("command failed with unexpected status code")
            err.add_note(f"exited with code: {result.exit_code}")
            err.add_note(f"expected exit code: {expect_exit}")
            err.add_note(f"args: {[*self.args, *args]}")
            raise err
        return result

    def output(self, *args: AppTestCliArg, **opts: t.Unpack[Opts]) -> str:
        """Run an app command and return the visible OUTPUT."""
        __tracebackhide__ = True
        return self(*args, **opts).output

    def stdout(self, *args: AppTestCliArg, **opts: t.Unpack[Opts]) -> str:
        """Run an app command and return captured STDOUT."""
        __tracebackhide__ = True
        return self(*args, **opts).stdout

    def stderr(self, *args: AppTestCliArg, **opts: t.Unpack[Opts]) -> str:
        """Run an app command and return captured STDERR."""
        __tracebackhide__ = True
        return self(*args, **opts).stderr

    def json(
        self, *args: AppTestCliArg, **opts: t.Unpack[Opts]
    ) -> "pydantic.JsonValue":
        """Run an app command and return captured STDOUT, parsed as JSON."""
        import json  # noqa: PLC0415  # import-outside-toplevel

        __tracebackhide__ = True
        return json.loads(self(*args, **opts).stdout)
