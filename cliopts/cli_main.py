from __future__ import annotations

import sys

import click
import typer

from . import __version__
from .cli_shared import GlobalOpts, _eprint, _print_json, _rich_error
from .errors import OptionsError, UsageError
from .fatal import exit_code_for, report_error
from .kinds import Kind
from .registry import OptionRegistry

# Newer typer releases raise exceptions from their own click copy; its
# ClickException lives next to typer.Exit.
_CLICK_EXCEPTIONS: tuple[type[Exception], ...] = tuple(
    {
        click.ClickException,
        getattr(sys.modules[typer.Exit.__module__], "ClickException", click.ClickException),
    }
)

app = typer.Typer(
    name="cliopts",
    help="Try setting/flag registrations against an argument list.",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cliopts {__version__}")
        raise typer.Exit(code=0)


@app.callback()
def app_callback(
    ctx: typer.Context,
    plain_json: bool = typer.Option(False, "--plain-json", help="Emit compact JSON output"),
    quiet: bool = typer.Option(False, "--quiet", help="Suppress stderr notes"),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True),
) -> None:
    del version
    ctx.obj = {"g": GlobalOpts(pretty=not plain_json, quiet=quiet)}


def _ctx_global(ctx: typer.Context) -> GlobalOpts:
    if isinstance(ctx.obj, dict) and isinstance(ctx.obj.get("g"), GlobalOpts):
        return ctx.obj["g"]
    return GlobalOpts()


def _parse_setting_spec(raw: str) -> tuple[str, Kind, str]:
    """Split ``NAME:KIND=DEFAULT`` into its parts."""
    head, sep, default = raw.partition("=")
    name, colon, kind_name = head.rpartition(":")
    if not sep or not colon or not name:
        raise UsageError(f"invalid --setting {raw!r}: expected NAME:KIND=DEFAULT")
    try:
        kind = Kind.from_name(kind_name)
    except ValueError as e:
        raise UsageError(f"invalid --setting {raw!r}: {e}") from e
    return name, kind, default


def _build_registry(setting_specs: list[str], flag_names: list[str], hint: str | None) -> OptionRegistry:
    registry = OptionRegistry()
    for raw in setting_specs:
        name, kind, default_text = _parse_setting_spec(raw)
        try:
            default = kind.parse(default_text)
        except ValueError as e:
            raise UsageError(f"invalid default in --setting {raw!r}: {e}") from e
        registry.register_setting(name, default, kind)
    for name in flag_names:
        registry.register_flag(name)
    if hint is not None:
        registry.set_user_hint(hint)
    return registry


@app.command("parse", help="Register settings and flags, process ARGS and print the resulting values.")
def parse(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(None, help="Arguments to process; put them after --"),
    setting: list[str] | None = typer.Option(
        None, "--setting", "-s", help="Setting as NAME:KIND=DEFAULT (repeatable)"
    ),
    flag: list[str] | None = typer.Option(None, "--flag", "-f", help="Flag name, e.g. --flag=--smart (repeatable)"),
    hint: str | None = typer.Option(None, "--hint", help="Hint printed with processing errors"),
    prog: str = typer.Option("prog", "--prog", help="Program name placed at index 0"),
) -> None:
    g = _ctx_global(ctx)
    registry = _build_registry(list(setting or []), list(flag or []), hint)
    argv = [prog, *(args or [])]
    try:
        registry.process(argv)
    except OptionsError as e:
        raise typer.Exit(code=report_error(e, registry)) from e
    if not g.quiet:
        _eprint(f"processed {len(argv) - 1} argument(s)")
    _print_json(registry.as_dict(), pretty=g.pretty)


@app.command("kinds", help="List the supported setting kinds.")
def kinds(ctx: typer.Context) -> None:
    g = _ctx_global(ctx)
    _print_json(
        [{"kind": k.value, "type": k.py_type.__name__} for k in Kind],
        pretty=g.pretty,
    )


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        result = app(args=argv, prog_name="cliopts", standalone_mode=False)
        if result is None:
            return 0
        return int(result)
    except typer.Exit as e:
        return int(e.exit_code)
    except _CLICK_EXCEPTIONS as e:  # type: ignore[misc]
        _rich_error(e.format_message())
        return int(e.exit_code)
    except OptionsError as e:
        _rich_error(str(e))
        return exit_code_for(e)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
