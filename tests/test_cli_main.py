from __future__ import annotations

import json
import re
import sys
from collections.abc import Iterable

import pytest
import typer
from typer.testing import CliRunner

from cliopts import __version__
from cliopts.cli_main import _CLICK_EXCEPTIONS, _parse_setting_spec, app, main
from cliopts.errors import DuplicateNameError, UsageError
from cliopts.kinds import Kind


runner = CliRunner()

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def _plain(s: str) -> str:
    return _ANSI_RE.sub("", s)


def _walk_click_commands(root) -> Iterable[tuple[str, object]]:
    stack: list[tuple[str, object]] = [("", root)]
    while stack:
        base, cmd = stack.pop()
        commands = getattr(cmd, "commands", None)
        if isinstance(commands, dict):
            for name, sub in commands.items():
                path = f"{base} {name}".strip()
                yield path, sub
                stack.append((path, sub))


def test_all_commands_have_help_text():
    for path, cmd in _walk_click_commands(typer.main.get_command(app)):
        if isinstance(getattr(cmd, "commands", None), dict):
            continue
        help_text = str(cmd.help or "").strip()
        assert help_text, f"missing help text for command: {path}"


def test_parse_setting_spec():
    assert _parse_setting_spec("height:float=6.0") == ("height", Kind.FLOAT, "6.0")
    assert _parse_setting_spec("name:string=") == ("name", Kind.STRING, "")
    assert _parse_setting_spec("a:b:int=1=2") == ("a:b", Kind.INT, "1=2")
    with pytest.raises(UsageError, match="expected NAME:KIND=DEFAULT"):
        _parse_setting_spec("height=6.0")
    with pytest.raises(UsageError, match="unknown kind"):
        _parse_setting_spec("height:real=6.0")


def test_parse_prints_processed_values():
    result = runner.invoke(
        app,
        [
            "--plain-json",
            "--quiet",
            "parse",
            "--setting",
            "name:string=Mr X",
            "-s",
            "height:float=6.0",
            "--flag=--smart",
            "--",
            "name",
            "Mark",
            "height",
            "5.2",
            "--smart",
        ],
    )

    assert result.exit_code == 0
    parsed = json.loads(result.stdout)
    assert parsed == {"settings": {"name": "Mark", "height": 5.2}, "flags": {"--smart": True}}


def test_parse_without_args_keeps_defaults():
    result = runner.invoke(
        app,
        ["--quiet", "parse", "-s", "count:int=3", "-s", "grade:char=B", "--flag=-v"],
    )

    assert result.exit_code == 0
    parsed = json.loads(result.stdout)
    assert parsed["settings"] == {"count": 3, "grade": "B"}
    assert parsed["flags"] == {"-v": False}


def test_parse_notes_argument_count_unless_quiet():
    result = runner.invoke(app, ["parse", "--flag=--x", "--", "--x", "--x"])

    assert result.exit_code == 0
    assert "processed 2 argument(s)" in result.output


def test_parse_reports_processing_error_with_hint():
    result = runner.invoke(
        app,
        ["parse", "-s", "height:float=6.0", "--hint", "usage: try height FEET", "--", "height", "abc"],
    )

    assert result.exit_code == 2
    out = _plain(result.stdout)
    assert "error: Invalid value 'abc' for setting height (expected float)" in out
    assert "usage: try height FEET" in out


def test_parse_rejects_bad_setting_spec():
    result = runner.invoke(app, ["parse", "-s", "height"])

    assert result.exit_code == 1
    assert isinstance(result.exception, UsageError)
    assert "expected NAME:KIND=DEFAULT" in str(result.exception)


def test_parse_rejects_duplicate_registration():
    result = runner.invoke(app, ["parse", "-s", "x:int=1", "--flag=x"])

    assert isinstance(result.exception, DuplicateNameError)


def test_kinds_lists_supported_kinds():
    result = runner.invoke(app, ["--plain-json", "kinds"])

    assert result.exit_code == 0
    parsed = json.loads(result.stdout)
    assert [k["kind"] for k in parsed] == ["int", "float", "double", "char", "string"]
    assert parsed[0]["type"] == "int"


def test_main_maps_usage_errors_to_exit_2(capsys):
    rc = main(["parse", "-s", "height"])

    assert rc == 2
    assert "expected NAME:KIND=DEFAULT" in _plain(capsys.readouterr().err)


def test_main_maps_registry_errors_to_exit_1(capsys):
    rc = main(["parse", "-s", "x:int=1", "-s", "x:int=2"])

    assert rc == 1
    assert "The name x is already registered" in _plain(capsys.readouterr().err)


def test_main_returns_processing_exit_code(capsys):
    rc = main(["--quiet", "parse", "--", "bogus"])

    assert rc == 2
    assert "Unknown option: bogus" in capsys.readouterr().out


def test_main_version(capsys):
    rc = main(["--version"])

    assert rc == 0
    assert capsys.readouterr().out.strip() == f"cliopts {__version__}"


def test_main_click_usage_error(capsys):
    rc = main(["parse", "--no-such-option"])

    assert rc == 2
    assert "No such option" in _plain(capsys.readouterr().err)


def test_parse_renders_non_finite_values_as_strings():
    result = runner.invoke(
        app,
        ["--plain-json", "--quiet", "parse", "-s", "r:double=0", "--", "r", "nan"],
    )

    assert result.exit_code == 0
    assert result.stdout.strip() == '{"settings":{"r":"nan"},"flags":{}}'


def test_walk_finds_every_command():
    paths = {path for path, _ in _walk_click_commands(typer.main.get_command(app))}
    assert paths == {"parse", "kinds"}


def test_main_catches_the_click_exceptions_typer_raises():
    exceptions_module = sys.modules[typer.Exit.__module__]
    assert getattr(exceptions_module, "ClickException") in _CLICK_EXCEPTIONS
