from __future__ import annotations

import json
import math
import sys
from dataclasses import dataclass
from typing import Any, TextIO

from rich.console import Console
from rich.markup import escape


@dataclass(frozen=True)
class GlobalOpts:
    pretty: bool = True
    quiet: bool = False


_OUT_CONSOLE = Console(soft_wrap=True, emoji=False, highlight=False)
_ERROR_CONSOLE = Console(stderr=True, soft_wrap=True, emoji=False, highlight=False)


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _rich_error(msg: str, *, stderr: bool = True, file: TextIO | None = None) -> None:
    if file is not None:
        console = Console(file=file, soft_wrap=True, emoji=False, highlight=False)
    else:
        console = _ERROR_CONSOLE if stderr else _OUT_CONSOLE
    console.print(f"[bold red]error:[/bold red] {escape(msg)}")


def _json_safe(obj: Any) -> Any:
    # JSON has no inf/nan literals
    if isinstance(obj, float) and not math.isfinite(obj):
        return str(obj)
    if isinstance(obj, dict):
        return {k: _json_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_json_safe(v) for v in obj]
    return obj


def _print_json(obj: Any, *, pretty: bool, file: TextIO | None = None) -> None:
    # Registration order is meaningful, so keys are not sorted.
    out = sys.stdout if file is None else file
    safe = _json_safe(obj)
    if pretty:
        out.write(json.dumps(safe, indent=2, allow_nan=False) + "\n")
    else:
        out.write(json.dumps(safe, separators=(",", ":"), allow_nan=False) + "\n")
