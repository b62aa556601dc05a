"""Process termination boundary for option errors.

Library calls raise :class:`~cliopts.errors.OptionsError`; program entry
points that want the classic behaviour (print the problem and the hint,
then exit) wrap their calls with :func:`fatal_on_error` or use
:func:`process_or_exit`.
"""

from __future__ import annotations

import contextlib
import sys
from typing import Iterator, Sequence, TextIO

from .cli_shared import _rich_error
from .errors import OptionsError, UsageError
from .registry import DEFAULT_USER_HINT, OptionRegistry

EXIT_USAGE = 2
EXIT_REGISTRY = 1


def exit_code_for(err: OptionsError) -> int:
    return EXIT_USAGE if isinstance(err, UsageError) else EXIT_REGISTRY


def report_error(
    err: OptionsError,
    registry: OptionRegistry | None = None,
    *,
    file: TextIO | None = None,
) -> int:
    """Print ``err`` and the hint to stdout (or ``file``) and return the exit status."""
    out = sys.stdout if file is None else file
    _rich_error(str(err), stderr=False, file=file)
    if registry is not None:
        registry.print_user_hint(out)
    else:
        out.write(DEFAULT_USER_HINT + "\n")
    out.flush()
    return exit_code_for(err)


@contextlib.contextmanager
def fatal_on_error(registry: OptionRegistry | None = None) -> Iterator[OptionRegistry | None]:
    try:
        yield registry
    except OptionsError as e:
        raise SystemExit(report_error(e, registry)) from e


def process_or_exit(registry: OptionRegistry, args: Sequence[str] | None = None) -> None:
    with fatal_on_error(registry):
        registry.process(args)
