"""Demonstration program.

    $ cliopts-demo name Mark height 5.2 --smart
    Mark is 5.2 foot tall and is smart.
"""

from __future__ import annotations

import sys

from .errors import OptionsError
from .fatal import report_error
from .registry import OptionRegistry


def build_registry() -> OptionRegistry:
    registry = OptionRegistry()
    registry.register_setting("name", "Mr X")
    registry.register_setting("height", 6.0)
    registry.register_flag("--smart")
    registry.set_user_hint("usage: cliopts-demo [name NAME] [height FEET] [--smart]")
    return registry


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv if argv is None else argv)
    registry = build_registry()
    try:
        registry.process(argv)
        name = registry.get_string("name")
        height = registry.get_float("height")
        is_smart = registry.is_flag_set("--smart")
    except OptionsError as e:
        return report_error(e, registry)

    sys.stdout.write(
        f"{name} is {height:g} foot tall and is {'smart.' if is_smart else 'not smart.'}\n"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
