"""Registry of command line settings and flags.

Settings are named values of a fixed :class:`~cliopts.kinds.Kind` that take
their value from the token following their name. Flags are named booleans
that become true when their name appears. ``process`` walks the argument
vector once, left to right, and raises a typed :mod:`cliopts.errors`
exception on the first invalid token. Terminating the process is left to
the caller (see :mod:`cliopts.fatal`).
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Sequence, TextIO

from .errors import (
    DuplicateNameError,
    KindMismatchError,
    MissingValueError,
    UnknownOptionError,
    UnregisteredNameError,
    ValueParseError,
)
from .kinds import Kind, Value, coerce_default

DEFAULT_USER_HINT = "Invalid command line options!"


@dataclass
class Setting:
    name: str
    kind: Kind
    value: Value


@dataclass
class Flag:
    name: str
    is_set: bool = False


class OptionRegistry:
    def __init__(self, *, user_hint: str = DEFAULT_USER_HINT) -> None:
        self._settings: dict[str, Setting] = {}
        self._flags: dict[str, Flag] = {}
        self._user_hint = user_hint

    def register_setting(self, name: str, default_value: Any, kind: Kind | None = None) -> None:
        """Declare a setting whose kind is fixed by ``kind`` or inferred from the default."""
        self._check_unique(name)
        fixed_kind, value = coerce_default(default_value, kind)
        self._settings[name] = Setting(name=name, kind=fixed_kind, value=value)

    def register_flag(self, name: str) -> None:
        self._check_unique(name)
        self._flags[name] = Flag(name=name)

    def _check_unique(self, name: str) -> None:
        if name in self._settings or name in self._flags:
            raise DuplicateNameError(name)

    @property
    def user_hint(self) -> str:
        return self._user_hint

    @user_hint.setter
    def user_hint(self, text: str) -> None:
        self._user_hint = str(text)

    def set_user_hint(self, text: str) -> None:
        self.user_hint = text

    def print_user_hint(self, file: TextIO | None = None) -> None:
        out = sys.stdout if file is None else file
        out.write(self._user_hint + "\n")

    def process(self, args: Sequence[str] | None = None) -> None:
        """Apply an argument vector; ``args[0]`` is the program name."""
        argv = list(sys.argv if args is None else args)
        i = 1
        while i < len(argv):
            token = argv[i]
            setting = self._settings.get(token)
            if setting is not None:
                if i == len(argv) - 1:
                    raise MissingValueError(setting.name)
                raw = argv[i + 1]
                try:
                    setting.value = setting.kind.parse(raw)
                except ValueError as e:
                    raise ValueParseError(setting.name, raw, setting.kind) from e
                i += 2
                continue
            flag = self._flags.get(token)
            if flag is not None:
                flag.is_set = True
                i += 1
                continue
            raise UnknownOptionError(token)

    def get_setting_value(self, name: str, kind: Kind) -> Value:
        setting = self._settings.get(name)
        if setting is None:
            raise UnregisteredNameError(name, what="setting")
        if setting.kind is not kind:
            raise KindMismatchError(name, registered=setting.kind, requested=kind)
        return setting.value

    def get_int(self, name: str) -> int:
        return self.get_setting_value(name, Kind.INT)  # type: ignore[return-value]

    def get_float(self, name: str) -> float:
        return self.get_setting_value(name, Kind.FLOAT)  # type: ignore[return-value]

    def get_double(self, name: str) -> float:
        return self.get_setting_value(name, Kind.DOUBLE)  # type: ignore[return-value]

    def get_char(self, name: str) -> str:
        return self.get_setting_value(name, Kind.CHAR)  # type: ignore[return-value]

    def get_string(self, name: str) -> str:
        return self.get_setting_value(name, Kind.STRING)  # type: ignore[return-value]

    def is_flag_set(self, name: str) -> bool:
        flag = self._flags.get(name)
        if flag is None:
            raise UnregisteredNameError(name, what="flag")
        return flag.is_set

    def settings(self) -> tuple[Setting, ...]:
        return tuple(Setting(s.name, s.kind, s.value) for s in self._settings.values())

    def flags(self) -> tuple[Flag, ...]:
        return tuple(Flag(f.name, f.is_set) for f in self._flags.values())

    def as_dict(self) -> dict[str, dict[str, Any]]:
        return {
            "settings": {s.name: s.value for s in self._settings.values()},
            "flags": {f.name: f.is_set for f in self._flags.values()},
        }
