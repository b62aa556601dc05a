from __future__ import annotations

from typing import Any


class OptionsError(Exception):
    """Base class for every cliopts error."""


class UsageError(OptionsError):
    """Raised when the command line itself is invalid."""


class RegistryError(OptionsError):
    """Raised when the host uses the registry incorrectly."""


class UnknownOptionError(UsageError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown option: {token}")
        self.token = token


class MissingValueError(UsageError):
    def __init__(self, setting: str) -> None:
        super().__init__(f"Missing value for setting {setting}")
        self.setting = setting


class ValueParseError(UsageError):
    def __init__(self, setting: str, value: str, kind: Any) -> None:
        label = getattr(kind, "label", str(kind))
        super().__init__(f"Invalid value {value!r} for setting {setting} (expected {label})")
        self.setting = setting
        self.value = value
        self.kind = kind


class UnregisteredNameError(RegistryError):
    def __init__(self, name: str, *, what: str) -> None:
        super().__init__(f"The {what} {name} is not registered!")
        self.name = name
        self.what = what


class KindMismatchError(RegistryError):
    def __init__(self, name: str, *, registered: Any, requested: Any) -> None:
        super().__init__(
            f"The setting {name} holds {getattr(registered, 'label', registered)}, "
            f"not {getattr(requested, 'label', requested)}"
        )
        self.name = name
        self.registered = registered
        self.requested = requested


class UnsupportedKindError(RegistryError):
    def __init__(self, value: Any, *, reason: str = "") -> None:
        msg = f"Unsupported setting value {value!r} ({type(value).__name__})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.value = value


class DuplicateNameError(RegistryError):
    def __init__(self, name: str) -> None:
        super().__init__(f"The name {name} is already registered")
        self.name = name
