"""Small command line option registry.

Register typed settings and boolean flags, process ``sys.argv`` and read the
values back. Errors are raised as typed exceptions; ``cliopts.fatal`` turns
them into the usual print-hint-and-exit behaviour.
"""

from .errors import (
    DuplicateNameError,
    KindMismatchError,
    MissingValueError,
    OptionsError,
    RegistryError,
    UnknownOptionError,
    UnregisteredNameError,
    UnsupportedKindError,
    UsageError,
    ValueParseError,
)
from .kinds import Kind
from .registry import DEFAULT_USER_HINT, Flag, OptionRegistry, Setting

__all__ = [
    "__version__",
    "DEFAULT_USER_HINT",
    "DuplicateNameError",
    "Flag",
    "Kind",
    "KindMismatchError",
    "MissingValueError",
    "OptionRegistry",
    "OptionsError",
    "RegistryError",
    "Setting",
    "UnknownOptionError",
    "UnregisteredNameError",
    "UnsupportedKindError",
    "UsageError",
    "ValueParseError",
]

__version__ = "0.1.0"
