from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, Union

from .errors import UnsupportedKindError

Value = Union[int, float, str]

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
FLOAT32_MAX = 3.4028234663852886e38

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_FLOAT_SPECIALS = {"inf", "infinity", "nan"}


class Kind(str, Enum):
    INT = "int"
    FLOAT = "float"
    DOUBLE = "double"
    CHAR = "char"
    STRING = "string"

    @property
    def label(self) -> str:
        return self.value

    @property
    def py_type(self) -> type:
        if self is Kind.INT:
            return int
        if self in (Kind.FLOAT, Kind.DOUBLE):
            return float
        return str

    @classmethod
    def from_name(cls, name: str) -> "Kind":
        key = (name or "").strip().lower()
        for kind in cls:
            if kind.value == key:
                return kind
        raise ValueError(f"unknown kind {name!r} (expected one of: {', '.join(k.value for k in cls)})")

    def parse(self, token: str) -> Value:
        """Convert a command line token to a value of this kind.

        Raises ``ValueError`` when the token is not a valid representation.
        """
        if self is Kind.STRING:
            return token
        if self is Kind.CHAR:
            if not token:
                raise ValueError("empty token has no character")
            return token[0]
        if self is Kind.INT:
            if not _INT_RE.fullmatch(token):
                raise ValueError(f"not a base-10 integer: {token!r}")
            return _check_int32(int(token))
        return _check_float(_parse_decimal(token), single=self is Kind.FLOAT)


def _parse_decimal(token: str) -> float:
    bare = token.lstrip("+-").lower()
    if bare in _FLOAT_SPECIALS and len(token) - len(bare) <= 1:
        return float(token)
    if not _FLOAT_RE.fullmatch(token):
        raise ValueError(f"not a decimal number: {token!r}")
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"{token!r} is outside the double precision range")
    return value


def _check_int32(value: int) -> int:
    if value < INT32_MIN or value > INT32_MAX:
        raise ValueError(f"{value} is outside the 32-bit integer range")
    return value


def _check_float(value: float, *, single: bool) -> float:
    if single and math.isfinite(value) and abs(value) > FLOAT32_MAX:
        raise ValueError(f"{value!r} is outside the single precision range")
    return value


def infer_kind(value: Any) -> Kind:
    # bool subclasses int but is not a supported kind
    if isinstance(value, bool):
        raise UnsupportedKindError(value)
    if isinstance(value, int):
        return Kind.INT
    if isinstance(value, float):
        return Kind.FLOAT
    if isinstance(value, str):
        return Kind.STRING
    raise UnsupportedKindError(value)


def coerce_default(value: Any, kind: Kind | None = None) -> tuple[Kind, Value]:
    """Validate a registration default and return ``(kind, value)``."""
    if kind is None:
        kind = infer_kind(value)
    elif not isinstance(kind, Kind):
        raise UnsupportedKindError(value, reason=f"kind must be a Kind, got {kind!r}")
    if isinstance(value, bool):
        raise UnsupportedKindError(value)

    try:
        if kind is Kind.INT:
            if not isinstance(value, int):
                raise ValueError(f"expected int for {kind.label}")
            return kind, _check_int32(value)
        if kind in (Kind.FLOAT, Kind.DOUBLE):
            if not isinstance(value, (int, float)):
                raise ValueError(f"expected float for {kind.label}")
            return kind, _check_float(float(value), single=kind is Kind.FLOAT)
        if not isinstance(value, str):
            raise ValueError(f"expected str for {kind.label}")
        if kind is Kind.CHAR and len(value) != 1:
            raise ValueError("char default must be exactly one character")
        return kind, value
    except ValueError as e:
        raise UnsupportedKindError(value, reason=str(e)) from e
