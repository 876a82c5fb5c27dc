"""Record level helpers: type inference, CSV line splitting and comparisons."""

from __future__ import annotations

import operator as _op
import re
import struct
from enum import Enum


class FieldType(str, Enum):
    """Column types as written in the schema file."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"


_DIGITS = frozenset("0123456789")

_COMPARISONS = {
    "==": _op.eq,
    "!=": _op.ne,
    "<": _op.lt,
    "<=": _op.le,
    ">": _op.gt,
    ">=": _op.ge,
}

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1


def infer_type(value: str) -> FieldType:
    """Guess the type of a field from its textual value."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return FieldType.BOOL
    body = lowered[1:] if lowered[:1] in ("-", "+") else lowered
    seen_point = False
    for char in body:
        if char == ".":
            if seen_point:
                return FieldType.STRING
            seen_point = True
        elif char not in _DIGITS:
            return FieldType.STRING
    return FieldType.FLOAT if seen_point else FieldType.INT


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line, honouring double quotes and doubled quote escapes."""
    fields: list[str] = []
    current: list[str] = []
    quoted = False
    chars = iter(enumerate(line))
    for position, char in chars:
        if char == '"':
            if quoted and line[position + 1 : position + 2] == '"':
                current.append('"')
                next(chars)
            else:
                quoted = not quoted
        elif char == "," and not quoted:
            fields.append("".join(current))
            current.clear()
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def _to_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    number = int(match.group(1))
    if not _INT32_MIN <= number <= _INT32_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return number


def _to_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    number = float(match.group(1))
    try:
        # Values are compared at single precision.
        return struct.unpack("f", struct.pack("f", number))[0]
    except OverflowError as exc:
        raise ValueError(f"number out of range: {text!r}") from exc


def matches(field_type: FieldType | str, operator: str, value: str, other: str) -> bool:
    """Evaluate ``value <operator> other`` under the rules of ``field_type``.

    Numeric types support all six comparisons; strings only ``==`` and ``!=``;
    booleans and unknown operators never match. Unparsable numbers raise
    ValueError.
    """
    field_type = FieldType(field_type)
    compare = _COMPARISONS.get(operator)
    if field_type is FieldType.INT:
        left, right = _to_int(value), _to_int(other)
    elif field_type is FieldType.FLOAT:
        left, right = _to_float(value), _to_float(other)
    elif field_type is FieldType.STRING:
        if operator not in ("==", "!="):
            return False
        left, right = value, other
    else:
        return False
    return compare is not None and compare(left, right)