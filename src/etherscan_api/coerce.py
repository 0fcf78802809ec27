"""
Wire-string coercion.

Etherscan encodes every number as a string: decimal for most endpoints, hex for
the logs endpoint. Two policies exist side by side:

- soft parsers (``parse_int``, ``parse_big``, ``parse_int_hex``,
  ``parse_big_hex``, ``parse_decimal``, ``parse_bool``) return a zero value on
  bad input so one odd field never sinks a whole listing;
- ``parse_big_strict`` raises ``FieldParseError`` and is used for amounts the
  caller acts on (balances, supplies).
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from .errors import FieldParseError

_DEC_RE = re.compile(r"^[+-]?\d+$")
_UNSIGNED_RE = re.compile(r"^\d+$")
_HEX_RE = re.compile(r"^(0[xX])?[0-9a-fA-F]+$")

_TRUE_VALUES = {"1", "true"}


def _clean(raw: Any) -> str:
    if raw is None or isinstance(raw, bool):
        return ""
    if isinstance(raw, int):
        return str(raw)
    if not isinstance(raw, str):
        return ""
    return raw.strip()


def parse_int(raw: Any) -> int:
    candidate = _clean(raw)
    if not _DEC_RE.match(candidate):
        return 0
    return int(candidate, 10)


# Python ints are unbounded, so the base-10 big-int parser shares the same rule.
parse_big = parse_int


def parse_big_strict(raw: Any, field: str) -> int:
    candidate = raw.strip() if isinstance(raw, str) else raw
    if not isinstance(candidate, str) or not _UNSIGNED_RE.match(candidate):
        raise FieldParseError(field, raw)
    return int(candidate, 10)


def parse_int_hex(raw: Any) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    candidate = _clean(raw)
    if not _HEX_RE.match(candidate):
        return 0
    return int(candidate, 16)


parse_big_hex = parse_int_hex


def parse_decimal(raw: Any) -> Decimal:
    candidate = _clean(raw)
    if not candidate:
        return Decimal(0)
    try:
        value = Decimal(candidate)
    except InvalidOperation:
        return Decimal(0)
    if not value.is_finite():
        return Decimal(0)
    return value


def parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return _clean(raw).lower() in _TRUE_VALUES
