"""Value coercion rules shared by the evaluator, validator, and input helpers.

Responses are stored exactly as the browser produced them, so comparisons
follow the browser's conversion rules rather than Python's:

  - ``to_display_string``: how a value prints (``True`` → ``"true"``,
    ``20.0`` → ``"20"``, ``["a", "b"]`` → ``"a,b"``, ``None`` → ``"null"``,
    an absent response → ``"undefined"``)
  - ``to_number``: numeric conversion that never raises (``""`` → ``0``,
    ``"abc"`` → NaN, ``True`` → ``1``)
  - ``is_truthy``: non-empty strings, non-zero numbers, ``True`` and *any*
    list (even an empty one) are truthy
"""

from __future__ import annotations

import math
import re
from typing import Any

# Numeric string grammar of the browser's Number(): no digit separators,
# no "inf"/"nan" spellings, unsigned 0x/0o/0b literals.
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_RADIX_RE = re.compile(r"0(?:[xX]([0-9a-fA-F]+)|[oO]([0-7]+)|[bB]([01]+))")
_INFINITIES = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


class _Missing:
    """Marker for a response key that is not present at all."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def format_number(num: int | float) -> str:
    """Print a number without a trailing ``.0`` for integral floats."""
    if isinstance(num, bool):
        return "true" if num else "false"
    if isinstance(num, float):
        if math.isnan(num):
            return "NaN"
        if math.isinf(num):
            return "Infinity" if num > 0 else "-Infinity"
        if num.is_integer():
            return str(int(num))
    return str(num)


def to_display_string(value: Any) -> str:
    """Stringify a response value the way the form front-end does."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, (list, tuple)):
        # Array elements that are null/undefined print as empty strings
        return ",".join(
            "" if item is None or item is MISSING else to_display_string(item)
            for item in value
        )
    return str(value)


def _parse_numeric_string(text: str) -> float:
    text = text.strip()
    if not text:
        return 0.0
    if text in _INFINITIES:
        return _INFINITIES[text]
    if _DECIMAL_RE.fullmatch(text):
        return float(text)
    radix = _RADIX_RE.fullmatch(text)
    if radix is not None:
        hex_digits, oct_digits, bin_digits = radix.groups()
        if hex_digits is not None:
            num = int(hex_digits, 16)
        elif oct_digits is not None:
            num = int(oct_digits, 8)
        else:
            num = int(bin_digits, 2)
        try:
            return float(num)
        except OverflowError:
            return math.inf
    return math.nan


def to_number(value: Any) -> float:
    """Convert a response value to a float; unparseable input yields NaN."""
    if value is None:
        return 0.0
    if value is MISSING:
        return math.nan
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return _parse_numeric_string(value)
    if isinstance(value, (list, tuple)):
        # A list converts through its string form: [] → 0, ["5"] → 5
        if len(value) > 1:
            return math.nan
        return to_number(to_display_string(value))
    return math.nan


def is_truthy(value: Any) -> bool:
    """Truthiness with the front-end's rules (lists are always truthy)."""
    if value is MISSING or value is None:
        return False
    if isinstance(value, (list, tuple)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def is_empty(value: Any) -> bool:
    """True for the values the required rule treats as "no answer"."""
    return value is MISSING or value is None or value == ""
