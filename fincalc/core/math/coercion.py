"""
Numeric Coercion — Total conversion of untrusted input to float

The only boundary between raw calculator fields (form strings, JSON values,
nested records) and the arithmetic core. Every function downstream may assume
its numeric arguments are finite floats.

Accepted input (tagged union NumericInput):
- None / bool
- int / float / Decimal
- str (currency symbols, thousands separators, whitespace tolerated)
- list / tuple (first element is used)
- mapping (common value-holding keys are checked)

KEY INVARIANTS:
1. coerce() never raises
2. coerce() always returns a finite float
3. Anything that cannot be interpreted becomes 0.0
4. coerce(x) == coerce(x) for every x (no hidden state)
"""

import json
import math
import re
from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation
from numbers import Real
from typing import Any, Final, Union

# =============================================================================
# CONSTANTS
# =============================================================================

# Magnitudes below this are treated as floating-point noise
NOISE_FLOOR: Final[float] = 1e-10

# Textual placeholders that mean "no value"
EMPTY_TOKENS: Final[frozenset[str]] = frozenset(
    {"", "-", "nan", "null", "undefined", "none", "nil", "empty"}
)

# Keys checked, in order, when a mapping is passed instead of a number
VALUE_KEYS: Final[tuple[str, ...]] = (
    "value",
    "amount",
    "number",
    "val",
    "price",
    "cost",
    "total",
    "sum",
)

_CURRENCY_RE: Final = re.compile(r"[₹$€£¥₩₽₴₸₺₼₾₿฿₫₭₮₱₲₳₵₶₷₻]")
_SEPARATOR_RE: Final = re.compile(r"[,\s' ]")
_NON_NUMERIC_RE: Final = re.compile(r"[^\d.\-]")
# Leading numeric prefix, the way a lenient float parser reads it
_LEADING_NUMBER_RE: Final = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")
_EMBEDDED_NUMBER_RE: Final = re.compile(r"[-+]?\d*\.?\d+")
_STRICT_NUMBER_RE: Final = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")

NumericInput = Union[None, bool, int, float, Decimal, str, Sequence, Mapping, Any]


# =============================================================================
# PUBLIC API
# =============================================================================


def coerce(value: NumericInput) -> float:
    """
    Convert an arbitrary value to a finite float.

    Precedence:
        1. None / False / '' -> 0.0, True -> 1.0
        2. numbers: non-finite or |x| < NOISE_FLOOR -> 0.0
        3. strings: cleaned and parsed (see _coerce_text)
        4. list/tuple: first element, recursively
        5. mappings: known value keys, float() cast, first embedded number
        6. everything else -> 0.0

    Args:
        value: Raw input of any type

    Returns:
        Finite float (0.0 when the input cannot be interpreted)

    Examples:
        >>> coerce('$1,234.56')
        1234.56
        >>> coerce(None)
        0.0
        >>> coerce(True)
        1.0
        >>> coerce({'amount': '2,500'})
        2500.0
        >>> coerce(['42', 7])
        42.0
    """
    if value is None or value is False:
        return 0.0
    if value is True:
        return 1.0

    if isinstance(value, (Real, Decimal)):
        return _coerce_number(value)

    if isinstance(value, str):
        return _coerce_text(value)

    if isinstance(value, Mapping):
        return _coerce_mapping(value)

    if isinstance(value, (list, tuple)):
        return coerce(value[0]) if value else 0.0

    return 0.0


def looks_numeric(value: NumericInput) -> bool:
    """
    Check whether a raw value reads as a number without any guessing.

    Used by strict validation: coerce() maps garbage to 0.0, which would make
    'abc' indistinguishable from a genuine zero.

    Examples:
        >>> looks_numeric('₹ 1,00,000')
        True
        >>> looks_numeric('12abc')
        False
        >>> looks_numeric(True)
        False
    """
    if isinstance(value, bool) or value is None:
        return False

    if isinstance(value, (Real, Decimal)):
        try:
            return math.isfinite(float(value))
        except (OverflowError, ValueError, InvalidOperation):
            return False

    if isinstance(value, str):
        cleaned = _SEPARATOR_RE.sub("", _CURRENCY_RE.sub("", value.strip()))
        return bool(_STRICT_NUMBER_RE.fullmatch(cleaned))

    return False


def coerce_record(record: Mapping[str, Any], fields: Sequence[str]) -> dict[str, float]:
    """
    Coerce the named fields of a record; absent fields become 0.0.

    Args:
        record: Raw calculator record
        fields: Field names to extract

    Returns:
        New dict {field: float}
    """
    return {name: coerce(record.get(name)) for name in fields}


# =============================================================================
# INTERNALS
# =============================================================================


def _coerce_number(value: Real | Decimal) -> float:
    try:
        number = float(value)
    except (OverflowError, ValueError, InvalidOperation):
        return 0.0

    if not math.isfinite(number) or abs(number) < NOISE_FLOOR:
        return 0.0
    return number


def _coerce_text(value: str) -> float:
    trimmed = value.strip()
    if trimmed.lower() in EMPTY_TOKENS:
        return 0.0

    cleaned = _CURRENCY_RE.sub("", trimmed)
    cleaned = _SEPARATOR_RE.sub("", cleaned)
    cleaned = _NON_NUMERIC_RE.sub("", cleaned)

    if cleaned in ("", "-", "."):
        return 0.0

    # '1.234.56' -> '1.23456': first dot is the decimal point
    parts = cleaned.split(".")
    if len(parts) > 2:
        cleaned = parts[0] + "." + "".join(parts[1:])

    match = _LEADING_NUMBER_RE.match(cleaned)
    if match is None:
        return 0.0

    try:
        parsed = float(match.group(0))
    except ValueError:
        return 0.0

    return parsed if math.isfinite(parsed) else 0.0


def _coerce_mapping(value: Mapping) -> float:
    for key in VALUE_KEYS:
        if key in value and value[key] is not None:
            return coerce(value[key])

    try:
        return _coerce_number(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        pass

    try:
        serialized = json.dumps(value, default=str)
    except (TypeError, ValueError):
        return 0.0

    match = _EMBEDDED_NUMBER_RE.search(serialized)
    if match is None:
        return 0.0

    try:
        parsed = float(match.group(0))
    except ValueError:
        return 0.0

    return parsed if math.isfinite(parsed) else 0.0
