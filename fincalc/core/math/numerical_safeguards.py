"""
Numerical Safeguards — Safe Math Primitives

Every closed-form formula in the engine is composed from these primitives so
that one malformed field cannot push NaN/Inf into a reported figure:
- Operand coercion (any input -> finite float, see coercion.coerce)
- Division guarded against an effectively-zero denominator
- Results clamped into the safe calculation range
- Power with special cases and a bounded exponent
- Epsilon comparisons and round-half-up for final figures

KEY INVARIANTS:
1. Division by an effectively-zero denominator never happens (fallback returned)
2. NaN never propagates (replaced by fallback)
3. Overflow never propagates (clamped to MIN_SAFE_VALUE / MAX_SAFE_VALUE)
4. All operations are deterministic and reproducible
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Final

from fincalc.core.math.coercion import NumericInput, coerce

# =============================================================================
# EPSILON AND RANGE PARAMETERS
# =============================================================================

# Symmetric safe range for every intermediate and final figure
MAX_SAFE_VALUE: Final[float] = 1e15
MIN_SAFE_VALUE: Final[float] = -1e15

# Absolute tolerance under which a value is "effectively zero"
EPS_ZERO: Final[float] = 1e-10

# Tolerances for float comparisons (is_close)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12

# Exponent magnitude cap for safe_power
MAX_EXPONENT: Final[float] = 5000.0

# Decimal places for currency figures
CURRENCY_DECIMALS: Final[int] = 2


# =============================================================================
# NaN/Inf SANITIZATION
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Check that a float is finite (not NaN, not Inf).

    Args:
        value: Value to check

    Returns:
        True for finite values
    """
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Replace NaN/Inf with a fallback value.

    Examples:
        >>> sanitize_float(10.0)
        10.0
        >>> sanitize_float(float('nan'))
        0.0
        >>> sanitize_float(float('-inf'), fallback=-1.0)
        -1.0
    """
    if is_valid_float(value):
        return value
    return fallback


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Restrict a value to [min_value, max_value].

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
        >>> clamp(15.0, 0.0, 10.0)
        10.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


def bound_result(value: float, fallback: float = 0.0) -> float:
    """
    Bring a raw arithmetic result back into the safe range.

    +Inf and values above MAX_SAFE_VALUE clamp to MAX_SAFE_VALUE, -Inf and
    values below MIN_SAFE_VALUE clamp to MIN_SAFE_VALUE, NaN becomes fallback.

    Examples:
        >>> bound_result(float('inf'))
        1000000000000000.0
        >>> bound_result(float('nan'), fallback=7.0)
        7.0
    """
    if math.isnan(value):
        return fallback
    return clamp(value, MIN_SAFE_VALUE, MAX_SAFE_VALUE)


# =============================================================================
# SAFE ARITHMETIC
# =============================================================================


def safe_add(a: NumericInput, b: NumericInput, fallback: float = 0.0) -> float:
    """
    a + b with coercion and range clamping.

    Examples:
        >>> safe_add('1,000', 250)
        1250.0
        >>> safe_add(9e14, 9e14)
        1000000000000000.0
    """
    try:
        result = coerce(a) + coerce(b)
    except OverflowError:
        return fallback
    return bound_result(result, fallback)


def safe_subtract(a: NumericInput, b: NumericInput, fallback: float = 0.0) -> float:
    """
    a - b with coercion and range clamping.

    Examples:
        >>> safe_subtract(100, '40')
        60.0
    """
    try:
        result = coerce(a) - coerce(b)
    except OverflowError:
        return fallback
    return bound_result(result, fallback)


def safe_multiply(a: NumericInput, b: NumericInput, fallback: float = 0.0) -> float:
    """
    a * b with coercion and range clamping.

    Examples:
        >>> safe_multiply(1e10, 1e10)
        1000000000000000.0
        >>> safe_multiply('abc', 5)
        0.0
    """
    try:
        result = coerce(a) * coerce(b)
    except OverflowError:
        return fallback
    return bound_result(result, fallback)


def safe_divide(
    numerator: NumericInput,
    denominator: NumericInput,
    fallback: float = 0.0,
    eps: float = EPS_ZERO,
) -> float:
    """
    Division guarded against an effectively-zero denominator.

    Args:
        numerator: Numerator (any input, coerced)
        denominator: Denominator (any input, coerced)
        fallback: Returned when |denominator| < eps or the result is NaN
        eps: Zero tolerance for the denominator (must be positive)

    Returns:
        numerator / denominator clamped into the safe range, or fallback

    Raises:
        ValueError: If eps is not positive (programmer error)

    Examples:
        >>> safe_divide(10.0, 2.0)
        5.0
        >>> safe_divide(10.0, 0.0)
        0.0
        >>> safe_divide(10.0, '', fallback=-1.0)
        -1.0
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    num = coerce(numerator)
    den = coerce(denominator)

    if abs(den) < eps:
        return fallback

    try:
        result = num / den
    except (ZeroDivisionError, OverflowError):
        return fallback

    return bound_result(result, fallback)


def safe_power(base: NumericInput, exponent: NumericInput, fallback: float = 0.0) -> float:
    """
    base ** exponent with special cases and a bounded exponent.

    Special cases:
        x ** 0         -> 1.0
        0 ** positive  -> 0.0
        0 ** negative  -> MAX_SAFE_VALUE (+Inf, clamped)
        negative ** fractional -> fallback (undefined over the reals)

    The exponent is clamped to [-MAX_EXPONENT, MAX_EXPONENT].

    Examples:
        >>> safe_power(2, 10)
        1024.0
        >>> safe_power(0, -1)
        1000000000000000.0
        >>> safe_power(1.01, 1e9)  # exponent capped, result clamped
        1000000000000000.0
    """
    base_num = coerce(base)
    exp_num = coerce(exponent)

    if is_zero(exp_num):
        return 1.0

    if is_zero(base_num):
        return 0.0 if exp_num > 0 else MAX_SAFE_VALUE

    exp_num = clamp(exp_num, -MAX_EXPONENT, MAX_EXPONENT)

    try:
        result = math.pow(base_num, exp_num)
    except OverflowError:
        # Sign of the overflow: negative only for negative base, odd integer exponent
        negative = base_num < 0 and float(exp_num).is_integer() and int(exp_num) % 2 == 1
        return MIN_SAFE_VALUE if negative else MAX_SAFE_VALUE
    except ValueError:
        return fallback

    return bound_result(result, fallback)


# =============================================================================
# EPSILON COMPARISONS
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Float comparison with relative and absolute tolerance.

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_zero(value: float, tol: float = EPS_ZERO) -> bool:
    """
    True if |value| < tol.

    Examples:
        >>> is_zero(1e-12)
        True
        >>> is_zero(0.001)
        False
    """
    return abs(value) < tol


# =============================================================================
# ROUNDING
# =============================================================================


def round_to_precision(value: NumericInput, decimals: int = CURRENCY_DECIMALS) -> float:
    """
    Round half away from zero to a fixed number of decimals.

    Only for final reported figures; intermediate values are never rounded.
    Goes through Decimal(repr) so 1.005 rounds to 1.01 rather than 1.0.

    Examples:
        >>> round_to_precision(1.005)
        1.01
        >>> round_to_precision(-2.675)
        -2.68
        >>> round_to_precision('12.3456', 3)
        12.346
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    number = coerce(value)
    quantum = Decimal(1).scaleb(-decimals)

    try:
        rounded = Decimal(repr(number)).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return number

    return float(rounded)
