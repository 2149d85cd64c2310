"""
Core math for fincalc

Input coercion, overflow-safe arithmetic and compounding primitives.
"""

# Coercion
from fincalc.core.math.coercion import (
    EMPTY_TOKENS,
    NOISE_FLOOR,
    VALUE_KEYS,
    NumericInput,
    coerce,
    coerce_record,
    looks_numeric,
)

# Numerical Safeguards
from fincalc.core.math.numerical_safeguards import (
    CURRENCY_DECIMALS,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EPS_ZERO,
    MAX_EXPONENT,
    MAX_SAFE_VALUE,
    MIN_SAFE_VALUE,
    bound_result,
    clamp,
    is_close,
    is_valid_float,
    is_zero,
    round_to_precision,
    safe_add,
    safe_divide,
    safe_multiply,
    safe_power,
    safe_subtract,
    sanitize_float,
)

# Compounding
from fincalc.core.math.compounding import (
    COMPOUNDING_R_FLOOR_EPS,
    LOG1P_SWITCH_THRESHOLD,
    GrowthSplit,
    PaymentTiming,
    annualized_return,
    annuity_factor,
    clamp_compound_rate,
    effective_annual_rate,
    future_value_annuity,
    future_value_lump_sum,
    growth_factor,
    growth_trajectory,
    inflate,
    log_growth,
    required_contribution,
    split_growth,
)

__all__ = [
    # Coercion
    "EMPTY_TOKENS",
    "NOISE_FLOOR",
    "VALUE_KEYS",
    "NumericInput",
    "coerce",
    "coerce_record",
    "looks_numeric",
    # Numerical Safeguards — Constants
    "CURRENCY_DECIMALS",
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EPS_ZERO",
    "MAX_EXPONENT",
    "MAX_SAFE_VALUE",
    "MIN_SAFE_VALUE",
    # Numerical Safeguards — Functions
    "bound_result",
    "clamp",
    "is_close",
    "is_valid_float",
    "is_zero",
    "round_to_precision",
    "safe_add",
    "safe_divide",
    "safe_multiply",
    "safe_power",
    "safe_subtract",
    "sanitize_float",
    # Compounding — Constants
    "COMPOUNDING_R_FLOOR_EPS",
    "LOG1P_SWITCH_THRESHOLD",
    # Compounding — Types
    "GrowthSplit",
    "PaymentTiming",
    # Compounding — Functions
    "annualized_return",
    "annuity_factor",
    "clamp_compound_rate",
    "effective_annual_rate",
    "future_value_annuity",
    "future_value_lump_sum",
    "growth_factor",
    "growth_trajectory",
    "inflate",
    "log_growth",
    "required_contribution",
    "split_growth",
]
