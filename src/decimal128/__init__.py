"""
decimal128 — точная десятичная арифметика IEEE 754-2008 decimal128

Коэффициент до 34 цифр, экспонента [-6176, 6111], NaN и Infinity со знаком.
Предназначено для денежных расчётов, где ошибки двоичного float недопустимы.
"""

# Limits
from src.decimal128.limits import (
    EXPONENT_MAX,
    EXPONENT_MIN,
    MAX_SIGNIFICANT_DIGITS,
    NORMAL_EXPONENT_MIN,
)

# Errors
from src.decimal128.errors import (
    Decimal128Error,
    DecimalRangeError,
    DecimalSyntaxError,
)

# Rounding
from src.decimal128.rounding import (
    DEFAULT_ROUNDING_MODE,
    IEEE_ROUNDING_ALIASES,
    ROUNDING_MODES,
    RoundingMode,
    parse_rounding_mode,
)

# Rational engine
from src.decimal128.rational import (
    DigitSequence,
    Expansion,
    Marker,
    Rational,
)

# Cohort/quantum
from src.decimal128.cohort import (
    Decimal,
    ZeroCohort,
)

# Decimal128
from src.decimal128.number import (
    Decimal128,
    normalize,
)

__all__ = [
    # Limits
    "MAX_SIGNIFICANT_DIGITS",
    "EXPONENT_MIN",
    "EXPONENT_MAX",
    "NORMAL_EXPONENT_MIN",
    # Errors
    "Decimal128Error",
    "DecimalSyntaxError",
    "DecimalRangeError",
    # Rounding
    "RoundingMode",
    "ROUNDING_MODES",
    "DEFAULT_ROUNDING_MODE",
    "IEEE_ROUNDING_ALIASES",
    "parse_rounding_mode",
    # Rational engine
    "Rational",
    "DigitSequence",
    "Expansion",
    "Marker",
    # Cohort/quantum
    "Decimal",
    "ZeroCohort",
    # Decimal128
    "Decimal128",
    "normalize",
]
