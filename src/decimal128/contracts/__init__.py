"""
Contract Validation Module

JSON Schema записи Decimal128 и JSON codec с точными десятичными значениями.
"""

from .codec import dumps, loads
from .validators import (
    Decimal128StringValidator,
    SchemaLoader,
    validate_decimal128_string,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "Decimal128StringValidator",
    # Functions
    "validate_decimal128_string",
    "loads",
    "dumps",
]
