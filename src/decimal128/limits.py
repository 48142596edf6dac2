"""
Limits — границы decimal128 envelope

IEEE 754-2008, формат decimal128 (логическое пространство значений):
- коэффициент: не более 34 десятичных цифр
- экспонента (quantum): [-6176, 6111]
- нормальные числа: adjusted exponent >= -6143

Все значения Decimal128 после каждой операции обязаны лежать внутри этих
границ (см. number.normalize).
"""

from typing import Final

# =============================================================================
# ПАРАМЕТРЫ ФОРМАТА DECIMAL128
# =============================================================================

# Максимальное количество значащих цифр коэффициента
MAX_SIGNIFICANT_DIGITS: Final[int] = 34

# Минимальная экспонента (quantum) конечного значения
EXPONENT_MIN: Final[int] = -6176

# Максимальная экспонента (quantum) конечного значения
EXPONENT_MAX: Final[int] = 6111

# Минимальная adjusted exponent нормального (не subnormal) значения
# Emin = EXPONENT_MIN + MAX_SIGNIFICANT_DIGITS - 1
NORMAL_EXPONENT_MIN: Final[int] = -6143
