"""
Rounding — режимы округления и правило переноса

Режимы (имена как в Intl.NumberFormat v3):
- ceil / floor / trunc / expand — направленные режимы
- halfCeil / halfFloor / halfTrunc / halfExpand / halfEven — к ближайшему,
  различаются только разрешением точной середины (.5)

Дополнительно принимаются имена атрибутов округления IEEE 754-2008
(roundTowardPositive, roundTiesToEven, ...).

Алгоритм округления (см. rational.Rational.round_to):
1. Отрисовать на одну цифру больше целевой точности
2. По решающей цифре, «липкому» остатку за ней и (для half-режимов)
   чётности последней сохраняемой цифры решить, нужен ли перенос
3. Перенос распространяется целочисленным сложением по сохраняемым цифрам
"""

from enum import Enum
from typing import Final, Union

from src.decimal128.errors import DecimalRangeError


# =============================================================================
# ТИПЫ
# =============================================================================


class RoundingMode(str, Enum):
    """Режим округления"""

    CEIL = "ceil"
    FLOOR = "floor"
    TRUNC = "trunc"
    EXPAND = "expand"
    HALF_CEIL = "halfCeil"
    HALF_FLOOR = "halfFloor"
    HALF_TRUNC = "halfTrunc"
    HALF_EXPAND = "halfExpand"
    HALF_EVEN = "halfEven"


# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Режим по умолчанию (IEEE 754 default: roundTiesToEven)
DEFAULT_ROUNDING_MODE: Final[RoundingMode] = RoundingMode.HALF_EVEN

ROUNDING_MODES: Final[tuple[RoundingMode, ...]] = tuple(RoundingMode)

# Имена атрибутов IEEE 754-2008 → эквивалентный режим
IEEE_ROUNDING_ALIASES: Final[dict[str, RoundingMode]] = {
    "roundTowardPositive": RoundingMode.CEIL,
    "roundTowardNegative": RoundingMode.FLOOR,
    "roundTowardZero": RoundingMode.TRUNC,
    "roundTiesToAway": RoundingMode.HALF_EXPAND,
    "roundTiesToEven": RoundingMode.HALF_EVEN,
}

_HALF_MODES: Final[frozenset[RoundingMode]] = frozenset(
    {
        RoundingMode.HALF_CEIL,
        RoundingMode.HALF_FLOOR,
        RoundingMode.HALF_TRUNC,
        RoundingMode.HALF_EXPAND,
        RoundingMode.HALF_EVEN,
    }
)


# =============================================================================
# РАЗБОР ИМЕНИ РЕЖИМА
# =============================================================================


def parse_rounding_mode(mode: Union[str, RoundingMode]) -> RoundingMode:
    """
    Разбор имени режима округления.

    Args:
        mode: RoundingMode, имя режима ("halfEven") или IEEE-имя
            ("roundTiesToEven")

    Returns:
        RoundingMode

    Raises:
        DecimalRangeError: Если имя не распознано

    Examples:
        >>> parse_rounding_mode("ceil")
        <RoundingMode.CEIL: 'ceil'>
        >>> parse_rounding_mode("roundTiesToEven")
        <RoundingMode.HALF_EVEN: 'halfEven'>
    """
    if isinstance(mode, RoundingMode):
        return mode

    if isinstance(mode, str):
        if mode in IEEE_ROUNDING_ALIASES:
            return IEEE_ROUNDING_ALIASES[mode]
        try:
            return RoundingMode(mode)
        except ValueError:
            pass

    raise DecimalRangeError(f"Invalid rounding mode: {mode!r}")


# =============================================================================
# ПРАВИЛО ПЕРЕНОСА
# =============================================================================


def rounds_away_from_zero(
    mode: RoundingMode,
    is_negative: bool,
    last_kept_digit: int,
    deciding_digit: int,
    rest_is_zero: bool,
) -> bool:
    """
    Нужно ли увеличить модуль сохраняемых цифр на единицу младшего разряда.

    Args:
        mode: Режим округления
        is_negative: Знак округляемого значения
        last_kept_digit: Последняя сохраняемая цифра (для halfEven)
        deciding_digit: Первая отбрасываемая цифра
        rest_is_zero: True если за решающей цифрой остаток точно равен нулю

    Returns:
        True если требуется перенос (округление от нуля)

    Examples:
        >>> rounds_away_from_zero(RoundingMode.HALF_EVEN, False, 2, 5, True)
        False
        >>> rounds_away_from_zero(RoundingMode.HALF_EVEN, False, 3, 5, True)
        True
        >>> rounds_away_from_zero(RoundingMode.CEIL, False, 0, 0, False)
        True
    """
    if deciding_digit == 0 and rest_is_zero:
        # Значение представимо точно
        return False

    if mode not in _HALF_MODES:
        if mode is RoundingMode.TRUNC:
            return False
        if mode is RoundingMode.EXPAND:
            return True
        if mode is RoundingMode.CEIL:
            return not is_negative
        # FLOOR
        return is_negative

    if deciding_digit < 5:
        return False
    if deciding_digit > 5 or not rest_is_zero:
        return True

    # Точная середина
    if mode is RoundingMode.HALF_EXPAND:
        return True
    if mode is RoundingMode.HALF_TRUNC:
        return False
    if mode is RoundingMode.HALF_CEIL:
        return not is_negative
    if mode is RoundingMode.HALF_FLOOR:
        return is_negative
    # HALF_EVEN
    return last_kept_digit % 2 == 1
