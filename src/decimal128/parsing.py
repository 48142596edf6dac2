"""
Parsing — разбор входных значений Decimal128

Принимаемые формы:
- десятичная запись: знак, цифры, необязательная точка ("1.20", "-.5", "5.")
- экспоненциальная запись: суффикс e/E с целым со знаком ("1.2E+3")
- разделители "_" удаляются перед разбором ("1_000.5")
- литералы NaN, Infinity, +Infinity, -Infinity (точный регистр,
  без payload и без знака у NaN)
- int (произвольной точности) и float (через repr: сохраняет -0.0, nan, inf)

Результат — ParsedNumber без нормализации: коэффициент может быть длиннее
34 цифр, quantum — вне диапазона. Нормализация выполняется в number.
"""

import re
from enum import Enum
from typing import NamedTuple, Union

from src.decimal128.errors import DecimalSyntaxError


# =============================================================================
# ТИПЫ
# =============================================================================


class ValueKind(str, Enum):
    """Вид значения Decimal128"""

    NAN = "nan"
    INFINITE = "infinite"
    FINITE = "finite"


class ParsedNumber(NamedTuple):
    """Результат разбора (до нормализации)"""

    kind: ValueKind
    is_negative: bool
    coefficient: int  # беззнаковый; 0 для NaN/Infinity
    quantum: int  # 0 для NaN/Infinity


# =============================================================================
# ГРАММАТИКА
# =============================================================================

# Общая грамматика конечной записи (без "_"), её использует и Rational.from_string
DECIMAL_TEXT = re.compile(
    r"^(?P<sign>[+-])?(?P<int>[0-9]*)(?:\.(?P<frac>[0-9]*))?(?:[eE](?P<exp>[+-]?[0-9]+))?$"
)

_LITERALS = {
    "NaN": ParsedNumber(ValueKind.NAN, False, 0, 0),
    "Infinity": ParsedNumber(ValueKind.INFINITE, False, 0, 0),
    "+Infinity": ParsedNumber(ValueKind.INFINITE, False, 0, 0),
    "-Infinity": ParsedNumber(ValueKind.INFINITE, True, 0, 0),
}

_FLOAT_LITERALS = {
    "nan": "NaN",
    "inf": "Infinity",
    "-inf": "-Infinity",
}


# =============================================================================
# РАЗБОР
# =============================================================================


def parse_text(text: str) -> ParsedNumber:
    """
    Разбор строковой записи числа.

    Args:
        text: Запись числа

    Returns:
        ParsedNumber

    Raises:
        DecimalSyntaxError: Пустая строка, одиночный знак или точка,
            пробелы, неизвестный литерал

    Examples:
        >>> parse_text("-1.20")
        ParsedNumber(kind=<ValueKind.FINITE: 'finite'>, is_negative=True, coefficient=120, quantum=-2)
        >>> parse_text("1_000E-3").coefficient
        1000
    """
    if text in _LITERALS:
        return _LITERALS[text]

    match = DECIMAL_TEXT.match(text.replace("_", ""))
    if match is None:
        raise DecimalSyntaxError(f'Illegal number format "{text}"')

    int_digits = match.group("int")
    frac_digits = match.group("frac") or ""
    if not int_digits and not frac_digits:
        raise DecimalSyntaxError(f'Illegal number format "{text}"')

    exponent = int(match.group("exp") or 0)

    return ParsedNumber(
        kind=ValueKind.FINITE,
        is_negative=match.group("sign") == "-",
        coefficient=int(int_digits + frac_digits),
        quantum=exponent - len(frac_digits),
    )


def parse_value(value: Union[str, int, float]) -> ParsedNumber:
    """
    Разбор строки, int или float.

    Raises:
        DecimalSyntaxError: Некорректная строка
        TypeError: bool или неподдерживаемый тип

    Examples:
        >>> parse_value(-0.0)
        ParsedNumber(kind=<ValueKind.FINITE: 'finite'>, is_negative=True, coefficient=0, quantum=-1)
        >>> parse_value(42).quantum
        0
    """
    if isinstance(value, bool):
        raise TypeError("Cannot construct Decimal128 from bool")

    if isinstance(value, str):
        return parse_text(value)

    if isinstance(value, int):
        return ParsedNumber(ValueKind.FINITE, value < 0, abs(value), 0)

    if isinstance(value, float):
        text = repr(value)
        return parse_text(_FLOAT_LITERALS.get(text, text))

    raise TypeError(f"Cannot construct Decimal128 from {type(value).__name__}")
