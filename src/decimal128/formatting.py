"""
Formatting — отрисовка конечных значений в строки

Функции работают с тройкой (is_negative, coefficient, quantum) конечного
значения; NaN и Infinity обрабатывает number.Decimal128.

- render_decimal: обычная запись ("1.20", "1.2", "-0", "1200")
- render_exponential: одна цифра мантиссы, экспонента со знаком ("1.2e+3")
- render_precision: ровно N значащих цифр ("123.5", "1.2e+2")
- round_significant: округление коэффициента до N значащих цифр
"""

from typing import Optional

from src.decimal128.rational import Rational
from src.decimal128.rounding import DEFAULT_ROUNDING_MODE, RoundingMode


def round_significant(
    is_negative: bool,
    coefficient: int,
    significant_digits: int,
    mode: RoundingMode = DEFAULT_ROUNDING_MODE,
) -> tuple[str, int]:
    """
    Округление ненулевого коэффициента до significant_digits значащих цифр.

    Args:
        is_negative: Знак значения (важен для ceil/floor)
        coefficient: Беззнаковый ненулевой коэффициент
        significant_digits: Количество значащих цифр (>= 1)
        mode: Режим округления

    Returns:
        (digits, carry):
            - digits: Строка ровно из significant_digits цифр
            - carry: 1 если перенос добавил разряд (9.99 → 10.0), иначе 0

    Examples:
        >>> round_significant(False, 123456, 3)
        ('123', 0)
        >>> round_significant(False, 9996, 3)
        ('100', 1)
    """
    text = str(coefficient)
    signed = -coefficient if is_negative else coefficient

    # d.ddd... с одной целой цифрой
    scaled = Rational(signed, 10 ** (len(text) - 1))
    rounded = scaled.round_to(significant_digits - 1, mode).abs()

    carry = 0
    if rounded >= Rational(10):
        rounded = rounded.scale10(-1)
        carry = 1

    digits = rounded.to_fixed(significant_digits - 1).replace(".", "")
    return digits, carry


def render_decimal(
    is_negative: bool, coefficient: int, quantum: int, normalize: bool = True
) -> str:
    """
    Обычная десятичная запись.

    Args:
        normalize: Отбрасывать хвостовые нули дробной части

    Examples:
        >>> render_decimal(False, 120, -2)
        '1.2'
        >>> render_decimal(False, 120, -2, normalize=False)
        '1.20'
        >>> render_decimal(True, 0, -2, normalize=False)
        '-0.00'
        >>> render_decimal(False, 12, 2)
        '1200'
    """
    sign = "-" if is_negative else ""
    digits = str(coefficient)

    if quantum >= 0:
        if coefficient == 0:
            return sign + "0"
        return sign + digits + "0" * quantum

    scale = -quantum
    digits = digits.rjust(scale + 1, "0")
    integer_part = digits[:-scale]
    fraction_part = digits[-scale:]

    if normalize:
        fraction_part = fraction_part.rstrip("0")

    if fraction_part:
        return f"{sign}{integer_part}.{fraction_part}"
    return sign + integer_part


def render_exponential(
    is_negative: bool,
    coefficient: int,
    quantum: int,
    fraction_digits: Optional[int] = None,
    mode: RoundingMode = DEFAULT_ROUNDING_MODE,
) -> str:
    """
    Экспоненциальная запись с одной целой цифрой мантиссы.

    Args:
        fraction_digits: Дробные цифры мантиссы (None — все значащие цифры)
        mode: Режим округления при fraction_digits

    Examples:
        >>> render_exponential(False, 123456, -3)
        '1.23456e+2'
        >>> render_exponential(False, 1042, -5)
        '1.042e-2'
        >>> render_exponential(False, 123456, -3, fraction_digits=2)
        '1.23e+2'
        >>> render_exponential(True, 0, 0)
        '-0e+0'
    """
    sign = "-" if is_negative else ""

    if coefficient == 0:
        mantissa = "0"
        if fraction_digits:
            mantissa += "." + "0" * fraction_digits
        return f"{sign}{mantissa}e{quantum:+d}"

    text = str(coefficient)
    exponent = len(text) - 1 + quantum

    if fraction_digits is None:
        digits = text.rstrip("0")
    else:
        digits, carry = round_significant(
            is_negative, coefficient, fraction_digits + 1, mode
        )
        exponent += carry

    mantissa = digits[0]
    if len(digits) > 1:
        mantissa += "." + digits[1:]
    return f"{sign}{mantissa}e{exponent:+d}"


def render_precision(
    is_negative: bool, coefficient: int, quantum: int, significant_digits: int
) -> str:
    """
    Запись ровно с significant_digits значащими цифрами (halfEven).

    Экспоненциальная форма выбирается, когда целая часть требует больше
    цифр, чем запрошено.

    Examples:
        >>> render_precision(False, 123456, -3, 4)
        '123.5'
        >>> render_precision(False, 123456, -3, 2)
        '1.2e+2'
        >>> render_precision(False, 123, -5, 2)
        '0.0012'
        >>> render_precision(False, 0, 0, 3)
        '0.00'
    """
    sign = "-" if is_negative else ""

    if coefficient == 0:
        if significant_digits > 1:
            return f"{sign}0.{'0' * (significant_digits - 1)}"
        return sign + "0"

    digits, carry = round_significant(
        is_negative, coefficient, significant_digits, DEFAULT_ROUNDING_MODE
    )
    exponent = len(str(coefficient)) - 1 + quantum + carry

    if exponent >= significant_digits:
        mantissa = digits[0]
        if len(digits) > 1:
            mantissa += "." + digits[1:]
        return f"{sign}{mantissa}e{exponent:+d}"

    if exponent >= 0:
        integer_part = digits[: exponent + 1]
        fraction_part = digits[exponent + 1 :]
    else:
        integer_part = "0"
        fraction_part = "0" * (-exponent - 1) + digits

    if fraction_part:
        return f"{sign}{integer_part}.{fraction_part}"
    return sign + integer_part
