"""
Number — значение Decimal128

IEEE 754-2008 decimal128 (логическое пространство значений):
- конечные значения: знак, коэффициент не более 34 цифр, quantum в
  [-6176, 6111]; нули со знаком различаются при выводе, но равны
- одно «тихое» NaN, Infinity и -Infinity

Каждая операция возвращает новый экземпляр, прошедший normalize():
1. нулевой коэффициент: quantum прижимается к [EXPONENT_MIN, EXPONENT_MAX]
2. более 34 цифр: округление halfEven до 34 цифр с ростом quantum; если для
   этого нужен положительный quantum — переполнение
3. ненулевой quantum > EXPONENT_MAX — переполнение
4. ненулевой quantum < EXPONENT_MIN — потеря значимости: ноль со знаком

Политика переполнения: насыщение до Infinity со знаком (конструктор и
арифметика одинаково). Недопустимые операции (0 × ∞, ∞ − ∞, x / 0, x % 0,
∞ % y) дают NaN без исключения.
"""

import logging
import math
from typing import Optional, Union

import structlog

from src.decimal128.cohort import Decimal
from src.decimal128.errors import DecimalRangeError
from src.decimal128.formatting import render_decimal, render_exponential, render_precision
from src.decimal128.limits import (
    EXPONENT_MAX,
    EXPONENT_MIN,
    MAX_SIGNIFICANT_DIGITS,
    NORMAL_EXPONENT_MIN,
)
from src.decimal128.options import (
    RoundOptions,
    ToExponentialOptions,
    ToFixedOptions,
    ToPrecisionOptions,
    ToStringOptions,
    build_options,
)
from src.decimal128.parsing import ValueKind, parse_value
from src.decimal128.rational import Rational
from src.decimal128.rounding import DEFAULT_ROUNDING_MODE, RoundingMode

logger = structlog.wrap_logger(
    logging.getLogger(__name__),
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.processors.KeyValueRenderer(key_order=["event"]),
    ],
)

DecimalInput = Union["Decimal128", str, int, float]

# Запас по порядку при оценке результата pow до точного вычисления
_POW_ESTIMATE_MARGIN = MAX_SIGNIFICANT_DIGITS + 1

# Выше этого |n| степень любого |x| != 1 выходит за диапазон экспонент:
# ближайшее к 1 значение 1 - 1E-34 даёт |log10| > 4E-35
_POW_EXPONENT_LIMIT = 10**40


# =============================================================================
# DECIMAL128
# =============================================================================


class Decimal128:
    """
    Десятичное число IEEE 754-2008 decimal128.

    Args:
        value: Строка, int, float или Decimal128

    Raises:
        DecimalSyntaxError: Некорректная строка
        TypeError: bool или неподдерживаемый тип

    Examples:
        >>> str(Decimal128("1.20"))
        '1.2'
        >>> Decimal128("1.20").to_string(normalize=False)
        '1.20'
        >>> str(Decimal128("0.1") + Decimal128("0.2"))
        '0.3'
        >>> str(Decimal128("1") / Decimal128("3"))
        '0.3333333333333333333333333333333333'
    """

    __slots__ = ("_kind", "_is_negative", "_decimal")

    def __init__(self, value: DecimalInput):
        if isinstance(value, Decimal128):
            self._kind = value._kind
            self._is_negative = value._is_negative
            self._decimal = value._decimal
            return

        parsed = parse_value(value)
        if parsed.kind is ValueKind.FINITE:
            source = normalize(parsed.is_negative, parsed.coefficient, parsed.quantum)
        elif parsed.kind is ValueKind.INFINITE:
            source = _infinity(parsed.is_negative)
        else:
            source = _nan()

        self._kind = source._kind
        self._is_negative = source._is_negative
        self._decimal = source._decimal

    @classmethod
    def _make(
        cls, kind: ValueKind, is_negative: bool, decimal: Optional[Decimal] = None
    ) -> "Decimal128":
        instance = cls.__new__(cls)
        instance._kind = kind
        instance._is_negative = is_negative
        instance._decimal = decimal
        return instance

    # -------------------------------------------------------------------------
    # Вид значения
    # -------------------------------------------------------------------------

    def is_nan(self) -> bool:
        return self._kind is ValueKind.NAN

    def is_finite(self) -> bool:
        return self._kind is ValueKind.FINITE

    def is_infinite(self) -> bool:
        return self._kind is ValueKind.INFINITE

    def is_negative(self) -> bool:
        """Знаковый бит (True для -0 и -Infinity, False для NaN)."""
        return self._is_negative

    def is_zero(self) -> bool:
        return self._decimal is not None and self._decimal.is_zero()

    def is_integer(self) -> bool:
        if self._decimal is None:
            return False
        return self._decimal.to_rational().is_integer()

    # -------------------------------------------------------------------------
    # Коэффициент и экспонента
    # -------------------------------------------------------------------------

    def _require_finite(self, operation: str) -> Decimal:
        if self._decimal is None:
            raise DecimalRangeError(f"{operation} is undefined for {self}")
        return self._decimal

    @property
    def coefficient(self) -> int:
        """Беззнаковый коэффициент как записан ("1.20" → 120)."""
        return self._require_finite("coefficient").coefficient

    @property
    def quantum(self) -> int:
        """Экспонента как записана ("1.20" → -2)."""
        return self._require_finite("quantum").quantum

    @property
    def significand(self) -> int:
        """Коэффициент без хвостовых нулей ("1000" → 1; ноль → 0)."""
        significand, _ = self._stripped()
        return significand

    @property
    def exponent(self) -> int:
        """Экспонента при significand ("1000" → 3; ноль → quantum)."""
        _, exponent = self._stripped()
        return exponent

    def _stripped(self) -> tuple[int, int]:
        decimal = self._require_finite("significand")
        coefficient, quantum = decimal.coefficient, decimal.quantum
        if coefficient == 0:
            return 0, quantum
        text = str(coefficient)
        stripped = text.rstrip("0")
        return int(stripped), quantum + len(text) - len(stripped)

    def adjusted_exponent(self) -> int:
        """
        Экспонента старшей цифры: len(coefficient) - 1 + quantum.

        Examples:
            >>> Decimal128("123.456").adjusted_exponent()
            2
        """
        decimal = self._require_finite("adjusted_exponent")
        if decimal.is_zero():
            return decimal.quantum
        return len(str(decimal.coefficient)) - 1 + decimal.quantum

    def mantissa(self) -> "Decimal128":
        """
        Значение с одной целой цифрой ("123.456" → 1.23456).

        Raises:
            DecimalRangeError: Для NaN, Infinity и нуля
        """
        decimal = self._require_finite("mantissa")
        if decimal.is_zero():
            raise DecimalRangeError("mantissa is undefined for zero")
        coefficient = decimal.coefficient
        return normalize(self._is_negative, coefficient, 1 - len(str(coefficient)))

    def is_normal(self) -> bool:
        """Adjusted exponent >= -6143."""
        decimal = self._require_finite("is_normal")
        if decimal.is_zero():
            raise DecimalRangeError("is_normal is undefined for zero")
        return self.adjusted_exponent() >= NORMAL_EXPONENT_MIN

    def is_subnormal(self) -> bool:
        """Adjusted exponent < -6143."""
        decimal = self._require_finite("is_subnormal")
        if decimal.is_zero():
            raise DecimalRangeError("is_subnormal is undefined for zero")
        return self.adjusted_exponent() < NORMAL_EXPONENT_MIN

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, *others: DecimalInput) -> "Decimal128":
        """
        Сумма слева направо, нормализация на каждом шаге.

        Examples:
            >>> str(Decimal128("1.25").add("5.00", 2))
            '8.25'
        """
        result = self
        for other in others:
            result = _add(result, _coerce(other))
        return result

    def subtract(self, *others: DecimalInput) -> "Decimal128":
        result = self
        for other in others:
            result = _add(result, _coerce(other).negate())
        return result

    def multiply(self, *others: DecimalInput) -> "Decimal128":
        result = self
        for other in others:
            result = _multiply(result, _coerce(other))
        return result

    def divide(self, other: DecimalInput) -> "Decimal128":
        """
        Деление с округлением halfEven до 34 значащих цифр.

        Examples:
            >>> str(Decimal128("4.1").divide("1.25"))
            '3.28'
        """
        return _divide(self, _coerce(other))

    def remainder(self, other: DecimalInput) -> "Decimal128":
        """
        Остаток x - trunc(x / y) * y со знаком делимого.

        Examples:
            >>> str(Decimal128("-4.1").remainder("1.25"))
            '-0.35'
        """
        return _remainder(self, _coerce(other))

    def pow(self, n: int) -> "Decimal128":
        """
        Целая степень.

        Отрицательная степень вычисляется как 1 / x**|n| с округлением
        halfEven до 34 цифр.

        Raises:
            DecimalRangeError: Если n не int

        Examples:
            >>> str(Decimal128("1.5").pow(2))
            '2.25'
            >>> str(Decimal128("5.6").pow(-2))
            '0.03188775510204081632653061224489796'
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise DecimalRangeError(f"Exponent must be an int, got {n!r}")
        return _pow(self, n)

    def scale10(self, n: int) -> "Decimal128":
        """
        Умножение на 10**n (сдвиг quantum).

        Raises:
            DecimalRangeError: Для NaN и Infinity или если n не int
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise DecimalRangeError(f"scale10 argument must be an int, got {n!r}")
        decimal = self._require_finite("scale10")
        return normalize(self._is_negative, decimal.coefficient, decimal.quantum + n)

    def negate(self) -> "Decimal128":
        if self.is_nan():
            return self
        return Decimal128._make(self._kind, not self._is_negative, self._negated_decimal())

    def abs(self) -> "Decimal128":
        if self.is_nan() or not self._is_negative:
            return self
        return self.negate()

    def _negated_decimal(self) -> Optional[Decimal]:
        if self._decimal is None:
            return None
        return Decimal.from_coefficient(
            not self._is_negative, self._decimal.coefficient, self._decimal.quantum
        )

    # -------------------------------------------------------------------------
    # Округление
    # -------------------------------------------------------------------------

    def round(
        self,
        places: int = 0,
        mode: Union[str, RoundingMode] = DEFAULT_ROUNDING_MODE,
    ) -> "Decimal128":
        """
        Округление до places дробных цифр.

        Результат имеет quantum max(quantum, -places); округлённый до нуля
        результат сохраняет знак операнда.

        Args:
            places: Количество дробных цифр (>= 0)
            mode: Режим округления или IEEE-алиас

        Raises:
            DecimalRangeError: Если places не неотрицательный int или
                режим неизвестен

        Examples:
            >>> str(Decimal128("42.345").round(2))
            '42.34'
            >>> str(Decimal128("1.456").round(2, "ceil"))
            '1.46'
            >>> str(Decimal128("-0.5").round(0, "trunc"))
            '-0'
        """
        options = build_options(RoundOptions, places=places, mode=mode)
        if self._decimal is None or self._decimal.quantum >= -options.places:
            return self

        rounded = self._decimal.to_rational().round_to(options.places, options.mode)
        coefficient = rounded.scale10(options.places).numerator
        return normalize(self._is_negative, coefficient, -options.places)

    def __round__(self, ndigits: Optional[int] = None):
        if ndigits is None:
            return self.round(0).to_int()
        return self.round(ndigits)

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare(self, other: DecimalInput) -> "Decimal128":
        """
        Трёхзначное сравнение: Decimal128 -1, 0, 1 или NaN.

        Examples:
            >>> str(Decimal128("1.20").compare("1.2"))
            '0'
            >>> str(Decimal128("NaN").compare(1))
            'NaN'
        """
        other = _coerce(other)
        if self.is_nan() or other.is_nan():
            return _nan()
        return Decimal128(_compare_values(self, other))

    def equals(self, other: DecimalInput) -> bool:
        """
        Равенство значений (0 == -0, 1.20 == 1.2).

        Raises:
            DecimalRangeError: Если хотя бы одна сторона NaN
        """
        return self._ordered_compare(other, "equals") == 0

    def less_than(self, other: DecimalInput) -> bool:
        """
        Raises:
            DecimalRangeError: Если хотя бы одна сторона NaN
        """
        return self._ordered_compare(other, "less_than") < 0

    def _ordered_compare(self, other: DecimalInput, operation: str) -> int:
        other = _coerce(other)
        if self.is_nan() or other.is_nan():
            raise DecimalRangeError(f"{operation} is undefined for NaN")
        return _compare_values(self, other)

    def __eq__(self, other: object) -> bool:
        other = _coerce_operand(other)
        if other is NotImplemented:
            return NotImplemented
        if self.is_nan() or other.is_nan():
            return False
        return _compare_values(self, other) == 0

    def __lt__(self, other: object) -> bool:
        other = _coerce_operand(other)
        if other is NotImplemented:
            return NotImplemented
        if self.is_nan() or other.is_nan():
            return False
        return _compare_values(self, other) < 0

    def __le__(self, other: object) -> bool:
        other = _coerce_operand(other)
        if other is NotImplemented:
            return NotImplemented
        if self.is_nan() or other.is_nan():
            return False
        return _compare_values(self, other) <= 0

    def __gt__(self, other: object) -> bool:
        other = _coerce_operand(other)
        if other is NotImplemented:
            return NotImplemented
        if self.is_nan() or other.is_nan():
            return False
        return _compare_values(self, other) > 0

    def __ge__(self, other: object) -> bool:
        other = _coerce_operand(other)
        if other is NotImplemented:
            return NotImplemented
        if self.is_nan() or other.is_nan():
            return False
        return _compare_values(self, other) >= 0

    def __hash__(self) -> int:
        if self.is_nan():
            return object.__hash__(self)
        if self.is_infinite():
            return hash(-math.inf if self._is_negative else math.inf)
        return hash(self._decimal.to_rational())

    def __bool__(self) -> bool:
        return not self.is_zero()

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other):
        other = _coerce_operand(other, allow_str=True)
        if other is NotImplemented:
            return NotImplemented
        return _add(self, other)

    def __radd__(self, other):
        other = _coerce_operand(other, allow_str=True)
        if other is NotImplemented:
            return NotImplemented
        return _add(other, self)

    def __sub__(self, other):
        other = _coerce_operand(other, allow_str=True)
        if other is NotImplemented:
            return NotImplemented
        return _add(self, other.negate())

    def __rsub__(self, other):
        other = _coerce_operand(other, allow_str=True)
        if other is NotImplemented:
            return NotImplemented
        return _add(other, self.negate())

    def __mul__(self, other):
        other = _coerce_operand(other, allow_str=True)
        if other is NotImplemented:
            return NotImplemented
        return _multiply(self, other)

    def __rmul__(self, other):
        other = _coerce_operand(other, allow_str=True)
        if other is NotImplemented:
            return NotImplemented
        return _multiply(other, self)

    def __truediv__(self, other):
        other = _coerce_operand(other, allow_str=True)
        if other is NotImplemented:
            return NotImplemented
        return _divide(self, other)

    def __rtruediv__(self, other):
        other = _coerce_operand(other, allow_str=True)
        if other is NotImplemented:
            return NotImplemented
        return _divide(other, self)

    def __mod__(self, other):
        other = _coerce_operand(other, allow_str=True)
        if other is NotImplemented:
            return NotImplemented
        return _remainder(self, other)

    def __rmod__(self, other):
        other = _coerce_operand(other, allow_str=True)
        if other is NotImplemented:
            return NotImplemented
        return _remainder(other, self)

    def __pow__(self, n):
        if isinstance(n, bool) or not isinstance(n, int):
            return NotImplemented
        return _pow(self, n)

    def __neg__(self) -> "Decimal128":
        return self.negate()

    def __pos__(self) -> "Decimal128":
        return self

    def __abs__(self) -> "Decimal128":
        return self.abs()

    # -------------------------------------------------------------------------
    # Преобразования
    # -------------------------------------------------------------------------

    def to_string(self, normalize: bool = True, format: str = "decimal") -> str:
        """
        Строковая запись.

        Args:
            normalize: Отбрасывать хвостовые нули дробной части
            format: "decimal" или "exponential"

        Examples:
            >>> Decimal128("0.00").to_string(normalize=False)
            '0.00'
            >>> Decimal128("123.456").to_string(format="exponential")
            '1.23456e+2'
        """
        options = build_options(ToStringOptions, normalize=normalize, format=format)
        special = self._special_string()
        if special is not None:
            return special
        if options.format == "exponential":
            return self.to_exponential()
        return render_decimal(
            self._is_negative,
            self._decimal.coefficient,
            self._decimal.quantum,
            normalize=options.normalize,
        )

    def to_fixed(
        self,
        digits: int = 0,
        rounding_mode: Union[str, RoundingMode] = DEFAULT_ROUNDING_MODE,
    ) -> str:
        """
        Запись ровно с digits дробными цифрами (дополнение нулями или
        округление).

        Examples:
            >>> Decimal128("123.456").to_fixed(4)
            '123.4560'
            >>> Decimal128("123.456").to_fixed(2)
            '123.46'
            >>> Decimal128("123.456").to_fixed()
            '123'
        """
        options = build_options(
            ToFixedOptions, digits=digits, rounding_mode=rounding_mode
        )
        special = self._special_string()
        if special is not None:
            return special

        rounded = self.round(options.digits, options.rounding_mode)
        if not rounded.is_finite():
            return rounded.to_string()

        text = render_decimal(
            rounded._is_negative,
            rounded._decimal.coefficient,
            rounded._decimal.quantum,
            normalize=False,
        )
        if options.digits == 0:
            return text
        integer_part, _, fraction_part = text.partition(".")
        return f"{integer_part}.{fraction_part.ljust(options.digits, '0')}"

    def to_precision(self, digits: Optional[int] = None) -> str:
        """
        Запись ровно с digits значащими цифрами (halfEven).

        Examples:
            >>> Decimal128("123.456").to_precision(4)
            '123.5'
            >>> Decimal128("123.456").to_precision(2)
            '1.2e+2'
        """
        options = build_options(ToPrecisionOptions, digits=digits)
        if options.digits is None:
            return self.to_string()
        special = self._special_string()
        if special is not None:
            return special
        return render_precision(
            self._is_negative,
            self._decimal.coefficient,
            self._decimal.quantum,
            options.digits,
        )

    def to_exponential(
        self,
        digits: Optional[int] = None,
        rounding_mode: Union[str, RoundingMode] = DEFAULT_ROUNDING_MODE,
    ) -> str:
        """
        Экспоненциальная запись: одна цифра мантиссы, digits дробных цифр.

        Examples:
            >>> Decimal128("42").to_exponential()
            '4.2e+1'
            >>> Decimal128("0.01042").to_exponential()
            '1.042e-2'
            >>> Decimal128("123.456").to_exponential(1)
            '1.2e+2'
        """
        options = build_options(
            ToExponentialOptions, digits=digits, rounding_mode=rounding_mode
        )
        special = self._special_string()
        if special is not None:
            return special
        return render_exponential(
            self._is_negative,
            self._decimal.coefficient,
            self._decimal.quantum,
            fraction_digits=options.digits,
            mode=options.rounding_mode,
        )

    def _special_string(self) -> Optional[str]:
        if self.is_nan():
            return "NaN"
        if self.is_infinite():
            return "-Infinity" if self._is_negative else "Infinity"
        return None

    def to_int(self) -> int:
        """
        Raises:
            DecimalRangeError: Для NaN, Infinity и нецелых значений
        """
        decimal = self._require_finite("to_int")
        value = decimal.to_rational()
        if not value.is_integer():
            raise DecimalRangeError(f"{self} is not an integer")
        return -value.numerator if value.is_negative else value.numerator

    def to_float(self) -> float:
        return float(self.to_string())

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Decimal128('{self.to_string(normalize=False)}')"


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


def _nan() -> Decimal128:
    return Decimal128._make(ValueKind.NAN, False)


def _infinity(is_negative: bool) -> Decimal128:
    return Decimal128._make(ValueKind.INFINITE, is_negative)


def _zero(is_negative: bool, quantum: int) -> Decimal128:
    quantum = min(max(quantum, EXPONENT_MIN), EXPONENT_MAX)
    return Decimal128._make(
        ValueKind.FINITE,
        is_negative,
        Decimal.from_coefficient(is_negative, 0, quantum),
    )


def _round_half_even(is_negative: bool, coefficient: int, shift: int) -> int:
    """Отбрасывание shift младших цифр коэффициента с округлением halfEven."""
    signed = -coefficient if is_negative else coefficient
    return Rational(signed, 10**shift).round_to(0, RoundingMode.HALF_EVEN).numerator


def normalize(
    is_negative: bool, coefficient: int, quantum: int, exact: bool = True
) -> Decimal128:
    """
    Приведение (знак, коэффициент, quantum) к границам decimal128.

    Хвостовые нули длинного коэффициента снимаются без потерь, остальные
    лишние цифры округляются halfEven. Точное целое, которому нужно больше
    34 значащих цифр, даёт Infinity. Quantum ниже -6176 сдвигается к -6176
    с округлением halfEven; ноль остаётся только если не осталось цифр.

    Args:
        is_negative: Знак
        coefficient: Беззнаковый коэффициент любой длины
        quantum: Экспонента любой величины
        exact: False, если коэффициент уже приближён (деление с sticky-цифрой)

    Returns:
        Конечный Decimal128, ноль со знаком (underflow) или Infinity
        со знаком (overflow)

    Examples:
        >>> normalize(False, 10**36, 0).to_string(format="exponential")
        '1e+36'
        >>> str(normalize(False, int("1" * 36), 0))
        'Infinity'
        >>> normalize(False, 123, -6177).coefficient
        12
        >>> normalize(False, 0, -10000).to_string(normalize=False)  # doctest: +SKIP
        '0.000...0'
    """
    if coefficient == 0:
        return _zero(is_negative, quantum)

    digit_count = len(str(coefficient))
    while digit_count > MAX_SIGNIFICANT_DIGITS:
        shift = digit_count - MAX_SIGNIFICANT_DIGITS
        text = str(coefficient)
        zeros = min(len(text) - len(text.rstrip("0")), shift)
        if zeros:
            coefficient //= 10**zeros
            quantum += zeros
            digit_count -= zeros
            continue

        if exact and quantum + shift > 0:
            logger.debug(
                "decimal128_overflow",
                reason="coefficient_too_long",
                digits=digit_count,
                quantum=quantum,
            )
            return _infinity(is_negative)

        coefficient = _round_half_even(is_negative, coefficient, shift)
        quantum += shift
        logger.debug("decimal128_rounded", dropped_digits=shift, quantum=quantum)
        digit_count = len(str(coefficient))

    if quantum > EXPONENT_MAX:
        logger.debug("decimal128_overflow", reason="quantum_too_large", quantum=quantum)
        return _infinity(is_negative)

    if quantum < EXPONENT_MIN:
        shift = EXPONENT_MIN - quantum
        # Все цифры ниже половины младшего разряда: округление даёт ноль
        if shift > digit_count:
            coefficient = 0
        else:
            coefficient = _round_half_even(is_negative, coefficient, shift)
        quantum = EXPONENT_MIN
        if coefficient == 0:
            logger.debug("decimal128_underflow", dropped_digits=shift)
            return _zero(is_negative, EXPONENT_MIN)
        logger.debug("decimal128_rounded", dropped_digits=shift, quantum=quantum)

    return Decimal128._make(
        ValueKind.FINITE,
        is_negative,
        Decimal.from_coefficient(is_negative, coefficient, quantum),
    )


# =============================================================================
# ПРИВЕДЕНИЕ ОПЕРАНДОВ
# =============================================================================


def _coerce(value: DecimalInput) -> Decimal128:
    if isinstance(value, Decimal128):
        return value
    return Decimal128(value)


def _coerce_operand(value: object, allow_str: bool = False):
    """Операнд оператора: Decimal128, int (и str для арифметики)."""
    if isinstance(value, Decimal128):
        return value
    if isinstance(value, bool):
        return NotImplemented
    if isinstance(value, int) or (allow_str and isinstance(value, str)):
        return Decimal128(value)
    return NotImplemented


def _invalid(operation: str) -> Decimal128:
    logger.debug("decimal128_invalid_operation", operation=operation)
    return _nan()


# =============================================================================
# ОПЕРАЦИИ
# =============================================================================


def _compare_values(x: Decimal128, y: Decimal128) -> int:
    """Сравнение не-NaN значений: -1, 0 или 1."""
    if x.is_infinite() or y.is_infinite():
        x_rank = (-1 if x._is_negative else 1) if x.is_infinite() else 0
        y_rank = (-1 if y._is_negative else 1) if y.is_infinite() else 0
        if x_rank != y_rank:
            return (x_rank > y_rank) - (x_rank < y_rank)
        if x_rank != 0:
            return 0
    return x._decimal.to_rational().compare(y._decimal.to_rational())


def _add(x: Decimal128, y: Decimal128) -> Decimal128:
    if x.is_nan() or y.is_nan():
        return _nan()

    if x.is_infinite() and y.is_infinite():
        if x._is_negative != y._is_negative:
            return _invalid("add")
        return x
    if x.is_infinite():
        return x
    if y.is_infinite():
        return y

    quantum = min(x._decimal.quantum, y._decimal.quantum)

    if x.is_zero() and y.is_zero():
        return _zero(x._is_negative and y._is_negative, quantum)

    total = Rational.add(x._decimal.to_rational(), y._decimal.to_rational())
    if total.is_zero():
        return _zero(x._is_negative, quantum)

    return normalize(total.is_negative, total.scale10(-quantum).numerator, quantum)


def _multiply(x: Decimal128, y: Decimal128) -> Decimal128:
    if x.is_nan() or y.is_nan():
        return _nan()

    is_negative = x._is_negative != y._is_negative

    if x.is_infinite() or y.is_infinite():
        if x.is_zero() or y.is_zero():
            return _invalid("multiply")
        return _infinity(is_negative)

    return normalize(
        is_negative,
        x._decimal.coefficient * y._decimal.coefficient,
        x._decimal.quantum + y._decimal.quantum,
    )


def _divide_coefficients(
    is_negative: bool, x_coefficient: int, x_quantum: int, y_coefficient: int, y_quantum: int
) -> Decimal128:
    """Деление ненулевых коэффициентов через DigitSequence (35 цифр + sticky)."""
    expansion = Rational(x_coefficient, y_coefficient).digits(
        max_significant_digits=MAX_SIGNIFICANT_DIGITS + 1
    ).expand()

    coefficient = int(expansion.integer_digits + expansion.fraction_digits)
    quantum = x_quantum - y_quantum - len(expansion.fraction_digits)

    if not expansion.exact:
        # Липкая цифра: результат строго между соседними 35-значными
        coefficient = coefficient * 10 + 1
        quantum -= 1

    return normalize(is_negative, coefficient, quantum, exact=expansion.exact)


def _divide(x: Decimal128, y: Decimal128) -> Decimal128:
    if x.is_nan() or y.is_nan():
        return _nan()

    is_negative = x._is_negative != y._is_negative

    if x.is_infinite():
        if y.is_infinite():
            return _invalid("divide")
        return _infinity(is_negative)
    if y.is_infinite():
        return _zero(is_negative, 0)

    if y.is_zero():
        return _invalid("divide")
    if x.is_zero():
        return _zero(is_negative, x._decimal.quantum - y._decimal.quantum)

    return _divide_coefficients(
        is_negative,
        x._decimal.coefficient,
        x._decimal.quantum,
        y._decimal.coefficient,
        y._decimal.quantum,
    )


def _remainder(x: Decimal128, y: Decimal128) -> Decimal128:
    if x.is_nan() or y.is_nan():
        return _nan()
    if x.is_infinite():
        return _invalid("remainder")
    if y.is_infinite():
        return x
    if y.is_zero():
        return _invalid("remainder")

    quantum = min(x._decimal.quantum, y._decimal.quantum)
    if x.is_zero():
        return _zero(x._is_negative, quantum)

    dividend = x._decimal.to_rational().abs()
    divisor = y._decimal.to_rational().abs()
    truncated = (dividend.numerator * divisor.denominator) // (
        dividend.denominator * divisor.numerator
    )
    rest = Rational.subtract(dividend, Rational.multiply(Rational(truncated), divisor))

    if rest.is_zero():
        return _zero(x._is_negative, quantum)
    return normalize(x._is_negative, rest.scale10(-quantum).numerator, quantum)


def _pow(x: Decimal128, n: int) -> Decimal128:
    if x.is_nan():
        return _nan()

    is_negative = x._is_negative and n % 2 == 1

    if x.is_infinite():
        if n == 0:
            return Decimal128(1)
        if n > 0:
            return _infinity(is_negative)
        return _zero(is_negative, 0)

    if n == 0:
        return Decimal128(1)

    coefficient, quantum = x._decimal.coefficient, x._decimal.quantum
    if coefficient == 0:
        if n < 0:
            return _invalid("pow")
        return _zero(is_negative, quantum * n)

    if -MAX_SIGNIFICANT_DIGITS < quantum <= 0 and coefficient == 10**-quantum:
        # |x| == 1: точный результат 1 с quantum, урезанным до 34 цифр
        if n < 0:
            return normalize(is_negative, 1, 0)
        places = min(-quantum * n, MAX_SIGNIFICANT_DIGITS - 1)
        return normalize(is_negative, 10**places, -places)

    if abs(n) > _POW_EXPONENT_LIMIT:
        above_one = x._decimal.to_rational().abs().compare(Rational(1)) > 0
        magnitude = math.inf if above_one == (n > 0) else -math.inf
    else:
        # Оценка порядка результата до точного возведения в степень
        magnitude = n * (math.log10(coefficient) + quantum)
    if magnitude > EXPONENT_MAX + _POW_ESTIMATE_MARGIN:
        logger.debug("decimal128_overflow", reason="pow_estimate", exponent=n)
        return _infinity(is_negative)
    if magnitude < EXPONENT_MIN - _POW_ESTIMATE_MARGIN:
        logger.debug("decimal128_underflow", reason="pow_estimate", exponent=n)
        return _zero(is_negative, EXPONENT_MIN)

    power = abs(n)
    if n > 0:
        return normalize(is_negative, coefficient**power, quantum * power)
    return _divide_coefficients(is_negative, 1, 0, coefficient**power, quantum * power)
