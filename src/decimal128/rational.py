"""
Rational — точные дроби и ленивая десятичная развёртка

Базовый слой арифметики decimal128:
- Rational: несократимая дробь p/q со знаком (модуль числителя >= 0,
  знаменатель > 0, gcd(p, q) == 1)
- DigitSequence: ленивый, перезапускаемый генератор десятичных цифр |p/q|
  делением в столбик
- Expansion: материализованная развёртка (целые цифры, дробные цифры,
  признак точности)

Знак нуля на этом уровне не канонизируется: представление нулей со знаком
(0 и -0) обеспечивает слой cohort.
"""

import math
from enum import Enum
from typing import Iterator, NamedTuple, Optional, Union

from src.decimal128.errors import DecimalRangeError, DecimalSyntaxError
from src.decimal128.limits import MAX_SIGNIFICANT_DIGITS
from src.decimal128.parsing import DECIMAL_TEXT
from src.decimal128.rounding import (
    DEFAULT_ROUNDING_MODE,
    RoundingMode,
    parse_rounding_mode,
    rounds_away_from_zero,
)


# =============================================================================
# DIGIT SEQUENCE
# =============================================================================


class Marker(Enum):
    """Служебные элементы DigitSequence"""

    DECIMAL_POINT = "."


DigitItem = Union[int, Marker]


class Expansion(NamedTuple):
    """
    Материализованная десятичная развёртка |p/q|.

    integer_digits всегда непусто ("0" для |p/q| < 1).
    exact=False означает, что развёртка оборвана ограничением
    и остаток деления ненулевой.
    """

    integer_digits: str
    fraction_digits: str
    exact: bool


class DigitSequence:
    """
    Ленивая последовательность десятичных цифр |p/q|.

    Каждый проход (iter) начинается заново. Между целыми и дробными цифрами
    выдаётся Marker.DECIMAL_POINT (только если есть хотя бы одна дробная
    цифра). Целая часть выдаётся полностью; дробные цифры прекращаются, когда
    остаток равен нулю, достигнут лимит дробных цифр или лимит значащих цифр.

    Examples:
        >>> list(Rational(5, 4).digits())
        [1, <Marker.DECIMAL_POINT: '.'>, 2, 5]
        >>> Rational(1, 3).digits(max_significant_digits=5).expand()
        Expansion(integer_digits='0', fraction_digits='33333', exact=False)
    """

    def __init__(
        self,
        numerator: int,
        denominator: int,
        max_significant_digits: Optional[int] = MAX_SIGNIFICANT_DIGITS,
        max_fraction_digits: Optional[int] = None,
    ):
        if denominator <= 0:
            raise DecimalRangeError(f"denominator must be positive, got {denominator}")
        if max_significant_digits is not None and max_significant_digits < 1:
            raise DecimalRangeError(
                f"max_significant_digits must be >= 1, got {max_significant_digits}"
            )
        if max_fraction_digits is not None and max_fraction_digits < 0:
            raise DecimalRangeError(
                f"max_fraction_digits must be >= 0, got {max_fraction_digits}"
            )

        self._numerator = abs(numerator)
        self._denominator = denominator
        self._max_significant_digits = max_significant_digits
        self._max_fraction_digits = max_fraction_digits

    def __iter__(self) -> Iterator[DigitItem]:
        for item, _ in self._steps():
            yield item

    def _steps(self) -> Iterator[tuple[DigitItem, int]]:
        """Пары (элемент, остаток деления после элемента)."""
        integer_part, remainder = divmod(self._numerator, self._denominator)

        integer_text = str(integer_part)
        for ch in integer_text:
            yield int(ch), remainder

        significant = len(integer_text) if integer_part else 0
        fraction_count = 0
        point_emitted = False

        while remainder:
            if (
                self._max_fraction_digits is not None
                and fraction_count >= self._max_fraction_digits
            ):
                return
            if (
                self._max_significant_digits is not None
                and significant >= self._max_significant_digits
            ):
                return

            if not point_emitted:
                point_emitted = True
                yield Marker.DECIMAL_POINT, remainder

            digit, remainder = divmod(remainder * 10, self._denominator)
            fraction_count += 1
            if significant or digit:
                significant += 1
            yield digit, remainder

    def expand(self) -> Expansion:
        """Полная развёртка с учётом лимитов."""
        integer_digits: list[str] = []
        fraction_digits: list[str] = []
        in_fraction = False
        remainder = self._numerator % self._denominator

        for item, remainder in self._steps():
            if item is Marker.DECIMAL_POINT:
                in_fraction = True
            elif in_fraction:
                fraction_digits.append(str(item))
            else:
                integer_digits.append(str(item))

        return Expansion(
            integer_digits="".join(integer_digits),
            fraction_digits="".join(fraction_digits),
            exact=remainder == 0,
        )


# =============================================================================
# RATIONAL
# =============================================================================


class Rational:
    """
    Несократимая дробь со знаком.

    Args:
        numerator: Числитель (int, со знаком)
        denominator: Знаменатель (int, ненулевой, со знаком)

    Raises:
        DecimalRangeError: Если denominator == 0
        TypeError: Если аргументы не int

    Examples:
        >>> str(Rational(6, -14))
        '-3/7'
        >>> Rational(10, 4) == Rational(5, 2)
        True
    """

    __slots__ = ("_numerator", "_denominator", "_is_negative")

    def __init__(self, numerator: int, denominator: int = 1):
        if isinstance(numerator, bool) or not isinstance(numerator, int):
            raise TypeError(f"numerator must be int, got {type(numerator).__name__}")
        if isinstance(denominator, bool) or not isinstance(denominator, int):
            raise TypeError(
                f"denominator must be int, got {type(denominator).__name__}"
            )
        if denominator == 0:
            raise DecimalRangeError("Cannot construct Rational with zero denominator")

        is_negative = (numerator < 0) != (denominator < 0)
        numerator = abs(numerator)
        denominator = abs(denominator)

        divisor = math.gcd(numerator, denominator)
        if divisor > 1:
            numerator //= divisor
            denominator //= divisor

        self._numerator = numerator
        self._denominator = denominator
        self._is_negative = is_negative

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_string(cls, text: str) -> "Rational":
        """
        Разбор десятичной записи: знак, цифры, точка, суффикс e/E.

        Raises:
            DecimalSyntaxError: Если запись некорректна

        Examples:
            >>> str(Rational.from_string("-1.25"))
            '-5/4'
            >>> str(Rational.from_string("12e-1"))
            '6/5'
        """
        match = DECIMAL_TEXT.match(text)
        if match is None or not (match.group("int") or match.group("frac")):
            raise DecimalSyntaxError(f'Illegal number format "{text}"')

        int_digits = match.group("int") or ""
        frac_digits = match.group("frac") or ""
        exponent = int(match.group("exp") or 0) - len(frac_digits)

        value = cls(int(int_digits + frac_digits)).scale10(exponent)
        if match.group("sign") == "-":
            value = value.negate()
        return value

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def numerator(self) -> int:
        """Модуль числителя."""
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def is_negative(self) -> bool:
        return self._is_negative

    @property
    def _signed_numerator(self) -> int:
        return -self._numerator if self._is_negative else self._numerator

    def is_zero(self) -> bool:
        return self._numerator == 0

    def is_integer(self) -> bool:
        return self._denominator == 1

    # -------------------------------------------------------------------------
    # N-арные операции (Rational.add(a, b, c, ...))
    # -------------------------------------------------------------------------

    @staticmethod
    def add(*values: "Rational") -> "Rational":
        """
        Сумма слева направо; пустая сумма равна 0.

        Examples:
            >>> str(Rational.add(Rational(1, 2), Rational(1, 3), Rational(1, 6)))
            '1'
        """
        result = Rational(0)
        for value in values:
            result = Rational(
                result._signed_numerator * value._denominator
                + value._signed_numerator * result._denominator,
                result._denominator * value._denominator,
            )
        return result

    @staticmethod
    def subtract(*values: "Rational") -> "Rational":
        """x0 - x1 - x2 - ...; пустая разность равна 0."""
        if not values:
            return Rational(0)
        result = values[0]
        for value in values[1:]:
            result = Rational.add(result, value.negate())
        return result

    @staticmethod
    def multiply(*values: "Rational") -> "Rational":
        """Произведение слева направо; пустое произведение равно 1."""
        result = Rational(1)
        for value in values:
            result = Rational(
                result._signed_numerator * value._signed_numerator,
                result._denominator * value._denominator,
            )
        return result

    # -------------------------------------------------------------------------
    # Унарные операции
    # -------------------------------------------------------------------------

    def negate(self) -> "Rational":
        result = Rational(self._numerator, self._denominator)
        result._is_negative = not self._is_negative
        return result

    def abs(self) -> "Rational":
        return Rational(self._numerator, self._denominator)

    def scale10(self, n: int) -> "Rational":
        """
        Умножение на 10**n (n может быть отрицательным).

        Examples:
            >>> str(Rational(5).scale10(-2))
            '1/20'
        """
        if n >= 0:
            return Rational(self._signed_numerator * 10**n, self._denominator)
        return Rational(self._signed_numerator, self._denominator * 10 ** (-n))

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare(self, other: "Rational") -> int:
        """
        Трёхзначное сравнение перекрёстным умножением.

        Returns:
            -1 если self < other, 0 если равны, 1 если self > other
        """
        left = self._signed_numerator * other._denominator
        right = other._signed_numerator * self._denominator
        return (left > right) - (left < right)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rational):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: "Rational") -> bool:
        if not isinstance(other, Rational):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: "Rational") -> bool:
        if not isinstance(other, Rational):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: "Rational") -> bool:
        if not isinstance(other, Rational):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: "Rational") -> bool:
        if not isinstance(other, Rational):
            return NotImplemented
        return self.compare(other) >= 0

    def __hash__(self) -> int:
        # Совпадает с hash(int) для целых значений
        if self._denominator == 1:
            return hash(self._signed_numerator)
        return hash((self._signed_numerator, self._denominator))

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: "Rational") -> "Rational":
        if not isinstance(other, Rational):
            return NotImplemented
        return Rational.add(self, other)

    def __sub__(self, other: "Rational") -> "Rational":
        if not isinstance(other, Rational):
            return NotImplemented
        return Rational.subtract(self, other)

    def __mul__(self, other: "Rational") -> "Rational":
        if not isinstance(other, Rational):
            return NotImplemented
        return Rational.multiply(self, other)

    def __neg__(self) -> "Rational":
        return self.negate()

    def __abs__(self) -> "Rational":
        return self.abs()

    # -------------------------------------------------------------------------
    # Десятичная развёртка и округление
    # -------------------------------------------------------------------------

    def digits(
        self,
        max_significant_digits: Optional[int] = MAX_SIGNIFICANT_DIGITS,
        max_fraction_digits: Optional[int] = None,
    ) -> DigitSequence:
        """
        Ленивая развёртка |self| (знак не выдаётся).

        Args:
            max_significant_digits: Лимит значащих цифр (None — без лимита)
            max_fraction_digits: Лимит дробных цифр (None — без лимита)
        """
        return DigitSequence(
            self._numerator,
            self._denominator,
            max_significant_digits=max_significant_digits,
            max_fraction_digits=max_fraction_digits,
        )

    def round_to(
        self,
        places: int,
        mode: Union[str, RoundingMode] = DEFAULT_ROUNDING_MODE,
    ) -> "Rational":
        """
        Округление до places дробных цифр.

        Отрисовывается places + 1 дробная цифра; последняя из них решающая,
        признак exact развёртки служит «липким» остатком.

        Args:
            places: Количество дробных цифр (>= 0)
            mode: Режим округления

        Returns:
            Rational не более чем с places дробными цифрами

        Raises:
            DecimalRangeError: Если places < 0 или режим неизвестен

        Examples:
            >>> str(Rational.from_string("42.345").round_to(2))
            '2117/50'
            >>> str(Rational.from_string("1.456").round_to(2, "ceil"))
            '73/50'
        """
        if isinstance(places, bool) or not isinstance(places, int) or places < 0:
            raise DecimalRangeError(f"places must be a non-negative int, got {places!r}")
        mode = parse_rounding_mode(mode)

        expansion = self.digits(
            max_significant_digits=None, max_fraction_digits=places + 1
        ).expand()
        fraction = expansion.fraction_digits.ljust(places + 1, "0")

        kept = int(expansion.integer_digits + fraction[:places])
        deciding_digit = int(fraction[places])

        if rounds_away_from_zero(
            mode,
            self._is_negative,
            last_kept_digit=kept % 10,
            deciding_digit=deciding_digit,
            rest_is_zero=expansion.exact,
        ):
            kept += 1

        return Rational(-kept if self._is_negative else kept, 10**places)

    def to_fixed(self, places: int) -> str:
        """
        Усечённая запись с ровно places дробными цифрами.

        Examples:
            >>> Rational(5, 3).to_fixed(2)
            '1.66'
            >>> Rational(-1, 2).to_fixed(0)
            '-0'
        """
        if isinstance(places, bool) or not isinstance(places, int) or places < 0:
            raise DecimalRangeError(f"places must be a non-negative int, got {places!r}")

        expansion = self.digits(
            max_significant_digits=None, max_fraction_digits=places
        ).expand()
        text = expansion.integer_digits
        if places:
            text += "." + expansion.fraction_digits.ljust(places, "0")
        return "-" + text if self._is_negative else text

    # -------------------------------------------------------------------------
    # Представление
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        sign = "-" if self._is_negative and self._numerator else ""
        if self._denominator == 1:
            return f"{sign}{self._numerator}"
        return f"{sign}{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        return f"Rational({self._signed_numerator}, {self._denominator})"
