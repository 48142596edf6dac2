"""
Cohort — представление десятичного значения парой (cohort, quantum)

cohort — математическое значение: ненулевой Rational или один из двух
нулей со знаком (ZeroCohort). quantum — запомненная экспонента записи
(«1.20» и «1.2» лежат в одной когорте, но имеют разный quantum).

Инвариант: cohort * 10**(-quantum) — целое число (коэффициент).
Собственной арифметики слой не имеет: её выполняет number.Decimal128.
"""

from enum import Enum
from typing import Union

from src.decimal128.errors import DecimalRangeError
from src.decimal128.rational import Rational


class ZeroCohort(str, Enum):
    """Нули со знаком"""

    ZERO = "0"
    NEGATIVE_ZERO = "-0"


Cohort = Union[ZeroCohort, Rational]


class Decimal:
    """
    Десятичное значение с запомненным quantum.

    Args:
        cohort: ZeroCohort или ненулевой Rational
        quantum: Экспонента записи (int)

    Raises:
        DecimalRangeError: Если quantum не int, cohort — нулевой Rational,
            или cohort не кратен 10**quantum

    Examples:
        >>> Decimal(Rational(6, 5), -2).coefficient
        120
        >>> Decimal(Rational(1, 3), 0)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        DecimalRangeError: ...
    """

    __slots__ = ("_cohort", "_quantum")

    def __init__(self, cohort: Cohort, quantum: int):
        if isinstance(quantum, bool) or not isinstance(quantum, int):
            raise DecimalRangeError(f"quantum must be int, got {quantum!r}")

        if isinstance(cohort, Rational):
            if cohort.is_zero():
                raise DecimalRangeError(
                    "Rational cohort must be nonzero, use ZeroCohort for zeros"
                )
            if not cohort.scale10(-quantum).is_integer():
                raise DecimalRangeError(
                    f"Cohort {cohort} is not a multiple of 10**{quantum}"
                )
        elif not isinstance(cohort, ZeroCohort):
            raise DecimalRangeError(f"Invalid cohort: {cohort!r}")

        self._cohort = cohort
        self._quantum = quantum

    @classmethod
    def from_coefficient(
        cls, is_negative: bool, coefficient: int, quantum: int
    ) -> "Decimal":
        """
        Построение из знака, беззнакового коэффициента и quantum.

        Examples:
            >>> str(Decimal.from_coefficient(True, 125, -2).cohort)
            '-5/4'
        """
        if coefficient < 0:
            raise DecimalRangeError(f"coefficient must be >= 0, got {coefficient}")

        if coefficient == 0:
            zero = ZeroCohort.NEGATIVE_ZERO if is_negative else ZeroCohort.ZERO
            return cls(zero, quantum)

        signed = -coefficient if is_negative else coefficient
        return cls(Rational(signed).scale10(quantum), quantum)

    @property
    def cohort(self) -> Cohort:
        return self._cohort

    @property
    def quantum(self) -> int:
        return self._quantum

    @property
    def coefficient(self) -> int:
        """Беззнаковый целый коэффициент."""
        if isinstance(self._cohort, ZeroCohort):
            return 0
        return self._cohort.scale10(-self._quantum).numerator

    def is_zero(self) -> bool:
        return isinstance(self._cohort, ZeroCohort)

    def is_negative(self) -> bool:
        if isinstance(self._cohort, ZeroCohort):
            return self._cohort is ZeroCohort.NEGATIVE_ZERO
        return self._cohort.is_negative

    def to_rational(self) -> Rational:
        """Математическое значение (знак нуля теряется)."""
        if isinstance(self._cohort, ZeroCohort):
            return Rational(0)
        return self._cohort

    def __repr__(self) -> str:
        if isinstance(self._cohort, ZeroCohort):
            return f"Decimal({self._cohort.value!r}, {self._quantum})"
        return f"Decimal({str(self._cohort)!r}, {self._quantum})"
