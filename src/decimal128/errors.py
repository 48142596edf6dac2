"""
Errors — исключения decimal128

Два синхронных, невосстанавливаемых вида ошибок:
- DecimalSyntaxError: некорректный входной текст (пустая строка, одиночный
  знак или точка, неизвестный литерал, NaN с payload или знаком)
- DecimalRangeError: корректно записанный, но недопустимый аргумент
  (отрицательное/нецелое число разрядов, неизвестный rounding mode,
  нулевой знаменатель, невалидная пара cohort/quantum, запрос,
  не определённый для NaN/Infinity/нуля)

Оба наследуют ValueError, поэтому вызывающий код может ловить их
как обычные ошибки значения.
"""


class Decimal128Error(Exception):
    """Базовое исключение пакета decimal128."""

    pass


class DecimalSyntaxError(Decimal128Error, ValueError):
    """
    Некорректная запись числа.

    Examples:
        >>> Decimal128("")  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        DecimalSyntaxError: Illegal number format ""
    """

    pass


class DecimalRangeError(Decimal128Error, ValueError):
    """
    Аргумент вне допустимой области операции.

    Не используется для переполнения envelope: переполнение насыщается
    до Infinity со знаком.
    """

    pass
