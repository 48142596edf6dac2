"""
Тесты для арифметики Decimal128

Проверяет:
1. add / subtract: точность, quantum = min, знак нулевой суммы
2. multiply: сумма quantum, знак xor
3. divide: halfEven до 34 цифр, липкая цифра, деление на ноль → NaN
4. remainder: знак делимого
5. pow: целые степени, отрицательные степени, специальные значения
6. NaN / Infinity во всех операциях
7. Операторы с int и str операндами
8. Сквозной пример: счёт с налогом
9. Отладочные события через logging
"""

import logging

import pytest

from src.decimal128 import Decimal128, DecimalRangeError

NAN = Decimal128("NaN")
INF = Decimal128("Infinity")
NEG_INF = Decimal128("-Infinity")


def d(text: str) -> Decimal128:
    return Decimal128(text)


# =============================================================================
# ТЕСТЫ СЛОЖЕНИЯ И ВЫЧИТАНИЯ
# =============================================================================


class TestAddSubtract:
    """Тесты add / subtract"""

    def test_exact_decimal_sum(self) -> None:
        """0.1 + 0.2 == 0.3 без двоичной ошибки"""
        assert str(d("0.1") + d("0.2")) == "0.3"
        assert d("0.1") + d("0.2") == d("0.3")

    def test_quantum_is_minimum(self) -> None:
        assert (d("1.20") + d("1")).to_string(normalize=False) == "2.20"
        assert (d("1E+2") + d("1")).quantum == 0

    def test_nary_add(self) -> None:
        assert str(d("1.25").add("5.00", 2)) == "8.25"
        assert d("1").add() == d("1")

    def test_nary_subtract(self) -> None:
        assert str(d("10").subtract("1.5", 2)) == "6.5"
        assert str(d("1.3") - d("1.2")) == "0.1"

    def test_zero_sum_sign_of_zeros(self) -> None:
        """Сумма двух нулей отрицательна только если оба отрицательны"""
        assert (d("-0") + d("-0")).is_negative()
        assert not (d("-0") + d("0")).is_negative()
        assert not (d("0") + d("-0")).is_negative()

    def test_zero_sum_takes_first_operand_sign(self) -> None:
        assert not d("1.5").add(d("-1.5")).is_negative()
        assert str(d("-1.5") + d("1.5")) == "-0"

    def test_zero_sum_keeps_quantum(self) -> None:
        assert (d("1.50") + d("-1.5")).to_string(normalize=False) == "0.00"

    def test_infinity_dominates(self) -> None:
        assert (INF + d("1")).is_infinite()
        assert (d("1") - INF) == NEG_INF
        assert (INF + INF) == INF

    def test_opposite_infinities_are_nan(self) -> None:
        assert (INF + NEG_INF).is_nan()
        assert (INF - INF).is_nan()
        assert (NEG_INF - NEG_INF).is_nan()

    def test_nan_propagates(self) -> None:
        assert (NAN + d("1")).is_nan()
        assert (d("1") - NAN).is_nan()

    def test_trailing_zeros_after_alignment(self) -> None:
        """1E+40 + 0 выравнивается к quantum 0: 41 цифра, но значащая одна"""
        value = d("1E+40") + d("0")
        assert value.is_finite()
        assert value == d("1E+40")
        assert (d("1E+40") + 0).to_int() == 10**40

    def test_integer_sum_over_34_significant_digits_overflows(self) -> None:
        assert (d("1E+40") + d("1")).is_infinite()

    def test_large_sum_rounds_half_even(self) -> None:
        value = d("1" * 34) + d("0.5")
        assert value.coefficient == int("1" * 33 + "2")
        assert value.quantum == 0


# =============================================================================
# ТЕСТЫ УМНОЖЕНИЯ
# =============================================================================


class TestMultiply:
    """Тесты multiply"""

    def test_product(self) -> None:
        assert str(d("1.25") * 5) == "6.25"
        assert (d("1.20") * d("2.0")).to_string(normalize=False) == "2.400"

    def test_sign_xor(self) -> None:
        assert str(d("-2") * d("3")) == "-6"
        assert str(d("-2") * d("-3")) == "6"
        assert str(d("-0") * d("5")) == "-0"

    def test_nary_multiply(self) -> None:
        assert str(d("2").multiply("3", "0.5")) == "3"

    def test_zero_times_infinity_is_nan(self) -> None:
        assert (d("0") * INF).is_nan()
        assert (NEG_INF * d("-0")).is_nan()

    def test_infinity_times_finite(self) -> None:
        assert (INF * d("-2")) == NEG_INF
        assert (NEG_INF * NEG_INF) == INF

    def test_overflow_saturates(self) -> None:
        assert (d("9E+6111") * d("1E+1")).is_infinite()
        assert (d("-9E+6111") * d("1E+1")) == NEG_INF
        assert (d("9E+6111") * 10).is_finite()

    def test_underflow_to_zero(self) -> None:
        value = d("1E-6176") * d("0.1")
        assert value.is_zero()
        assert not value.is_negative()

    def test_underflow_keeps_significant_digits(self) -> None:
        """Произведение ниже 1E-6176 по quantum, но не по значению"""
        value = d("1.00E-3088") * d("1.00E-3088")
        assert not value.is_zero()
        assert value == d("1E-6176")
        assert value.quantum == -6176

        rounded = d("25E-3089") * d("-1E-3088")
        assert rounded.coefficient == 2
        assert rounded.is_negative()


# =============================================================================
# ТЕСТЫ ДЕЛЕНИЯ
# =============================================================================


class TestDivide:
    """Тесты divide"""

    def test_one_third(self) -> None:
        assert str(d("1") / d("3")) == "0." + "3" * 34

    def test_two_thirds_rounds_up(self) -> None:
        assert str(d("2") / d("3")) == "0." + "6" * 33 + "7"

    def test_half_even_with_sticky_digit(self) -> None:
        assert str(d("0.11") / d("0.3")) == "0.3666666666666666666666666666666667"

    def test_exact_quotients(self) -> None:
        assert str(d("4.1").divide("1.25")) == "3.28"
        assert str(d("-1") / d("8")) == "-0.125"
        assert str(d("10") / d("4")) == "2.5"

    def test_exact_quotient_quantum(self) -> None:
        value = d("1E-38") / 2
        assert value.coefficient == 5
        assert value.quantum == -39

    def test_division_by_zero_is_nan(self) -> None:
        """x / 0 → NaN, включая 0 / 0"""
        assert (d("1") / d("0")).is_nan()
        assert (d("-1") / d("0")).is_nan()
        assert (d("0") / d("0")).is_nan()

    def test_zero_dividend(self) -> None:
        value = d("0.00") / d("1")
        assert value.is_zero()
        assert value.quantum == -2
        assert (d("-0") / d("5")).is_negative()

    def test_quotient_with_positive_quantum(self) -> None:
        """Неточное частное округляется и при quantum > 0"""
        value = d("1E+40") / d("3")
        assert value.is_finite()
        assert value.coefficient == int("3" * 34)
        assert value.quantum == 6
        assert (d("2E+40") / 3).coefficient == int("6" * 33 + "7")

    def test_infinities(self) -> None:
        assert (INF / INF).is_nan()
        assert (INF / d("2")) == INF
        assert (NEG_INF / d("2")) == NEG_INF
        assert str(d("1") / INF) == "0"
        assert str(d("-1") / INF) == "-0"

    def test_divide_then_multiply(self) -> None:
        assert str(d("1") / d("3") * d("3")) == "0." + "9" * 34


# =============================================================================
# ТЕСТЫ ОСТАТКА
# =============================================================================


class TestRemainder:
    """Тесты remainder"""

    def test_sign_of_dividend(self) -> None:
        assert str(d("4.1") % d("1.25")) == "0.35"
        assert str(d("-4.1") % d("1.25")) == "-0.35"
        assert str(d("4.1").remainder("-1.25")) == "0.35"

    def test_integers(self) -> None:
        assert str(d("10") % d("3")) == "1"
        assert (d("6") % d("3")).is_zero()

    def test_zero_dividend(self) -> None:
        assert str(d("-0") % d("1")) == "-0"

    def test_special_values(self) -> None:
        assert (d("1") % d("0")).is_nan()
        assert (INF % d("1")).is_nan()
        assert (NAN % d("1")).is_nan()
        assert str(d("5") % INF) == "5"


# =============================================================================
# ТЕСТЫ СТЕПЕНИ
# =============================================================================


class TestPow:
    """Тесты pow"""

    def test_positive_exponent(self) -> None:
        assert str(d("1.5").pow(2)) == "2.25"
        assert str(d("-2").pow(3)) == "-8"
        assert str(d("-2") ** 2) == "4"

    def test_negative_exponent(self) -> None:
        assert str(d("5.6").pow(-2)) == "0.03188775510204081632653061224489796"
        assert str(d("2").pow(-1)) == "0.5"

    def test_zero_exponent(self) -> None:
        assert str(d("2").pow(0)) == "1"
        assert str(INF.pow(0)) == "1"

    def test_zero_base(self) -> None:
        assert str(d("0").pow(3)) == "0"
        assert d("0").pow(-1).is_nan()

    def test_infinite_base(self) -> None:
        assert INF.pow(2) == INF
        assert NEG_INF.pow(3) == NEG_INF
        assert NEG_INF.pow(2) == INF
        assert INF.pow(-1).is_zero()

    def test_nan_base(self) -> None:
        assert NAN.pow(2).is_nan()

    def test_out_of_range_estimate(self) -> None:
        """Результат вне диапазона без точного вычисления"""
        assert d("10").pow(7000).is_infinite()
        assert d("0.1").pow(7000).is_zero()
        assert d("10").pow(-7000).is_zero()

    def test_unit_base_with_huge_exponent(self) -> None:
        """|x| == 1 не возводится в степень цифра за цифрой"""
        assert d("1").pow(10**400) == d("1")
        assert str(d("1").pow(-(10**400))) == "1"
        assert d("-1").pow(10**400 + 1) == d("-1")
        assert d("-1").pow(10**400) == d("1")

        long_unit = d("1.00").pow(10**400)
        assert long_unit == d("1")
        assert long_unit.coefficient == 10**33
        assert d("1.00").pow(3).to_string(normalize=False) == "1.000000"

    def test_huge_exponent_saturates(self) -> None:
        assert d("2").pow(10**400).is_infinite()
        assert d("-2").pow(10**400 + 1) == NEG_INF
        assert d("0.5").pow(10**400).is_zero()
        assert d("2").pow(-(10**400)).is_zero()
        assert d("0.5").pow(-(10**400)) == INF

    def test_non_int_exponent_raises(self) -> None:
        with pytest.raises(DecimalRangeError):
            d("2").pow(1.5)
        with pytest.raises(DecimalRangeError):
            d("2").pow(True)


# =============================================================================
# ТЕСТЫ УНАРНЫХ ОПЕРАЦИЙ
# =============================================================================


class TestUnary:
    """Тесты negate / abs / scale10"""

    def test_negate(self) -> None:
        assert str(d("1.5").negate()) == "-1.5"
        assert str(-d("0")) == "-0"
        assert (-NAN).is_nan()
        assert -INF == NEG_INF

    def test_abs(self) -> None:
        assert str(abs(d("-1.5"))) == "1.5"
        assert abs(NEG_INF) == INF
        assert not abs(d("-0")).is_negative()

    def test_scale10(self) -> None:
        assert str(d("1.5").scale10(2)) == "150"
        assert str(d("1.5").scale10(-3)) == "0.0015"
        assert d("1").scale10(7000).is_infinite()

    def test_scale10_special_values_raise(self) -> None:
        with pytest.raises(DecimalRangeError):
            NAN.scale10(1)
        with pytest.raises(DecimalRangeError):
            INF.scale10(1)


# =============================================================================
# ТЕСТЫ ОПЕРАТОРОВ
# =============================================================================


class TestOperatorCoercion:
    """Тесты приведения операндов операторов"""

    def test_int_operands(self) -> None:
        assert d("1.5") + 1 == d("2.5")
        assert 1 + d("1.5") == d("2.5")
        assert str(10 - d("0.5")) == "9.5"
        assert str(d("1") / 4) == "0.25"
        assert str(7 % d("4")) == "3"
        assert str(3 * d("1.1")) == "3.3"

    def test_str_operands(self) -> None:
        assert str(d("1.5") + "1.25") == "2.75"
        assert str(d("3") * "0.5") == "1.5"

    def test_float_operand_rejected(self) -> None:
        """Операторы не принимают float (named-методы принимают)"""
        with pytest.raises(TypeError):
            d("1") + 1.5
        assert str(d("1").add(0.5)) == "1.5"

    def test_invalid_str_operand_raises_syntax_error(self) -> None:
        with pytest.raises(ValueError):
            d("1") + "abc"


# =============================================================================
# ДИАГНОСТИКА
# =============================================================================


class TestDiagnosticLogging:
    """События округления идут в stdlib logging, а не в stdout"""

    def test_silent_by_default(self, capsys) -> None:
        d("1") / d("3")
        d("9E+6111") * d("1E+1")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_events_reach_logging_at_debug(self, caplog, capsys) -> None:
        with caplog.at_level(logging.DEBUG, logger="src.decimal128.number"):
            d("1") / d("3")
            d("0") / d("0")
        assert "decimal128_rounded" in caplog.text
        assert "decimal128_invalid_operation" in caplog.text
        assert all(record.name == "src.decimal128.number" for record in caplog.records)
        assert capsys.readouterr().out == ""


# =============================================================================
# СКВОЗНОЙ ПРИМЕР
# =============================================================================


class TestBillScenario:
    """Счёт: (цена × количество + доставка) × (1 + налог)"""

    def test_bill_total(self) -> None:
        price = d("1.25")
        shipping = d("5.00")
        tax = d("0.0735")

        subtotal = price * 5 + shipping
        total = subtotal * (tax + 1)

        assert subtotal.to_string(normalize=False) == "11.25"
        assert total.to_string(normalize=False) == "12.076875"
        assert total.to_fixed(2) == "12.08"
