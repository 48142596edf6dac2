"""
Tests for JSON Schema Contract Validators и JSON codec

Проверяет:
- Валидность самой схемы decimal128.json
- Кэширование схем загрузчиком
- Валидация корректных и некорректных записей
- Согласованность схемы с конструктором Decimal128
- loads / dumps с точными десятичными значениями
"""

import json

import pytest
from jsonschema import ValidationError

from src.decimal128 import Decimal128
from src.decimal128.contracts import (
    Decimal128StringValidator,
    SchemaLoader,
    dumps,
    loads,
    validate_decimal128_string,
)


VALID_STRINGS = [
    "0",
    "-0",
    "1.20",
    "+42",
    ".5",
    "5.",
    "1.23456e+2",
    "1_000.5",
    "1_2e1_0",
    "5E-39",
    "NaN",
    "Infinity",
    "+Infinity",
    "-Infinity",
]

INVALID_STRINGS = [
    "",
    ".",
    "+",
    " 1",
    "1.2.3",
    "1e",
    "inf",
    "nan",
    "-NaN",
    "NaN8275",
    "1,5",
    "_1",
    "1_",
    "1__0",
    "1_.5",
]


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем"""

    def test_loads_and_caches(self) -> None:
        loader = SchemaLoader()
        schema = loader.load_schema("decimal128")
        assert schema["title"] == "Decimal128"
        assert loader.load_schema("decimal128") is schema

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


class TestDecimal128StringValidator:
    """Тесты валидации строковой записи"""

    def test_valid_strings(self) -> None:
        validator = Decimal128StringValidator()
        for text in VALID_STRINGS:
            validate_decimal128_string(text)
            assert validator.is_valid(text), text

    def test_invalid_strings(self) -> None:
        for text in INVALID_STRINGS:
            with pytest.raises(ValidationError):
                validate_decimal128_string(text)

    def test_non_string_rejected(self) -> None:
        validator = Decimal128StringValidator()
        assert not validator.is_valid(1.5)
        assert not validator.is_valid(None)
        with pytest.raises(ValidationError):
            validator.validate(12)

    def test_schema_agrees_with_constructor(self) -> None:
        """Каждая валидная по схеме строка принимается конструктором"""
        for text in VALID_STRINGS:
            Decimal128(text)


# =============================================================================
# CODEC
# =============================================================================


class TestCodec:
    """Тесты loads / dumps"""

    def test_loads_floats_exactly(self) -> None:
        data = loads('{"price": 1.20, "qty": 3, "rate": 0.1}')
        assert isinstance(data["price"], Decimal128)
        assert data["price"].to_string(normalize=False) == "1.20"
        assert data["qty"] == 3 and isinstance(data["qty"], int)
        assert data["rate"] == Decimal128("0.1")

    def test_loads_strings_on_request(self) -> None:
        data = loads('{"a": "1.5", "b": ["NaN", "abc"], "c": "x"}', parse_strings=True)
        assert data["a"] == Decimal128("1.5")
        assert data["b"][0].is_nan()
        assert data["b"][1] == "abc"
        assert data["c"] == "x"

    def test_loads_strings_with_digit_separators(self) -> None:
        data = loads('["1_000.5", "1_000_000E-2", "1__0"]', parse_strings=True)
        assert data[0] == Decimal128("1000.5")
        assert data[0].to_string(normalize=False) == "1000.5"
        assert data[1] == Decimal128("10000")
        assert data[2] == "1__0"

    def test_loads_strings_untouched_by_default(self) -> None:
        assert loads('["1.5"]') == ["1.5"]

    def test_dumps_preserves_quantum(self) -> None:
        assert dumps({"total": Decimal128("12.08")}) == '{"total": "12.08"}'
        assert json.loads(dumps([Decimal128("1.20")])) == ["1.20"]

    def test_dumps_rejects_unknown_types(self) -> None:
        with pytest.raises(TypeError):
            dumps({"x": object()})

    def test_round_trip(self) -> None:
        original = {"amounts": [Decimal128("0.10"), Decimal128("-Infinity")]}
        restored = loads(dumps(original), parse_strings=True)
        assert restored["amounts"][0].to_string(normalize=False) == "0.10"
        assert restored["amounts"][1].is_infinite()
