"""
JSON Schema валидатор строковой записи Decimal128

Схема contracts/schema/decimal128.json (Draft 2020-12) описывает строку,
которую codec.loads превращает в Decimal128: десятичная или
экспоненциальная запись, либо литерал NaN/Infinity.
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Чтение схем из contracts/schema/ с проверкой и кэшем."""

    def __init__(self):
        self._schema_dir = Path(__file__).parent / "schema"
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Args:
            schema_name: Имя файла схемы без .json ('decimal128')

        Raises:
            FileNotFoundError: Файла схемы нет
            ValueError: Файл не проходит meta-validation
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# VALIDATOR
# =============================================================================


class Decimal128StringValidator:
    """Проверка значения против decimal128.json."""

    def __init__(self):
        self._validator = Draft202012Validator(_SCHEMA_LOADER.load_schema("decimal128"))

    def validate(self, data: Any) -> None:
        """
        Raises:
            ValidationError: Значение не является записью Decimal128
        """
        self._validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self._validator.is_valid(data)


def validate_decimal128_string(data: Any) -> None:
    """
    Валидация строковой записи Decimal128.

    Raises:
        ValidationError: Значение не является записью Decimal128
    """
    Decimal128StringValidator().validate(data)
