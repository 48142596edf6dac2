"""
JSON codec для Decimal128

- loads: числа с дробной частью/экспонентой читаются точно как Decimal128
  (без промежуточного float); по запросу строки, соответствующие схеме
  decimal128.json, тоже превращаются в Decimal128
- dumps: Decimal128 записывается JSON-строкой с сохранением quantum
  ("1.20" остаётся "1.20")
"""

import json
from typing import Any

from src.decimal128.contracts.validators import Decimal128StringValidator
from src.decimal128.number import Decimal128


def loads(text: str, parse_strings: bool = False) -> Any:
    """
    Разбор JSON с точными десятичными значениями.

    Args:
        text: JSON-документ
        parse_strings: Превращать строки в записи Decimal128 в Decimal128

    Returns:
        Разобранный документ (int остаются int)

    Examples:
        >>> str(loads('{"price": 1.20}')["price"])
        '1.2'
        >>> loads('["1.5", "abc"]', parse_strings=True)
        [Decimal128('1.5'), 'abc']
    """
    data = json.loads(text, parse_float=Decimal128)
    if not parse_strings:
        return data
    return _convert_strings(data, Decimal128StringValidator())


def _convert_strings(data: Any, validator: Decimal128StringValidator) -> Any:
    if isinstance(data, dict):
        return {key: _convert_strings(value, validator) for key, value in data.items()}
    if isinstance(data, list):
        return [_convert_strings(item, validator) for item in data]
    if isinstance(data, str) and validator.is_valid(data):
        return Decimal128(data)
    return data


def _default(value: Any) -> Any:
    if isinstance(value, Decimal128):
        return value.to_string(normalize=False)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(data: Any, **kwargs) -> str:
    """
    Сериализация JSON; Decimal128 записывается строкой.

    Examples:
        >>> dumps({"total": Decimal128("12.08")})
        '{"total": "12.08"}'
    """
    return json.dumps(data, default=_default, **kwargs)
