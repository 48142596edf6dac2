"""
Options — параметры округления и форматирования Decimal128

Неизменяемые pydantic-модели аргументов публичных методов:
- RoundOptions: round(places, mode)
- ToStringOptions: to_string(normalize, format)
- ToFixedOptions: to_fixed(digits, rounding_mode)
- ToPrecisionOptions: to_precision(digits)
- ToExponentialOptions: to_exponential(digits, rounding_mode)

Ошибки валидации (pydantic.ValidationError) переподнимаются как
DecimalRangeError функцией build_options.
"""

from typing import Literal, Optional, Type, TypeVar

from pydantic import BaseModel, Field, StrictBool, StrictInt, ValidationError, field_validator

from src.decimal128.errors import DecimalRangeError
from src.decimal128.rounding import DEFAULT_ROUNDING_MODE, RoundingMode, parse_rounding_mode


OptionsT = TypeVar("OptionsT", bound=BaseModel)


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


class RoundOptions(BaseModel):
    """Аргументы Decimal128.round"""

    places: StrictInt = Field(0, ge=0, description="Количество дробных цифр")
    mode: RoundingMode = Field(DEFAULT_ROUNDING_MODE, description="Режим округления")

    model_config = {"frozen": True}

    @field_validator("mode", mode="before")
    @classmethod
    def validate_mode(cls, v):
        """Имя режима или IEEE-алиас → RoundingMode"""
        return parse_rounding_mode(v)


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


class ToStringOptions(BaseModel):
    """Аргументы Decimal128.to_string"""

    normalize: StrictBool = Field(
        True, description="Отбрасывать хвостовые нули дробной части"
    )
    format: Literal["decimal", "exponential"] = Field(
        "decimal", description="Вид записи"
    )

    model_config = {"frozen": True}


class ToFixedOptions(BaseModel):
    """Аргументы Decimal128.to_fixed"""

    digits: StrictInt = Field(0, ge=0, description="Ровно столько дробных цифр")
    rounding_mode: RoundingMode = Field(
        DEFAULT_ROUNDING_MODE, description="Режим округления"
    )

    model_config = {"frozen": True}

    @field_validator("rounding_mode", mode="before")
    @classmethod
    def validate_rounding_mode(cls, v):
        return parse_rounding_mode(v)


class ToPrecisionOptions(BaseModel):
    """Аргументы Decimal128.to_precision (None → to_string)"""

    digits: Optional[StrictInt] = Field(
        None, ge=1, description="Количество значащих цифр (nullable)"
    )

    model_config = {"frozen": True}


class ToExponentialOptions(BaseModel):
    """Аргументы Decimal128.to_exponential (digits=None → все значащие цифры)"""

    digits: Optional[StrictInt] = Field(
        None, ge=1, description="Дробные цифры мантиссы (nullable)"
    )
    rounding_mode: RoundingMode = Field(
        DEFAULT_ROUNDING_MODE, description="Режим округления"
    )

    model_config = {"frozen": True}

    @field_validator("rounding_mode", mode="before")
    @classmethod
    def validate_rounding_mode(cls, v):
        return parse_rounding_mode(v)


# =============================================================================
# ПОСТРОЕНИЕ
# =============================================================================


def build_options(model: Type[OptionsT], **values) -> OptionsT:
    """
    Валидация аргументов через pydantic-модель.

    Args:
        model: Класс модели параметров
        **values: Значения полей

    Returns:
        Экземпляр модели

    Raises:
        DecimalRangeError: Если значения не проходят валидацию

    Examples:
        >>> build_options(RoundOptions, places=2, mode="roundTiesToAway").mode
        <RoundingMode.HALF_EXPAND: 'halfExpand'>
        >>> build_options(RoundOptions, places=-1)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        DecimalRangeError: ...
    """
    try:
        return model(**values)
    except ValidationError as exc:
        raise DecimalRangeError(str(exc)) from exc
