"""
FormatOptions — эффективные опции форматирования

Immutable Pydantic модель: результат разрешения каскада
call → instance → global → default для одного вызова format.

CALL_OPTION_PATHS связывает имена опций вызова с dotted-путями в дереве
конфигурации.
"""

from enum import Enum
from typing import Final

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class UnitPosition(str, Enum):
    """Положение единицы (или символа валюты) относительно числа"""

    PREFIX = "prefix"
    SUFFIX = "suffix"


# =============================================================================
# OPTION PATHS
# =============================================================================

CALL_OPTION_PATHS: Final[dict[str, str]] = {
    "precision": "precision.default",
    "thousands_separator": "format.thousands_separator",
    "thousands_separator_char": "format.thousands_separator_char",
    "decimal_separator": "format.decimal_separator",
    "unit": "format.unit",
    "unit_position": "format.unit_position",
    "uppercase": "format.uppercase",
    "chinese_number": "format.chinese_number",
    "chinese_capital": "format.chinese_capital",
}


# =============================================================================
# FORMAT OPTIONS
# =============================================================================


class FormatOptions(BaseModel):
    """
    Опции форматирования числа.

    Приоритет внутри format: chinese_capital > chinese_number > обычная
    запись с разделителями.
    """

    precision: int = Field(10, ge=0, le=100, description="Количество дробных цифр")
    thousands_separator: bool = Field(False, description="Разделять тысячи")
    thousands_separator_char: str = Field(",", min_length=1, description="Разделитель тысяч")
    decimal_separator: str = Field(".", min_length=1, description="Десятичный разделитель")
    unit: str = Field("", description="Единица измерения")
    unit_position: UnitPosition = Field(UnitPosition.SUFFIX, description="Положение единицы")
    uppercase: bool = Field(False, description="Верхний регистр / финансовые цифры")
    chinese_number: bool = Field(False, description="Китайские цифры")
    chinese_capital: bool = Field(False, description="Сумма прописью (RMB)")

    model_config = {"frozen": True}

    @field_validator("decimal_separator")
    @classmethod
    def validate_separators_differ(cls, v: str, info) -> str:
        """Десятичный разделитель не совпадает с разделителем тысяч"""
        if info.data.get("thousands_separator_char") == v:
            raise ValueError(f"decimal_separator {v!r} must differ from thousands_separator_char")
        return v
