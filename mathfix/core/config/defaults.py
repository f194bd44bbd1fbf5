"""
Встроенные значения конфигурации (нижний слой каскада).

Дерево не изменяется: слои хранят только переопределения, а чтение
возвращает копии.
"""

from typing import Any, Final

DEFAULT_CONFIG: Final[dict[str, Any]] = {
    "precision": {
        "default": 10,
        "max": 100,
        "min": 0,
    },
    "format": {
        "thousands_separator": False,
        "thousands_separator_char": ",",
        "decimal_separator": ".",
        "unit": "",
        "unit_position": "suffix",
        "uppercase": False,
        "chinese_number": False,
        "chinese_capital": False,
    },
    "currency": {
        "symbol": "¥",
        "precision": 2,
        "with_thousands": True,
        "symbol_position": "prefix",
    },
    "percent": {
        "precision": 2,
        "with_symbol": True,
    },
    "readable": {
        "precision": 1,
        "locale": "zh",
    },
    "scientific": {
        "precision": 2,
    },
    "fraction": {
        "max_denominator": 100,
    },
    "expression": {
        "max_length": 1000,
    },
    "performance": {
        "cache_enabled": True,
        "cache_size": 1000,
    },
    "logging": {
        "log_batch_failures": True,
    },
}
