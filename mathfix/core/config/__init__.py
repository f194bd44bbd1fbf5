"""
Config — встроенные значения, слои переопределений и FormatOptions.
"""

from mathfix.core.config.cascade import ConfigCascade, ConfigLayer, deep_merge
from mathfix.core.config.defaults import DEFAULT_CONFIG
from mathfix.core.config.options import CALL_OPTION_PATHS, FormatOptions, UnitPosition

__all__ = [
    "CALL_OPTION_PATHS",
    "DEFAULT_CONFIG",
    "ConfigCascade",
    "ConfigLayer",
    "FormatOptions",
    "UnitPosition",
    "deep_merge",
]
