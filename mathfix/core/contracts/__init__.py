"""
Contract Validation Module

Валидация JSON контрактов mathfix (payload конфигурации).
"""

from .validators import (
    SCHEMA_DIR,
    ConfigValidator,
    ContractValidator,
    SchemaLoader,
    error_path,
    validate_config,
)

__all__ = [
    # Constants
    "SCHEMA_DIR",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ConfigValidator",
    # Functions
    "error_path",
    "validate_config",
]
