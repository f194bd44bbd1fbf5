"""
Config Contract Validators

Payload set_config проверяется по JSON Schema (Draft 2020-12) до того,
как слой конфигурации будет изменён.

Схемы (schema/ рядом с модулем, устанавливаются с пакетом):
- config.json — разреженное дерево переопределений
"""

import json
from pathlib import Path
from typing import Any, Iterator, Mapping

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match

SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Чтение и meta-валидация схем; каждая схема читается один раз.

    Args:
        schema_dir: Каталог со схемами; None → SCHEMA_DIR

    Raises:
        RuntimeError: Каталог не существует
    """

    def __init__(self, schema_dir: Path | None = None):
        self.schema_dir = Path(schema_dir) if schema_dir is not None else SCHEMA_DIR
        if not self.schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self.schema_dir}")
        self._cache: dict[str, dict[str, Any]] = {}

    def load_schema(self, name: str) -> dict[str, Any]:
        """
        Схема по имени файла без .json.

        Raises:
            FileNotFoundError: Нет файла схемы
            ValueError: Файл не является корректной JSON Schema
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        path = self.schema_dir / f"{name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}")

        self._cache[name] = schema
        return schema


_LOADER = SchemaLoader()


# =============================================================================
# VALIDATORS
# =============================================================================


def error_path(error: ValidationError) -> str | None:
    """Dotted-путь до нарушающего значения; None для корня payload."""
    return ".".join(str(part) for part in error.absolute_path) or None


class ContractValidator:
    """Проверка данных по одной схеме."""

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        self.schema_name = schema_name
        self.schema = (loader or _LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Mapping[str, Any]) -> None:
        """Raises: ValidationError при первом нарушении."""
        self.validator.validate(data)

    def is_valid(self, data: Mapping[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Mapping[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)

    def first_error(self, data: Mapping[str, Any]) -> ValidationError | None:
        """
        Наиболее релевантное нарушение (jsonschema best_match) или None.

        Examples:
            >>> ConfigValidator().first_error({"precision": {"default": 4}}) is None
            True
        """
        return best_match(self.iter_errors(data))


class ConfigValidator(ContractValidator):
    """Схема config.json."""

    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__("config", loader)


def validate_config(data: Mapping[str, Any]) -> None:
    """
    Проверка payload конфигурации.

    Raises:
        ValidationError: Payload нарушает config.json
    """
    ConfigValidator().validate(data)
