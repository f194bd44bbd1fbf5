"""
Tests for JSON Schema Contract Validators

Тестирование валидатора payload конфигурации:
- Валидность самой схемы
- Валидация правильных данных (включая DEFAULT_CONFIG)
- Детекция нарушений типов, диапазонов и enum
- Запрет неизвестных ключей
"""

import json

import pytest
from jsonschema import ValidationError

from mathfix.core.config import DEFAULT_CONFIG
from mathfix.core.contracts import (
    ConfigValidator,
    SchemaLoader,
    error_path,
    validate_config,
)

# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def validator():
    return ConfigValidator()


@pytest.fixture
def valid_partial_config():
    """Валидный разреженный payload."""
    return {
        "precision": {"default": 4},
        "format": {"thousands_separator": True, "unit": "元", "unit_position": "suffix"},
        "currency": {"symbol": "$", "symbol_position": "prefix"},
        "readable": {"locale": "en"},
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты для SchemaLoader"""

    def test_loads_config_schema(self) -> None:
        schema = SchemaLoader().load_schema("config")
        assert schema["type"] == "object"
        assert schema["additionalProperties"] is False

    def test_schema_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("config") is loader.load_schema("config")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("no_such_schema")

    def test_missing_directory(self, tmp_path) -> None:
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema_rejected(self, tmp_path) -> None:
        (tmp_path / "broken.json").write_text(json.dumps({"type": 5}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# CONFIG VALIDATOR
# =============================================================================


class TestConfigValidator:
    """Тесты для ConfigValidator"""

    def test_defaults_are_valid(self, validator) -> None:
        assert validator.is_valid(DEFAULT_CONFIG)

    def test_empty_payload_is_valid(self, validator) -> None:
        assert validator.is_valid({})

    def test_partial_payload(self, validator, valid_partial_config) -> None:
        validator.validate(valid_partial_config)
        validate_config(valid_partial_config)

    @pytest.mark.parametrize(
        "payload",
        [
            {"precision": {"default": 1.5}},
            {"precision": {"max": 101}},
            {"precision": {"min": -1}},
            {"precision": {"default": True}},
            {"format": {"thousands_separator_char": ""}},
            {"currency": {"symbol_position": "left"}},
            {"fraction": {"max_denominator": 0}},
            {"expression": {"max_length": 0}},
            {"logging": {"log_batch_failures": 1}},
            {"precision": 10},
            {"extra": {}},
        ],
    )
    def test_invalid_payload(self, validator, payload) -> None:
        assert not validator.is_valid(payload)
        with pytest.raises(ValidationError):
            validator.validate(payload)

    def test_iter_errors_reports_every_violation(self, validator) -> None:
        payload = {"precision": {"default": "x"}, "percent": {"with_symbol": "yes"}}
        errors = list(validator.iter_errors(payload))
        paths = {".".join(str(p) for p in error.absolute_path) for error in errors}
        assert paths == {"precision.default", "percent.with_symbol"}

    def test_first_error(self, validator) -> None:
        assert validator.first_error({"precision": {"default": 4}}) is None

        error = validator.first_error({"readable": {"locale": "fr"}})
        assert error is not None
        assert error_path(error) == "readable.locale"

    def test_root_error_has_no_path(self, validator) -> None:
        error = validator.first_error({"extra": 1})
        assert error_path(error) is None
