"""
Config Cascade — слоистая конфигурация

Эффективное значение каждого ключа разрешается независимо:

    call ?? instance ?? global ?? DEFAULT_CONFIG

Слои:
- global: один на процесс, создаётся в точке сборки (mathfix/__init__.py)
- instance: у каждого Calculator свой, parent = global
- call: ключевые аргументы одного вызова, не хранятся

Слой хранит только разреженное дерево переопределений. Чтение идёт сквозь
цепочку parent до встроенных значений, поэтому изменение global сразу видно
во всех instance, у которых этот ключ не переопределён.

ИНВАРИАНТЫ:
1. Payload set_config проходит JSON Schema (config.json) и межключевые
   проверки (разделители format, precision.min <= precision.max) до применения
2. Ошибка валидации не меняет слой
3. get_config никогда не возвращает ссылки на внутренние dict
"""

import copy
import logging
from typing import Any, Mapping

from jsonschema import ValidationError
from pydantic import ValidationError as PydanticValidationError

from mathfix.core.config.defaults import DEFAULT_CONFIG
from mathfix.core.config.options import CALL_OPTION_PATHS, FormatOptions
from mathfix.core.contracts import ConfigValidator, error_path
from mathfix.errors import ConfigurationError

logger = logging.getLogger(__name__)

_MISSING = object()


# =============================================================================
# TREE HELPERS
# =============================================================================


def deep_merge(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """
    Рекурсивное слияние overrides в копию base.

    Examples:
        >>> deep_merge({"a": {"x": 1, "y": 2}}, {"a": {"y": 3}})
        {'a': {'x': 1, 'y': 3}}
    """
    result = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def lookup(tree: Mapping[str, Any], path: str) -> Any:
    """Значение по dotted-пути или _MISSING."""
    node: Any = tree
    for part in path.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return _MISSING
        node = node[part]
    return node


# =============================================================================
# CONFIG LAYER
# =============================================================================


class ConfigLayer:
    """
    Один слой каскада.

    Args:
        name: Имя слоя для логов ("global", "instance")
        parent: Следующий слой цепочки; None → встроенные значения
    """

    def __init__(self, name: str = "global", parent: "ConfigLayer | None" = None):
        self.name = name
        self.parent = parent
        self._overrides: dict[str, Any] = {}
        self._validator = ConfigValidator()

    def __repr__(self) -> str:
        return f"ConfigLayer(name={self.name!r}, overrides={self._overrides!r})"

    @property
    def overrides(self) -> dict[str, Any]:
        """Копия собственных переопределений слоя."""
        return copy.deepcopy(self._overrides)

    def set_config(self, partial: Mapping[str, Any], merge: bool = True) -> bool:
        """
        Применение переопределений к слою.

        Args:
            partial: Разреженное дерево, например {"precision": {"default": 4}}
            merge: True — глубокое слияние; False — каждое указанное
                поддерево верхнего уровня заменяется целиком

        Returns:
            True

        Raises:
            ConfigurationError: Payload не mapping, нарушает схему или
                даёт несогласованное дерево (см. _check_consistency)
        """
        if not isinstance(partial, Mapping):
            raise ConfigurationError(
                f"Config payload must be a mapping, got {type(partial).__name__}",
                value=partial,
            )

        payload = dict(partial)
        error = self._validator.first_error(payload)
        if error is not None:
            raise self._configuration_error(error)

        if merge:
            candidate = deep_merge(self._overrides, payload)
        else:
            candidate = copy.deepcopy(self._overrides)
            for key, value in payload.items():
                candidate[key] = copy.deepcopy(value)

        self._check_consistency(candidate)
        self._overrides = candidate

        logger.debug("Config layer %s updated (merge=%s): %s", self.name, merge, payload)
        return True

    def get_config(self, path: str | None = None, default: Any = None) -> Any:
        """
        Эффективное значение с учётом родительских слоёв.

        Args:
            path: Dotted-путь ("currency.symbol"); None → всё дерево
            default: Значение, если путь не найден ни в одном слое

        Examples:
            >>> ConfigLayer().get_config("precision.default")
            10
            >>> ConfigLayer().get_config("no.such.key", "fallback")
            'fallback'
        """
        if path is None:
            return self.resolved()

        value = self._resolve(path)
        if value is _MISSING:
            return default
        return copy.deepcopy(value)

    def reset_config(self) -> bool:
        """Сброс собственных переопределений слоя."""
        self._overrides = {}
        logger.debug("Config layer %s reset", self.name)
        return True

    def resolved(self) -> dict[str, Any]:
        """Полное эффективное дерево (копия)."""
        base = self.parent.resolved() if self.parent is not None else DEFAULT_CONFIG
        return deep_merge(base, self._overrides)

    def _resolve(self, path: str) -> Any:
        value = lookup(self._overrides, path)
        if value is not _MISSING:
            return value
        if self.parent is not None:
            return self.parent._resolve(path)
        return lookup(DEFAULT_CONFIG, path)

    def _check_consistency(self, overrides: dict[str, Any]) -> None:
        """
        Межключевые ограничения, которые схема не выражает.

        Raises:
            ConfigurationError: precision.min > precision.max или
                format.* не собирается в FormatOptions
        """
        base = self.parent.resolved() if self.parent is not None else DEFAULT_CONFIG
        tree = deep_merge(base, overrides)

        low, high = tree["precision"]["min"], tree["precision"]["max"]
        if low > high:
            raise ConfigurationError(
                f"precision.min ({low}) must not exceed precision.max ({high})",
                path="precision",
                value={"min": low, "max": high},
            )

        values = {name: lookup(tree, path) for name, path in CALL_OPTION_PATHS.items()}
        try:
            FormatOptions(**values)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Inconsistent format config: {e}", path="format", value=tree["format"])

    @staticmethod
    def _configuration_error(error: ValidationError) -> ConfigurationError:
        path = error_path(error)
        location = f" at {path!r}" if path else ""
        return ConfigurationError(
            f"Invalid config{location}: {error.message}",
            path=path,
            value=error.instance,
        )


# =============================================================================
# CASCADE
# =============================================================================


class ConfigCascade:
    """
    Разрешение опций одного вызова поверх цепочки слоёв.

    Args:
        layer: Верхний хранимый слой (обычно instance)
    """

    def __init__(self, layer: ConfigLayer):
        self.layer = layer

    def resolve(self, path: str, call_value: Any = None) -> Any:
        """
        call ?? layer-chain ?? default.

        Examples:
            >>> ConfigCascade(ConfigLayer()).resolve("precision.default", 6)
            6
            >>> ConfigCascade(ConfigLayer()).resolve("precision.default")
            10
        """
        if call_value is not None:
            return call_value
        return self.layer.get_config(path)

    def format_options(self, **call_options: Any) -> FormatOptions:
        """
        Эффективные FormatOptions для одного вызова format.

        Raises:
            ConfigurationError: Неизвестная опция или недопустимое значение
        """
        unknown = sorted(set(call_options) - set(CALL_OPTION_PATHS))
        if unknown:
            raise ConfigurationError(
                f"Unknown format option(s): {', '.join(unknown)}",
                value=unknown,
            )

        values = {
            name: self.resolve(path, call_options.get(name))
            for name, path in CALL_OPTION_PATHS.items()
        }
        try:
            return FormatOptions(**values)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid format options: {e}", value=call_options)
