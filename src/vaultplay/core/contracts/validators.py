"""
JSON Schema Contract Validators

Модуль для валидации settlement-событий согласно формальным JSON Schema
контрактам. Использует библиотеку jsonschema для проверки соответствия
данных схемам.

Схемы:
- flip_event.json
- flip_event_typed.json
- roulette_event.json
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from vaultplay.core.domain.events import (
    FlipEvent,
    FlipEventTyped,
    RouletteEvent,
    SettlementEvent,
)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в package data рядом с этим модулем (schema/).
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'flip_event')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class FlipEventValidator(ContractValidator):
    """Валидатор для flip_event контракта."""

    def __init__(self):
        super().__init__("flip_event")


class FlipEventTypedValidator(ContractValidator):
    """Валидатор для flip_event_typed контракта."""

    def __init__(self):
        super().__init__("flip_event_typed")


class RouletteEventValidator(ContractValidator):
    """Валидатор для roulette_event контракта."""

    def __init__(self):
        super().__init__("roulette_event")


# Валидатор по типу события
_VALIDATORS: Dict[type, ContractValidator] = {}


def _validator_for(event: SettlementEvent) -> ContractValidator:
    event_cls = type(event)
    if event_cls not in _VALIDATORS:
        if event_cls is FlipEvent:
            _VALIDATORS[event_cls] = FlipEventValidator()
        elif event_cls is FlipEventTyped:
            _VALIDATORS[event_cls] = FlipEventTypedValidator()
        elif event_cls is RouletteEvent:
            _VALIDATORS[event_cls] = RouletteEventValidator()
        else:
            raise TypeError(f"No contract for event type {event_cls.__name__}")
    return _VALIDATORS[event_cls]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_flip_event(data: Dict[str, Any]) -> None:
    """
    Валидация flip_event данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    FlipEventValidator().validate(data)


def validate_flip_event_typed(data: Dict[str, Any]) -> None:
    """
    Валидация flip_event_typed данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    FlipEventTypedValidator().validate(data)


def validate_roulette_event(data: Dict[str, Any]) -> None:
    """
    Валидация roulette_event данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    RouletteEventValidator().validate(data)


def validate_event(event: SettlementEvent) -> None:
    """
    Валидация Pydantic события против его контракта.

    Событие сериализуется в JSON-совместимый dict (tuple -> list).

    Raises:
        ValidationError: Если событие не соответствует схеме
        TypeError: Если для типа события нет контракта
    """
    _validator_for(event).validate(event.model_dump(mode="json"))


__all__ = [
    "SchemaLoader",
    "ContractValidator",
    "FlipEventValidator",
    "FlipEventTypedValidator",
    "RouletteEventValidator",
    "ValidationError",
    "validate_flip_event",
    "validate_flip_event_typed",
    "validate_roulette_event",
    "validate_event",
]
