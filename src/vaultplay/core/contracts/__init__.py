"""
Contract Validation Module

Модуль для валидации JSON контрактов settlement-событий vaultplay.
"""

from .validators import (
    ContractValidator,
    FlipEventTypedValidator,
    FlipEventValidator,
    RouletteEventValidator,
    SchemaLoader,
    validate_event,
    validate_flip_event,
    validate_flip_event_typed,
    validate_roulette_event,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "FlipEventValidator",
    "FlipEventTypedValidator",
    "RouletteEventValidator",
    # Functions
    "validate_flip_event",
    "validate_flip_event_typed",
    "validate_roulette_event",
    "validate_event",
]
