"""
EventSink — Append-only лог settlement-событий

Внешний коллаборатор (персистентность и индексация вне scope).
InMemoryEventSink — эталонная реализация: каждое событие проверяется против
JSON Schema контракта и добавляется ровно один раз; изменение и удаление
невозможны.
"""

import logging
import threading
from typing import List, Protocol, Tuple, Type, TypeVar, runtime_checkable

from vaultplay.core.contracts import validate_event
from vaultplay.core.domain.events import SettlementEvent

logger = logging.getLogger(__name__)

E = TypeVar("E")


@runtime_checkable
class EventSink(Protocol):
    """Контракт EventSink."""

    def emit(self, event: SettlementEvent) -> None:
        ...


class InMemoryEventSink:
    """Append-only in-memory лог событий."""

    def __init__(self, validate_contracts: bool = True):
        self.validate_contracts = validate_contracts
        self._events: List[SettlementEvent] = []
        self._lock = threading.Lock()

    def emit(self, event: SettlementEvent) -> None:
        """
        Добавление события.

        Raises:
            jsonschema.ValidationError: Если событие нарушает контракт
        """
        if self.validate_contracts:
            validate_event(event)

        with self._lock:
            self._events.append(event)
            sequence = len(self._events)

        logger.debug("Event #%d %s player=%s is_won=%s",
                     sequence, event.event_type, event.player, event.is_won)

    def events(self) -> Tuple[SettlementEvent, ...]:
        """Снапшот всех событий в порядке добавления."""
        with self._lock:
            return tuple(self._events)

    def events_for(self, player: str) -> Tuple[SettlementEvent, ...]:
        """События одного игрока."""
        return tuple(e for e in self.events() if e.player == player)

    def of_type(self, event_cls: Type[E]) -> Tuple[E, ...]:
        """События заданного типа (FlipEvent, FlipEventTyped, RouletteEvent)."""
        return tuple(e for e in self.events() if isinstance(e, event_cls))

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
