"""Общий протокол settlement для всех игр.

Порядок шагов одной ставки (никогда не переупорядочивается):
1. Валидация входа и расчёт обязательств (stake, fee, payout) из входа
2. Захват per-vault lock (в глобальном порядке custody account)
3. Проверка балансов игрока и платёжеспособности vault
4. Розыгрыш outcome (блокирующий вызов RandomnessSource)
5. Переводы и эмиссия события в одном Ledger.atomic() scope

Любая ошибка на шагах 1-3 прерывает ставку до первого перевода; ошибка на
шаге 5 откатывает все переводы scope.
"""

import logging
import threading
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from vaultplay.core.domain.events import SettlementEvent
from vaultplay.core.domain.wager import Outcome
from vaultplay.events.sink import EventSink
from vaultplay.ledger.base import Ledger
from vaultplay.randomness.sources import RandomnessSource
from vaultplay.settlement.config import SettlementConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettlementResult:
    """Результат одной завершённой ставки."""

    event: SettlementEvent
    outcome: Outcome
    vault_owner: str

    amount_in: int  # Всего списано с игрока (ставка + комиссии)
    fee: int  # Часть amount_in сверх ставки
    payout: int  # Выплачено игроку (0 при проигрыше)

    @property
    def is_won(self) -> bool:
        return self.outcome.is_won

    @property
    def player_net_change(self) -> int:
        """Изменение баланса игрока."""
        return self.payout - self.amount_in


@contextmanager
def hold_vault_locks(locks: Iterable[Tuple[str, threading.RLock]]) -> Iterator[None]:
    """
    Захват нескольких per-vault lock в порядке custody account.

    Одинаковые аккаунты захватываются один раз.
    """
    unique = {}
    for account, lock in locks:
        unique.setdefault(account, lock)

    with ExitStack() as stack:
        for account in sorted(unique):
            stack.enter_context(unique[account])
        yield


class BaseGame:
    """Общие коллабораторы и шаги settlement."""

    game_name: str = "game"

    def __init__(
        self,
        ledger: Ledger,
        randomness: RandomnessSource,
        sink: EventSink,
        config: SettlementConfig,
    ):
        self.ledger = ledger
        self.randomness = randomness
        self.sink = sink
        self.config = config

    def _draw(self, outcomes: int) -> int:
        """Розыгрыш из [0, outcomes). Выход за диапазон — ошибка источника."""
        drawn = self.randomness.draw(0, outcomes)
        if isinstance(drawn, bool) or not isinstance(drawn, int) or not 0 <= drawn < outcomes:
            raise ValueError(
                f"RandomnessSource returned {drawn!r}, expected integer in [0, {outcomes})"
            )
        return drawn

    def _log_result(self, result: SettlementResult) -> None:
        logger.info(
            "%s settled: player=%s vault_owner=%s drawn=%d is_won=%s in=%d payout=%d",
            self.game_name,
            result.event.player,
            result.vault_owner,
            result.outcome.drawn,
            result.is_won,
            result.amount_in,
            result.payout,
        )

    def _log_abort(self, player: str, vault_owner: str, error: Exception) -> None:
        logger.warning(
            "%s aborted: player=%s vault_owner=%s error=%s: %s",
            self.game_name,
            player,
            vault_owner,
            type(error).__name__,
            error,
        )
