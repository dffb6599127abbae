"""
Fairness Audit — Проверка честности по логу событий

Off-chain наблюдатель пересчитывает по событиям EventSink:
- наблюдаемую частоту выигрышей против ожидаемой
- z-score отклонения (нормальная аппроксимация биномиального распределения)
- для рулетки: согласованность is_won с drawn_number / chosen_numbers

Ожидаемые вероятности:
    coin-flip: p = 1/2
    рулетка:   p_i = n_i / 37 (для каждого события своя)

Для разнородных p_i используется сумма бернуллиевских величин:
    E[wins]   = Σ p_i
    Var[wins] = Σ p_i (1 - p_i)
    z         = (wins - E[wins]) / sqrt(Var[wins])
"""

import math
from typing import Final, Iterable, NamedTuple

from vaultplay.core.domain.events import FlipEvent, FlipEventTyped, RouletteEvent
from vaultplay.settlement.config import ROULETTE_SLOTS

# Порог |z| по умолчанию для is_consistent()
Z_SCORE_LIMIT_DEFAULT: Final[float] = 4.0

FLIP_WIN_PROBABILITY: Final[float] = 0.5


class FairnessReport(NamedTuple):
    """Сводка честности по выборке событий."""

    trials: int  # Количество ставок
    wins: int  # Количество выигрышей
    observed_rate: float  # wins / trials
    expected_rate: float  # E[wins] / trials
    z_score: float  # Нормированное отклонение
    integrity_violations: int  # События с is_won, не совпадающим с пересчётом

    def is_consistent(self, z_max: float = Z_SCORE_LIMIT_DEFAULT) -> bool:
        """Выборка согласуется с заявленными вероятностями."""
        return self.integrity_violations == 0 and abs(self.z_score) <= z_max


def _report(trials: int, wins: int, expected_wins: float, variance: float,
            violations: int) -> FairnessReport:
    if trials == 0:
        raise ValueError("events cannot be empty")

    if variance > 0:
        z_score = (wins - expected_wins) / math.sqrt(variance)
    else:
        # Детерминированный исход (p = 0 или 1 для всех событий)
        z_score = 0.0 if wins == expected_wins else math.inf

    return FairnessReport(
        trials=trials,
        wins=wins,
        observed_rate=wins / trials,
        expected_rate=expected_wins / trials,
        z_score=z_score,
        integrity_violations=violations,
    )


def summarize_flips(events: Iterable[FlipEvent | FlipEventTyped]) -> FairnessReport:
    """
    Сводка по событиям coin-flip (FlipEvent и FlipEventTyped).

    Raises:
        ValueError: если events пустой

    Examples:
        >>> events = [FlipEvent(player="p", is_won=w, amount_bet=1) for w in (True, False)]
        >>> summarize_flips(events).observed_rate
        0.5
    """
    trials = 0
    wins = 0
    for event in events:
        trials += 1
        wins += int(event.is_won)

    p = FLIP_WIN_PROBABILITY
    return _report(trials, wins, trials * p, trials * p * (1.0 - p), violations=0)


def summarize_roulette(events: Iterable[RouletteEvent]) -> FairnessReport:
    """
    Сводка по событиям рулетки.

    Raises:
        ValueError: если events пустой
    """
    trials = 0
    wins = 0
    expected_wins = 0.0
    variance = 0.0
    violations = 0

    for event in events:
        p = len(event.chosen_numbers) / ROULETTE_SLOTS
        trials += 1
        wins += int(event.is_won)
        expected_wins += p
        variance += p * (1.0 - p)
        if event.recomputed_is_won() != event.is_won:
            violations += 1

    return _report(trials, wins, expected_wins, variance, violations)
