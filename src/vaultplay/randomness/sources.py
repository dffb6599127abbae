"""
RandomnessSource — Источник несмещённых случайных чисел

Внешний коллаборатор: возвращает равномерное целое из полуинтервала
[low, high). Криптография оракула (commit-reveal, VRF и т.п.) вне scope;
от источника требуется только равномерность и то, что вызывающий не может
повлиять на результат после фиксации параметров ставки.

Вызов draw() — блокирующий; settlement вызывает его строго после расчёта
всех обязательств и до первого перевода.
"""

import random
import secrets
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomnessSource(Protocol):
    """Контракт источника случайности."""

    def draw(self, low: int, high: int) -> int:
        """Равномерное целое из [low, high)."""
        ...


def _validate_range(low: int, high: int) -> None:
    if high <= low:
        raise ValueError(f"Empty range [{low}, {high})")


class SecureRandomnessSource:
    """Источник на основе secrets (CSPRNG операционной системы)."""

    def draw(self, low: int, high: int) -> int:
        _validate_range(low, high)
        return low + secrets.randbelow(high - low)


class SeededRandomnessSource:
    """
    Воспроизводимый источник на основе random.Random.

    Только для симуляций и тестов: зная seed, результат предсказуем.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._rng = random.Random(seed)

    def draw(self, low: int, high: int) -> int:
        _validate_range(low, high)
        return self._rng.randrange(low, high)
