"""Settlement — атомарное проведение ставок coin-flip, delegate coin-flip и рулетки."""

from .base import SettlementResult
from .coin_flip import CoinFlipGame
from .config import (
    DelegateConfig,
    FlipConfig,
    RouletteConfig,
    SettlementConfig,
)
from .delegate import DelegateFlipGame
from .engine import SettlementEngine
from .roulette import NAMESPACE_ROULETTE, RouletteGame

__all__ = [
    "SettlementEngine",
    "SettlementResult",
    "SettlementConfig",
    "FlipConfig",
    "DelegateConfig",
    "RouletteConfig",
    "CoinFlipGame",
    "DelegateFlipGame",
    "RouletteGame",
    "NAMESPACE_ROULETTE",
]
