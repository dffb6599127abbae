"""Audit — проверка честности по логу settlement-событий."""

from .fairness import (
    FLIP_WIN_PROBABILITY,
    Z_SCORE_LIMIT_DEFAULT,
    FairnessReport,
    summarize_flips,
    summarize_roulette,
)

__all__ = [
    "FLIP_WIN_PROBABILITY",
    "Z_SCORE_LIMIT_DEFAULT",
    "FairnessReport",
    "summarize_flips",
    "summarize_roulette",
]
