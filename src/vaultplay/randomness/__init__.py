"""Randomness — интерфейс источника случайности и его реализации."""

from .sources import RandomnessSource, SecureRandomnessSource, SeededRandomnessSource

__all__ = [
    "RandomnessSource",
    "SecureRandomnessSource",
    "SeededRandomnessSource",
]
