"""
Wager / Outcome — Эфемерные модели одной ставки

Wager существует только на время одного settlement-вызова и не сохраняется.
Outcome — выпавшее число и производный флаг выигрыша.
"""

from typing import Final

from pydantic import BaseModel, Field, field_validator

from .asset import AssetType

# Выигрышный исход coin-flip
FLIP_WINNING_OUTCOME: Final[int] = 1


class Wager(BaseModel):
    """
    Ставка coin-flip (обычная, multi-asset, delegate).

    Immutable модель (frozen=True).
    """

    player: str = Field(..., min_length=1, description="Идентификатор игрока")
    asset: AssetType = Field(..., description="Тип актива ставки")
    amount: int = Field(..., gt=0, description="Ставка без комиссии (минимальные единицы)")
    vault_owner: str = Field(..., min_length=1, description="Владелец vault")

    model_config = {"frozen": True, "strict": True}


class RouletteWager(Wager):
    """
    Ставка рулетки: добавляет набор выбранных номеров.

    Порядок номеров сохраняется (для события), уникальность проверяется
    settlement-валидатором вместе с диапазоном.
    """

    chosen_numbers: tuple[int, ...] = Field(..., description="Выбранные номера")

    @field_validator("chosen_numbers", mode="before")
    @classmethod
    def coerce_to_tuple(cls, v):
        """Списки и множества приводятся к tuple"""
        if isinstance(v, (list, set, frozenset)):
            return tuple(sorted(v)) if isinstance(v, (set, frozenset)) else tuple(v)
        return v


class Outcome(BaseModel):
    """
    Результат розыгрыша.

    drawn — число из RandomnessSource, is_won — производный флаг.
    """

    drawn: int = Field(..., ge=0, description="Выпавшее число")
    is_won: bool = Field(..., description="Выигрыш игрока")

    model_config = {"frozen": True}

    @classmethod
    def for_flip(cls, drawn: int) -> "Outcome":
        """Coin-flip: выигрыш при drawn == FLIP_WINNING_OUTCOME"""
        return cls(drawn=drawn, is_won=drawn == FLIP_WINNING_OUTCOME)

    @classmethod
    def for_roulette(cls, drawn: int, chosen_numbers: tuple[int, ...]) -> "Outcome":
        """Рулетка: выигрыш при попадании drawn в выбранные номера"""
        is_won = False
        for number in chosen_numbers:
            if number == drawn:
                is_won = True
                break
        return cls(drawn=drawn, is_won=is_won)
