"""
Settlement Events — Записи о завершённых ставках

Immutable Pydantic модели, добавляемые в EventSink ровно один раз на каждую
завершённую ставку. Никогда не изменяются и не удаляются. Потребляются
off-chain наблюдателями для аудита честности.

Полная совместимость с JSON Schema (vaultplay/core/contracts/schema/).
"""

from typing import Literal, Union

from pydantic import BaseModel, Field


class FlipEvent(BaseModel):
    """
    Событие coin-flip по primary asset.
    """

    event_type: Literal["flip"] = "flip"
    player: str = Field(..., min_length=1, description="Идентификатор игрока")
    is_won: bool = Field(..., description="Выигрыш игрока")
    amount_bet: int = Field(..., gt=0, description="Ставка без комиссии")

    model_config = {"frozen": True}


class FlipEventTyped(BaseModel):
    """
    Событие coin-flip по произвольному активу (multi-asset и delegate).
    """

    event_type: Literal["flip_typed"] = "flip_typed"
    player: str = Field(..., min_length=1, description="Идентификатор игрока")
    is_won: bool = Field(..., description="Выигрыш игрока")
    asset_name: str = Field(..., min_length=1, description="Полное имя типа актива")
    amount_bet: int = Field(..., gt=0, description="Ставка без комиссии")

    model_config = {"frozen": True}


class RouletteEvent(BaseModel):
    """
    Событие рулетки: включает выбранные номера и выпавшее число,
    чтобы наблюдатель мог пересчитать исход независимо.
    """

    event_type: Literal["roulette"] = "roulette"
    player: str = Field(..., min_length=1, description="Идентификатор игрока")
    is_won: bool = Field(..., description="Выигрыш игрока")
    asset_name: str = Field(..., min_length=1, description="Полное имя типа актива")
    amount_bet: int = Field(..., gt=0, description="Ставка")
    chosen_numbers: tuple[int, ...] = Field(..., min_length=1, description="Выбранные номера")
    drawn_number: int = Field(..., ge=0, description="Выпавшее число")

    model_config = {"frozen": True}

    def recomputed_is_won(self) -> bool:
        """Независимый пересчёт исхода по полям события."""
        return self.drawn_number in self.chosen_numbers


SettlementEvent = Union[FlipEvent, FlipEventTyped, RouletteEvent]
