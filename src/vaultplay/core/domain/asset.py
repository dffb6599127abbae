"""
AssetType — Тип fungible-актива

Immutable Pydantic модель, идентифицирующая актив по полному имени типа.
Имя типа попадает в события (asset_name) и используется как ключ баланса.
"""

from typing import Final

from pydantic import BaseModel, Field


class AssetType(BaseModel):
    """
    Тип актива.

    Два AssetType равны тогда и только тогда, когда совпадают все поля.
    Immutable модель (frozen=True), пригодна как ключ dict.
    """

    name: str = Field(..., min_length=1, description="Полное имя типа актива")
    symbol: str = Field(..., min_length=1, max_length=16, description="Тикер")
    decimals: int = Field(8, ge=0, le=32, description="Количество знаков после запятой")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.name


# Primary asset платформы: к нему применяются max_bet / max_payout
PRIMARY_ASSET: Final[AssetType] = AssetType(
    name="vaultplay::native::NativeCoin", symbol="NATIVE", decimals=8
)
