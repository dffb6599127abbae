"""Валидация параметров ставки до любого перевода.

Каждая функция либо возвращает нормализованное значение, либо поднимает
типизированную ошибку из vaultplay.core.errors.
"""

from typing import Iterable, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError

from vaultplay.core.domain.asset import AssetType
from vaultplay.core.domain.wager import Wager
from vaultplay.core.errors import (
    BetExceedsMaximum,
    InsufficientFunds,
    InvalidAmount,
    InvalidChoice,
    InvalidWager,
    PayoutExceedsMaximum,
    TooManyChoices,
    ZeroChoices,
)
from vaultplay.core.math.fixed_point import validate_amount
from vaultplay.ledger.base import Ledger
from vaultplay.settlement.config import ROULETTE_SLOTS

W = TypeVar("W", bound=Wager)


def check_amount(amount: int) -> int:
    """Ставка — положительное целое в диапазоне u64."""
    try:
        validate_amount(amount, "amount")
    except ValueError as e:
        raise InvalidAmount(str(e)) from e
    return amount


def check_max_bet(amount: int, max_bet: Optional[int]) -> None:
    """Ставка строго меньше max_bet (None — без ограничения)."""
    if max_bet is not None and amount >= max_bet:
        raise BetExceedsMaximum(amount, max_bet)


def check_max_payout(payout: int, max_payout: int) -> None:
    """Выплата не больше max_payout (включительно)."""
    if payout > max_payout:
        raise PayoutExceedsMaximum(payout, max_payout)


def check_choices(chosen_numbers: Iterable[int], max_choices: int) -> Tuple[int, ...]:
    """
    Валидация выбранных номеров рулетки.

    Порядок проверок: пустой набор -> превышение размера -> диапазон и
    уникальность номеров.

    Raises:
        ZeroChoices: n == 0
        TooManyChoices: n > max_choices
        InvalidChoice: номер вне [0, ROULETTE_SLOTS) или повтор
    """
    choices = tuple(chosen_numbers)

    if len(choices) == 0:
        raise ZeroChoices()

    if len(choices) > max_choices:
        raise TooManyChoices(len(choices), max_choices)

    seen = set()
    for number in choices:
        if isinstance(number, bool) or not isinstance(number, int):
            raise InvalidChoice(f"Chosen number must be an integer, got {number!r}")
        if not 0 <= number < ROULETTE_SLOTS:
            raise InvalidChoice(f"Chosen number {number} outside [0, {ROULETTE_SLOTS})")
        if number in seen:
            raise InvalidChoice(f"Chosen number {number} repeated")
        seen.add(number)

    return choices


def require_balance(ledger: Ledger, account: str, asset: AssetType, required: int) -> None:
    """Баланс account покрывает required (required <= 0 — всегда OK)."""
    if required <= 0:
        return
    available = ledger.balance(account, asset)
    if available < required:
        raise InsufficientFunds(account, asset.name, required, available)


def build_wager(wager_cls: Type[W], **fields) -> W:
    """
    Построение модели ставки.

    Raises:
        InvalidWager: Если pydantic отклоняет поля (пустой player и т.п.)
    """
    try:
        return wager_cls(**fields)
    except ValidationError as e:
        raise InvalidWager(str(e)) from e
