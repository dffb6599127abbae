"""
Payouts — Расчёт комиссий и выплат

Формулы (все суммы — целые, округление вниз):

    Coin-flip:
        amount_with_fee = floor(amount * (10000 + fee_bps) / 10000)
        payout_on_win   = amount * payout_multiplier          (от ставки без комиссии)

    Delegate coin-flip (комиссия разделена на два перевода):
        vault_leg       = floor(amount * (10000 + fee_bps) / 10000)
        receiver_leg    = floor(amount * fee_bps / 10000)

    Roulette:
        payout          = floor(amount * 36 / n)

Обе ноги delegate-варианта вычисляются независимо по одному правилу
округления; receiver_leg НЕ равен vault_leg - amount в общем случае.
"""

from dataclasses import dataclass
from typing import Final

from vaultplay.core.math.fixed_point import (
    BPS_DENOMINATOR,
    fee_multiplier,
    mul_div_floor,
    mul_floor,
    validate_amount,
    validate_bps,
)

# =============================================================================
# DEFAULTS
# =============================================================================

# Множитель выплаты coin-flip
FLIP_PAYOUT_MULTIPLIER_DEFAULT: Final[int] = 2

# Комиссия coin-flip (2.5%)
FLIP_FEE_BPS_DEFAULT: Final[int] = 250

# Комиссия delegate coin-flip (1.25%)
DELEGATE_FEE_BPS_DEFAULT: Final[int] = 125

# Числитель выплаты рулетки (36 к n)
ROULETTE_PAYOUT_NUMERATOR_DEFAULT: Final[int] = 36


# =============================================================================
# COIN-FLIP
# =============================================================================


def amount_with_fee(amount: int, fee_bps: int) -> int:
    """
    Сумма ставки вместе с комиссией.

    Args:
        amount: Ставка (без комиссии)
        fee_bps: Комиссия в basis points

    Returns:
        floor(amount * (10000 + fee_bps) / 10000)

    Examples:
        >>> amount_with_fee(100, 250)
        102
        >>> amount_with_fee(1000, 250)
        1025
    """
    validate_amount(amount, "amount", allow_zero=True)
    validate_bps(fee_bps, "fee_bps")
    return mul_floor(amount, fee_multiplier(fee_bps))


def fee_amount(amount: int, fee_bps: int) -> int:
    """
    Комиссия отдельной суммой: floor(amount * fee_bps / 10000).

    Examples:
        >>> fee_amount(100, 125)
        1
        >>> fee_amount(79, 125)
        0
    """
    validate_amount(amount, "amount", allow_zero=True)
    validate_bps(fee_bps, "fee_bps")
    return mul_div_floor(amount, fee_bps, BPS_DENOMINATOR)


def flip_payout(amount: int, multiplier: int = FLIP_PAYOUT_MULTIPLIER_DEFAULT) -> int:
    """Выплата при выигрыше coin-flip: amount * multiplier (комиссия не учитывается)."""
    validate_amount(amount, "amount", allow_zero=True)
    return amount * multiplier


# =============================================================================
# DELEGATE SPLIT
# =============================================================================


@dataclass(frozen=True)
class DelegateSplit:
    """Разбиение входящих средств delegate-ставки на два перевода."""

    vault_leg: int  # Перевод в delegate vault
    receiver_leg: int  # Перевод fee receiver

    @property
    def total(self) -> int:
        """Итого списывается с игрока."""
        return self.vault_leg + self.receiver_leg


def delegate_split(amount: int, fee_bps: int = DELEGATE_FEE_BPS_DEFAULT) -> DelegateSplit:
    """
    Вычисление обеих ног delegate-ставки.

    Examples:
        >>> delegate_split(1000, 125)
        DelegateSplit(vault_leg=1012, receiver_leg=12)
    """
    return DelegateSplit(
        vault_leg=amount_with_fee(amount, fee_bps),
        receiver_leg=fee_amount(amount, fee_bps),
    )


# =============================================================================
# ROULETTE
# =============================================================================


def roulette_payout(
    amount: int,
    chosen_count: int,
    numerator: int = ROULETTE_PAYOUT_NUMERATOR_DEFAULT,
) -> int:
    """
    Выплата рулетки: floor(amount * numerator / chosen_count).

    Args:
        amount: Ставка
        chosen_count: Количество выбранных номеров (n > 0)
        numerator: Числитель выплаты (default 36)

    Raises:
        ValueError: Если chosen_count <= 0

    Examples:
        >>> roulette_payout(100, 1)
        3600
        >>> roulette_payout(100, 7)
        514
    """
    validate_amount(amount, "amount", allow_zero=True)
    if chosen_count <= 0:
        raise ValueError(f"chosen_count must be positive, got {chosen_count}")

    return mul_div_floor(amount, numerator, chosen_count)
