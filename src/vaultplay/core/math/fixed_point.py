"""
Fixed-Point — Целочисленная арифметика для денежных сумм

Все суммы — неотрицательные целые числа в минимальных единицах актива.
Модуль обеспечивает точность денежных вычислений:
- Точное рациональное умножение с округлением вниз (без float)
- Basis points как точная дробь
- Валидация сумм до любых вычислений

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Float никогда не участвует в расчёте суммы перевода
2. Округление всегда вниз (truncating), как в нативной арифметике актива
3. Деление на ноль никогда не происходит (ValueError до деления)
4. Все операции детерминированы и воспроизводимы
"""

from fractions import Fraction
from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Знаменатель basis points: 1 bps = 1/10000
BPS_DENOMINATOR: Final[int] = 10_000

# Верхняя граница суммы (u64), совпадает с нативной арифметикой актива
U64_MAX: Final[int] = 2**64 - 1


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_amount(value: int, name: str, allow_zero: bool = False) -> None:
    """
    Валидация денежной суммы.

    Args:
        value: Проверяемая сумма
        name: Имя параметра (для сообщения об ошибке)
        allow_zero: Допускать ли ноль (default: False)

    Raises:
        ValueError: Если value не int, отрицательная, ноль (без allow_zero)
            или превышает U64_MAX
    """
    # bool: подкласс int, но как сумма недопустим
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer amount, got {value!r}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    if value == 0 and not allow_zero:
        raise ValueError(f"{name} must be positive, got {value}")

    if value > U64_MAX:
        raise ValueError(f"{name} exceeds u64 range, got {value}")


def validate_bps(bps: int, name: str) -> None:
    """
    Валидация ставки в basis points.

    Raises:
        ValueError: Если bps не int или вне [0, BPS_DENOMINATOR]
    """
    if isinstance(bps, bool) or not isinstance(bps, int):
        raise ValueError(f"{name} must be an integer number of bps, got {bps!r}")

    if not 0 <= bps <= BPS_DENOMINATOR:
        raise ValueError(f"{name} must be in [0, {BPS_DENOMINATOR}], got {bps}")


# =============================================================================
# ТОЧНЫЕ ДРОБИ
# =============================================================================


def bps_to_fraction(bps: int) -> Fraction:
    """
    Конверсия basis points в точную дробь.

    Examples:
        >>> bps_to_fraction(250)
        Fraction(1, 40)
    """
    return Fraction(bps, BPS_DENOMINATOR)


def fee_multiplier(fee_bps: int) -> Fraction:
    """
    Множитель суммы с комиссией: (10000 + fee_bps) / 10000.

    Examples:
        >>> fee_multiplier(250)
        Fraction(41, 40)
    """
    return Fraction(BPS_DENOMINATOR + fee_bps, BPS_DENOMINATOR)


def mul_floor(amount: int, rate: Fraction) -> int:
    """
    Умножение суммы на точную дробь с округлением вниз.

    Args:
        amount: Неотрицательная сумма
        rate: Неотрицательная рациональная ставка

    Returns:
        floor(amount * rate)

    Examples:
        >>> mul_floor(100, Fraction(41, 40))
        102
        >>> mul_floor(39, Fraction(1, 40))
        0
    """
    if rate < 0:
        raise ValueError(f"rate must be non-negative, got {rate}")

    return (amount * rate.numerator) // rate.denominator


def mul_div_floor(amount: int, numerator: int, denominator: int) -> int:
    """
    floor(amount * numerator / denominator) в целых числах.

    Raises:
        ValueError: Если denominator <= 0 или numerator < 0
    """
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")

    if numerator < 0:
        raise ValueError(f"numerator must be non-negative, got {numerator}")

    return (amount * numerator) // denominator
