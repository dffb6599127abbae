"""
Тесты для fixed-point математики комиссий и выплат

Проверяет:
1. amount_with_fee = floor(amount * (10000 + bps) / 10000)
2. Разделение delegate-комиссии на две независимо округлённые ноги
3. Выплату coin-flip от ставки без комиссии
4. Выплату рулетки floor(amount * 36 / n) и защиту от n == 0
5. Валидацию сумм и bps
"""

from fractions import Fraction

import pytest

from vaultplay.core.math import (
    BPS_DENOMINATOR,
    U64_MAX,
    DelegateSplit,
    amount_with_fee,
    bps_to_fraction,
    delegate_split,
    fee_amount,
    fee_multiplier,
    flip_payout,
    mul_div_floor,
    mul_floor,
    roulette_payout,
    validate_amount,
    validate_bps,
)


# =============================================================================
# FIXED-POINT PRIMITIVES
# =============================================================================


class TestFixedPoint:
    """Тесты для целочисленных fixed-point примитивов"""

    def test_bps_to_fraction_exact(self):
        assert bps_to_fraction(250) == Fraction(1, 40)
        assert bps_to_fraction(125) == Fraction(1, 80)
        assert bps_to_fraction(0) == 0

    def test_fee_multiplier_exact(self):
        assert fee_multiplier(250) == Fraction(10250, BPS_DENOMINATOR)
        assert fee_multiplier(0) == 1

    def test_mul_floor_truncates(self):
        assert mul_floor(100, Fraction(41, 40)) == 102  # 102.5 -> 102
        assert mul_floor(39, Fraction(1, 40)) == 0  # 0.975 -> 0

    def test_mul_floor_negative_rate_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            mul_floor(100, Fraction(-1, 2))

    def test_mul_div_floor(self):
        assert mul_div_floor(100, 36, 7) == 514
        assert mul_div_floor(0, 36, 7) == 0

    def test_mul_div_floor_zero_denominator(self):
        with pytest.raises(ValueError, match="denominator"):
            mul_div_floor(100, 36, 0)

    def test_no_float_precision_loss_near_u64(self):
        """Большие суммы считаются точно (float дал бы ошибку)"""
        amount = 2**62 + 1
        expected = (amount * 10250) // 10000
        assert amount_with_fee(amount, 250) == expected


class TestValidation:
    """Тесты валидации сумм и bps"""

    @pytest.mark.parametrize("value", [1, 100, U64_MAX])
    def test_valid_amounts(self, value):
        validate_amount(value, "amount")

    def test_zero_rejected_by_default(self):
        with pytest.raises(ValueError, match="positive"):
            validate_amount(0, "amount")

    def test_zero_allowed_explicitly(self):
        validate_amount(0, "amount", allow_zero=True)

    @pytest.mark.parametrize("value", [-1, 1.5, "10", True, None])
    def test_invalid_amounts(self, value):
        with pytest.raises(ValueError):
            validate_amount(value, "amount")

    def test_amount_above_u64_rejected(self):
        with pytest.raises(ValueError, match="u64"):
            validate_amount(U64_MAX + 1, "amount")

    @pytest.mark.parametrize("bps", [-1, 10_001, 2.5])
    def test_invalid_bps(self, bps):
        with pytest.raises(ValueError):
            validate_bps(bps, "fee_bps")


# =============================================================================
# COIN-FLIP
# =============================================================================


class TestFlipFees:
    """Тесты комиссии и выплаты coin-flip"""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (100, 102),  # 102.5 -> 102
            (1000, 1025),
            (1, 1),  # 1.025 -> 1
            (40, 41),
            (39, 39),  # 39.975 -> 39
            (12345, 12653),  # 12653.625 -> 12653
        ],
    )
    def test_amount_with_fee_default_rate(self, amount, expected):
        assert amount_with_fee(amount, 250) == expected
        assert amount_with_fee(amount, 250) == (amount * 10250) // 10000

    def test_zero_fee(self):
        assert amount_with_fee(777, 0) == 777

    def test_payout_is_double_stake_independent_of_fee(self):
        for fee_bps in (0, 125, 250, 1000):
            assert flip_payout(100) == 200
            assert amount_with_fee(100, fee_bps) >= 100

    def test_custom_multiplier(self):
        assert flip_payout(100, multiplier=3) == 300


# =============================================================================
# DELEGATE SPLIT
# =============================================================================


class TestDelegateSplit:
    """Тесты разделения delegate-комиссии"""

    def test_split_legs(self):
        split = delegate_split(1000, 125)
        assert split == DelegateSplit(vault_leg=1012, receiver_leg=12)
        assert split.total == 1024

    def test_legs_rounded_independently(self):
        """receiver_leg не выводится из vault_leg"""
        split = delegate_split(100, 125)
        assert split.vault_leg == 101  # 101.25 -> 101
        assert split.receiver_leg == 1  # 1.25 -> 1

        split = delegate_split(79, 125)
        assert split.vault_leg == 79  # 79.9875 -> 79
        assert split.receiver_leg == 0  # 0.9875 -> 0

    @pytest.mark.parametrize("amount", [1, 7, 80, 999, 10_000, 123_456_789])
    def test_split_matches_formula(self, amount):
        split = delegate_split(amount, 125)
        assert split.vault_leg == (amount * 10125) // 10000
        assert split.receiver_leg == (amount * 125) // 10000

    def test_fee_amount(self):
        assert fee_amount(10_000, 125) == 125
        assert fee_amount(79, 125) == 0


# =============================================================================
# ROULETTE
# =============================================================================


class TestRoulettePayout:
    """Тесты выплаты рулетки"""

    @pytest.mark.parametrize(
        "amount,n,expected",
        [
            (100, 1, 3600),
            (100, 2, 1800),
            (100, 7, 514),  # 514.28 -> 514
            (100, 37, 97),  # 97.29 -> 97
            (1, 37, 0),
        ],
    )
    def test_payout_truncates(self, amount, n, expected):
        assert roulette_payout(amount, n) == expected

    def test_zero_choices_rejected(self):
        with pytest.raises(ValueError, match="chosen_count"):
            roulette_payout(100, 0)

    def test_custom_numerator(self):
        assert roulette_payout(100, 2, numerator=35) == 1750
