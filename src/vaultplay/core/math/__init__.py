"""
Core math modules для vaultplay

Целочисленная fixed-point арифметика комиссий и выплат.
"""

# Fixed-point primitives
from vaultplay.core.math.fixed_point import (
    BPS_DENOMINATOR,
    U64_MAX,
    bps_to_fraction,
    fee_multiplier,
    mul_div_floor,
    mul_floor,
    validate_amount,
    validate_bps,
)

# Payouts
from vaultplay.core.math.payouts import (
    DELEGATE_FEE_BPS_DEFAULT,
    FLIP_FEE_BPS_DEFAULT,
    FLIP_PAYOUT_MULTIPLIER_DEFAULT,
    ROULETTE_PAYOUT_NUMERATOR_DEFAULT,
    DelegateSplit,
    amount_with_fee,
    delegate_split,
    fee_amount,
    flip_payout,
    roulette_payout,
)

__all__ = [
    # Fixed-point: Constants
    "BPS_DENOMINATOR",
    "U64_MAX",
    # Fixed-point: Functions
    "bps_to_fraction",
    "fee_multiplier",
    "mul_div_floor",
    "mul_floor",
    "validate_amount",
    "validate_bps",
    # Payouts: Constants
    "DELEGATE_FEE_BPS_DEFAULT",
    "FLIP_FEE_BPS_DEFAULT",
    "FLIP_PAYOUT_MULTIPLIER_DEFAULT",
    "ROULETTE_PAYOUT_NUMERATOR_DEFAULT",
    # Payouts: Types
    "DelegateSplit",
    # Payouts: Functions
    "amount_with_fee",
    "delegate_split",
    "fee_amount",
    "flip_payout",
    "roulette_payout",
]
