"""Конфигурация settlement: coin-flip, delegate coin-flip, рулетка.

Все конфиги — frozen dataclass с дефолтами; __post_init__ отклоняет
бессмысленные значения.

Max-bet политика multi-asset путей (play_multi_asset, play_delegate):
- max_bet_by_asset: явные лимиты по имени актива
- enforce_primary_max_bet: применять ли max_bet к primary asset на этих путях
Активы без записи в max_bet_by_asset не ограничиваются.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Mapping, Optional

from vaultplay.core.domain.asset import PRIMARY_ASSET, AssetType
from vaultplay.core.math.fixed_point import validate_bps
from vaultplay.core.math.payouts import (
    DELEGATE_FEE_BPS_DEFAULT,
    FLIP_FEE_BPS_DEFAULT,
    FLIP_PAYOUT_MULTIPLIER_DEFAULT,
    ROULETTE_PAYOUT_NUMERATOR_DEFAULT,
)

# =============================================================================
# CONSTANTS
# =============================================================================

# Coin-flip: outcome из [0, 2), выигрыш при FLIP_WINNING_OUTCOME (core.domain.wager)
FLIP_OUTCOMES: Final[int] = 2

# Рулетка: колесо из 37 номеров (0..36)
ROULETTE_SLOTS: Final[int] = 37
ROULETTE_MAX_CHOICES_DEFAULT: Final[int] = 37

# Лимиты primary asset (минимальные единицы, 8 знаков)
MAX_BET_DEFAULT: Final[int] = 1_000 * 10**8
MAX_PAYOUT_DEFAULT: Final[int] = 36_000 * 10**8

DEFAULT_FEE_RECEIVER: Final[str] = "vaultplay-fee-receiver"
DEFAULT_PROTOCOL_VAULT_OWNER: Final[str] = "vaultplay-house"


@dataclass(frozen=True)
class FlipConfig:
    """Конфигурация coin-flip (play, play_multi_asset)."""

    payout_multiplier: int = FLIP_PAYOUT_MULTIPLIER_DEFAULT
    fee_bps: int = FLIP_FEE_BPS_DEFAULT
    max_bet: int = MAX_BET_DEFAULT  # ставка должна быть строго меньше

    # Политика multi-asset пути
    max_bet_by_asset: Mapping[str, int] = field(default_factory=dict)
    enforce_primary_max_bet: bool = False

    def __post_init__(self):
        if self.payout_multiplier < 1:
            raise ValueError(f"payout_multiplier must be >= 1, got {self.payout_multiplier}")
        validate_bps(self.fee_bps, "fee_bps")
        if self.max_bet <= 0:
            raise ValueError(f"max_bet must be positive, got {self.max_bet}")
        for name, limit in self.max_bet_by_asset.items():
            if limit <= 0:
                raise ValueError(f"max_bet for {name} must be positive, got {limit}")
        # Read-only копия: конфиг не должен меняться после создания
        object.__setattr__(self, "max_bet_by_asset", MappingProxyType(dict(self.max_bet_by_asset)))

    def multi_asset_max_bet(self, asset: AssetType, primary_asset: AssetType) -> Optional[int]:
        """Лимит ставки для multi-asset пути; None — без ограничения."""
        if asset.name in self.max_bet_by_asset:
            return self.max_bet_by_asset[asset.name]
        if self.enforce_primary_max_bet and asset == primary_asset:
            return self.max_bet
        return None


@dataclass(frozen=True)
class DelegateConfig:
    """Конфигурация delegate coin-flip (play_delegate)."""

    fee_bps: int = DELEGATE_FEE_BPS_DEFAULT
    fee_receiver: str = DEFAULT_FEE_RECEIVER

    def __post_init__(self):
        validate_bps(self.fee_bps, "fee_bps")
        if not self.fee_receiver:
            raise ValueError("fee_receiver must be set")


@dataclass(frozen=True)
class RouletteConfig:
    """Конфигурация рулетки (play_roulette)."""

    max_choices: int = ROULETTE_MAX_CHOICES_DEFAULT
    payout_numerator: int = ROULETTE_PAYOUT_NUMERATOR_DEFAULT
    max_payout: int = MAX_PAYOUT_DEFAULT  # только для primary asset, включительно
    protocol_vault_owner: str = DEFAULT_PROTOCOL_VAULT_OWNER

    def __post_init__(self):
        if not 1 <= self.max_choices <= ROULETTE_SLOTS:
            raise ValueError(
                f"max_choices must be in [1, {ROULETTE_SLOTS}], got {self.max_choices}"
            )
        if self.payout_numerator < 1:
            raise ValueError(f"payout_numerator must be >= 1, got {self.payout_numerator}")
        if self.max_payout <= 0:
            raise ValueError(f"max_payout must be positive, got {self.max_payout}")
        if not self.protocol_vault_owner:
            raise ValueError("protocol_vault_owner must be set")


@dataclass(frozen=True)
class SettlementConfig:
    """Агрегированная конфигурация settlement."""

    primary_asset: AssetType = PRIMARY_ASSET
    flip: FlipConfig = field(default_factory=FlipConfig)
    delegate: DelegateConfig = field(default_factory=DelegateConfig)
    roulette: RouletteConfig = field(default_factory=RouletteConfig)
