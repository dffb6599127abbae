"""Coin-flip: ставка против vault основного namespace.

play(player, amount, vault_owner)
    primary asset, max_bet применяется всегда -> FlipEvent
play_multi_asset(player, amount, vault_owner, asset)
    произвольный актив, max_bet по per-asset политике -> FlipEventTyped

Алгоритм:
    amount_with_fee = floor(amount * (10000 + fee_bps) / 10000)
    outcome ∈ [0, 2), выигрыш при outcome == 1
    player -> vault: amount_with_fee (ставка и комиссия одним переводом,
                     комиссия остаётся в vault как маржа)
    выигрыш: vault -> player: amount * payout_multiplier
"""

from typing import Optional

from vaultplay.core.domain.asset import AssetType
from vaultplay.core.domain.events import FlipEvent, FlipEventTyped
from vaultplay.core.domain.wager import Outcome, Wager
from vaultplay.core.errors import SettlementError
from vaultplay.core.math.payouts import amount_with_fee, flip_payout
from vaultplay.events.sink import EventSink
from vaultplay.ledger.base import Ledger
from vaultplay.randomness.sources import RandomnessSource
from vaultplay.settlement.base import BaseGame, SettlementResult, hold_vault_locks
from vaultplay.settlement.config import FLIP_OUTCOMES, SettlementConfig
from vaultplay.settlement.validators import (
    build_wager,
    check_amount,
    check_max_bet,
    require_balance,
)
from vaultplay.vault.registry import VaultRegistry


class CoinFlipGame(BaseGame):
    """Coin-flip против VaultRegistry."""

    game_name = "coin_flip"

    def __init__(
        self,
        registry: VaultRegistry,
        ledger: Ledger,
        randomness: RandomnessSource,
        sink: EventSink,
        config: SettlementConfig,
    ):
        super().__init__(ledger, randomness, sink, config)
        self.registry = registry

    def play(self, player: str, amount: int, vault_owner: str) -> SettlementResult:
        """
        Coin-flip по primary asset.

        Raises:
            InvalidAmount, InvalidWager, BetExceedsMaximum, VaultNotFound, InsufficientFunds,
            TransferFailed
        """
        return self._flip(
            player,
            amount,
            vault_owner,
            asset=self.config.primary_asset,
            max_bet=self.config.flip.max_bet,
            typed_event=False,
        )

    def play_multi_asset(
        self, player: str, amount: int, vault_owner: str, asset: AssetType
    ) -> SettlementResult:
        """
        Coin-flip по произвольному активу.

        Max-bet определяется FlipConfig.multi_asset_max_bet().
        """
        max_bet = self.config.flip.multi_asset_max_bet(asset, self.config.primary_asset)
        return self._flip(player, amount, vault_owner, asset, max_bet, typed_event=True)

    def _flip(
        self,
        player: str,
        amount: int,
        vault_owner: str,
        asset: AssetType,
        max_bet: Optional[int],
        typed_event: bool,
    ) -> SettlementResult:
        try:
            result = self._settle(player, amount, vault_owner, asset, max_bet, typed_event)
        except SettlementError as e:
            self._log_abort(player, vault_owner, e)
            raise

        self._log_result(result)
        return result

    def _settle(
        self,
        player: str,
        amount: int,
        vault_owner: str,
        asset: AssetType,
        max_bet: Optional[int],
        typed_event: bool,
    ) -> SettlementResult:
        flip = self.config.flip

        # 1. Обязательства из входа
        amount = check_amount(amount)
        check_max_bet(amount, max_bet)
        wager = build_wager(
            Wager, player=player, asset=asset, amount=amount, vault_owner=vault_owner
        )
        stake = amount_with_fee(wager.amount, flip.fee_bps)
        payout = flip_payout(wager.amount, flip.payout_multiplier)

        # 2. Vault
        vault_lock = self.registry._vault_lock(vault_owner)
        vault_account = vault_lock[0]

        with hold_vault_locks([vault_lock]):
            # 3. Балансы: игрок платит stake, vault покрывает выигрыш с учётом stake
            require_balance(self.ledger, player, asset, stake)
            require_balance(self.ledger, vault_account, asset, payout - stake)

            # 4. Outcome
            outcome = Outcome.for_flip(self._draw(FLIP_OUTCOMES))
            if typed_event:
                event = FlipEventTyped(
                    player=player,
                    is_won=outcome.is_won,
                    asset_name=asset.name,
                    amount_bet=amount,
                )
            else:
                event = FlipEvent(player=player, is_won=outcome.is_won, amount_bet=amount)

            # 5. Переводы + событие
            with self.ledger.atomic():
                self.ledger.transfer(player, vault_account, asset, stake)
                if outcome.is_won:
                    self.registry._transfer(payout, vault_owner, player, asset)
                self.sink.emit(event)

        return SettlementResult(
            event=event,
            outcome=outcome,
            vault_owner=vault_owner,
            amount_in=stake,
            fee=stake - amount,
            payout=payout if outcome.is_won else 0,
        )
