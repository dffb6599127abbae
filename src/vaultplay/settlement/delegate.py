"""Delegate coin-flip: ставка против delegate vault с разделением комиссии.

Отличия от coin-flip:
- меньшая комиссия (DelegateConfig.fee_bps, по умолчанию 125 bps)
- два независимых перевода до выплаты:
    player -> delegate vault:  floor(amount * (10000 + fee_bps) / 10000)
    player -> fee receiver:    floor(amount * fee_bps / 10000)
- оба перевода обязаны пройти; ошибка любого прерывает ставку целиком
"""

from vaultplay.core.domain.asset import AssetType
from vaultplay.core.domain.events import FlipEventTyped
from vaultplay.core.domain.wager import Outcome, Wager
from vaultplay.core.errors import SettlementError
from vaultplay.core.math.payouts import delegate_split, flip_payout
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
from vaultplay.vault.registry import DelegateVaultRegistry


class DelegateFlipGame(BaseGame):
    """Coin-flip против DelegateVaultRegistry."""

    game_name = "delegate_flip"

    def __init__(
        self,
        registry: DelegateVaultRegistry,
        ledger: Ledger,
        randomness: RandomnessSource,
        sink: EventSink,
        config: SettlementConfig,
    ):
        super().__init__(ledger, randomness, sink, config)
        self.registry = registry

    def play_delegate(
        self, player: str, amount: int, vault_owner: str, asset: AssetType
    ) -> SettlementResult:
        """
        Delegate coin-flip.

        Raises:
            InvalidAmount, InvalidWager, BetExceedsMaximum, VaultNotFound, InsufficientFunds,
            TransferFailed
        """
        try:
            result = self._settle(player, amount, vault_owner, asset)
        except SettlementError as e:
            self._log_abort(player, vault_owner, e)
            raise

        self._log_result(result)
        return result

    def _settle(
        self, player: str, amount: int, vault_owner: str, asset: AssetType
    ) -> SettlementResult:
        delegate = self.config.delegate

        amount = check_amount(amount)
        check_max_bet(amount, self.config.flip.multi_asset_max_bet(asset, self.config.primary_asset))
        wager = build_wager(
            Wager, player=player, asset=asset, amount=amount, vault_owner=vault_owner
        )
        split = delegate_split(wager.amount, delegate.fee_bps)
        payout = flip_payout(wager.amount, self.config.flip.payout_multiplier)

        vault_lock = self.registry._vault_lock(vault_owner)
        vault_account = vault_lock[0]

        with hold_vault_locks([vault_lock]):
            require_balance(self.ledger, player, asset, split.total)
            require_balance(self.ledger, vault_account, asset, payout - split.vault_leg)

            outcome = Outcome.for_flip(self._draw(FLIP_OUTCOMES))
            event = FlipEventTyped(
                player=player,
                is_won=outcome.is_won,
                asset_name=asset.name,
                amount_bet=amount,
            )

            with self.ledger.atomic():
                self.ledger.transfer(player, vault_account, asset, split.vault_leg)
                self.ledger.transfer(player, delegate.fee_receiver, asset, split.receiver_leg)
                if outcome.is_won:
                    self.registry._transfer(payout, vault_owner, player, asset)
                self.sink.emit(event)

        return SettlementResult(
            event=event,
            outcome=outcome,
            vault_owner=vault_owner,
            amount_in=split.total,
            fee=split.total - amount,
            payout=payout if outcome.is_won else 0,
        )
