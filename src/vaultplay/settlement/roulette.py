"""Рулетка: ставка на набор номеров с выплатой из vault другой игры.

play_roulette(player, amount, chosen_numbers, vault_owner, asset)

Алгоритм:
    payout = floor(amount * 36 / n)            -- до розыгрыша
    primary asset: payout <= max_payout
    outcome ∈ [0, 37)
    player -> protocol vault: amount           -- без комиссии
    выигрыш: payout_registry._transfer(payout, vault_owner, player)
             выплата из vault, указанного вызывающим, а НЕ из protocol vault
"""

from typing import Iterable

from vaultplay.core.domain.asset import AssetType
from vaultplay.core.domain.events import RouletteEvent
from vaultplay.core.domain.wager import Outcome, RouletteWager
from vaultplay.core.errors import SettlementError
from vaultplay.core.math.payouts import roulette_payout
from vaultplay.events.sink import EventSink
from vaultplay.ledger.base import Ledger
from vaultplay.randomness.sources import RandomnessSource
from vaultplay.settlement.base import BaseGame, SettlementResult, hold_vault_locks
from vaultplay.settlement.config import ROULETTE_SLOTS, SettlementConfig
from vaultplay.settlement.validators import (
    build_wager,
    check_amount,
    check_choices,
    check_max_payout,
    require_balance,
)
from vaultplay.vault.registry import VaultRegistry

NAMESPACE_ROULETTE = "roulette"


class RouletteGame(BaseGame):
    """
    Рулетка.

    house_registry — namespace, где лежит protocol vault (принимает ставки);
    payout_registry — namespace coin-flip, из vault которого платится выигрыш
    через cross-game hook.
    """

    game_name = "roulette"

    def __init__(
        self,
        house_registry: VaultRegistry,
        payout_registry: VaultRegistry,
        ledger: Ledger,
        randomness: RandomnessSource,
        sink: EventSink,
        config: SettlementConfig,
    ):
        super().__init__(ledger, randomness, sink, config)
        self.house_registry = house_registry
        self.payout_registry = payout_registry

    def play_roulette(
        self,
        player: str,
        amount: int,
        chosen_numbers: Iterable[int],
        vault_owner: str,
        asset: AssetType,
    ) -> SettlementResult:
        """
        Рулетка.

        Raises:
            InvalidAmount, ZeroChoices, TooManyChoices, InvalidChoice, InvalidWager,
            PayoutExceedsMaximum, VaultNotFound, InsufficientFunds, TransferFailed
        """
        try:
            result = self._settle(player, amount, chosen_numbers, vault_owner, asset)
        except SettlementError as e:
            self._log_abort(player, vault_owner, e)
            raise

        self._log_result(result)
        return result

    def _settle(
        self,
        player: str,
        amount: int,
        chosen_numbers: Iterable[int],
        vault_owner: str,
        asset: AssetType,
    ) -> SettlementResult:
        roulette = self.config.roulette

        # 1. Обязательства из входа (payout фиксируется до розыгрыша)
        amount = check_amount(amount)
        choices = check_choices(chosen_numbers, roulette.max_choices)
        wager = build_wager(
            RouletteWager,
            player=player,
            asset=asset,
            amount=amount,
            vault_owner=vault_owner,
            chosen_numbers=choices,
        )
        payout = roulette_payout(wager.amount, len(choices), roulette.payout_numerator)
        if asset == self.config.primary_asset:
            check_max_payout(payout, roulette.max_payout)

        # 2. Protocol vault принимает ставку, vault_owner платит выигрыш
        house_lock = self.house_registry._vault_lock(roulette.protocol_vault_owner)
        payout_lock = self.payout_registry._vault_lock(vault_owner)
        house_account = house_lock[0]
        payout_account = payout_lock[0]

        with hold_vault_locks([house_lock, payout_lock]):
            # 3. Балансы
            incoming = amount if house_account == payout_account else 0
            require_balance(self.ledger, player, asset, amount)
            require_balance(self.ledger, payout_account, asset, payout - incoming)

            # 4. Outcome
            outcome = Outcome.for_roulette(self._draw(ROULETTE_SLOTS), choices)
            event = RouletteEvent(
                player=player,
                is_won=outcome.is_won,
                asset_name=asset.name,
                amount_bet=amount,
                chosen_numbers=choices,
                drawn_number=outcome.drawn,
            )

            # 5. Переводы + событие
            with self.ledger.atomic():
                self.ledger.transfer(player, house_account, asset, amount)
                if outcome.is_won:
                    self.payout_registry._transfer(payout, vault_owner, player, asset)
                self.sink.emit(event)

        return SettlementResult(
            event=event,
            outcome=outcome,
            vault_owner=vault_owner,
            amount_in=amount,
            fee=0,
            payout=payout if outcome.is_won else 0,
        )
