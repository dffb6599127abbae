"""SettlementEngine — единая точка входа для всех игр.

Связывает общие коллабораторы (Ledger, RandomnessSource, EventSink) с тремя
реестрами и играми:

    registry           (coin_flip)  <- play, play_multi_asset, выплаты рулетки
    delegate_registry  (delegate)   <- play_delegate
    house_registry     (roulette)   <- ставки рулетки (protocol vault)
"""

from typing import Iterable, Optional

from vaultplay.core.domain.asset import AssetType
from vaultplay.events.sink import EventSink, InMemoryEventSink
from vaultplay.ledger.base import Ledger
from vaultplay.randomness.sources import RandomnessSource, SecureRandomnessSource
from vaultplay.settlement.base import SettlementResult
from vaultplay.settlement.coin_flip import CoinFlipGame
from vaultplay.settlement.config import SettlementConfig
from vaultplay.settlement.delegate import DelegateFlipGame
from vaultplay.settlement.roulette import NAMESPACE_ROULETTE, RouletteGame
from vaultplay.vault.registry import DelegateVaultRegistry, VaultRegistry


class SettlementEngine:
    """Фасад settlement: реестры vault и все варианты ставок."""

    def __init__(
        self,
        ledger: Ledger,
        randomness: Optional[RandomnessSource] = None,
        sink: Optional[EventSink] = None,
        config: Optional[SettlementConfig] = None,
    ):
        """
        Args:
            ledger: внешний Ledger
            randomness: источник случайности (default: SecureRandomnessSource)
            sink: лог событий (default: InMemoryEventSink)
            config: конфигурация (default: SettlementConfig())
        """
        self.ledger = ledger
        self.randomness = randomness or SecureRandomnessSource()
        self.sink = sink if sink is not None else InMemoryEventSink()
        self.config = config or SettlementConfig()

        primary = self.config.primary_asset
        self.registry = VaultRegistry(ledger, primary)
        self.delegate_registry = DelegateVaultRegistry(ledger, primary)
        self.house_registry = VaultRegistry(ledger, primary, namespace=NAMESPACE_ROULETTE)

        shared = (self.ledger, self.randomness, self.sink, self.config)
        self._coin_flip = CoinFlipGame(self.registry, *shared)
        self._delegate = DelegateFlipGame(self.delegate_registry, *shared)
        self._roulette = RouletteGame(self.house_registry, self.registry, *shared)

    # -------------------------------------------------------------------------
    # Vaults
    # -------------------------------------------------------------------------

    def create_vault(self, owner: str) -> None:
        self.registry.create_vault(owner)

    def create_delegate_vault(self, owner: str) -> None:
        self.delegate_registry.create_delegate_vault(owner)

    def create_protocol_vault(self) -> None:
        """Protocol vault рулетки (принимает ставки)."""
        self.house_registry.create_vault(self.config.roulette.protocol_vault_owner)

    def add_coins(
        self, from_account: str, owner: str, amount: int, asset: Optional[AssetType] = None
    ) -> None:
        self.registry.add_coins(from_account, owner, amount, asset)

    def withdraw_coins(self, owner: str, amount: int, asset: Optional[AssetType] = None) -> None:
        self.registry.withdraw_coins(owner, amount, asset)

    def add_delegate_coins(
        self, from_account: str, owner: str, amount: int, asset: Optional[AssetType] = None
    ) -> None:
        self.delegate_registry.add_coins(from_account, owner, amount, asset)

    def withdraw_delegate_coins(
        self, owner: str, amount: int, asset: Optional[AssetType] = None
    ) -> None:
        self.delegate_registry.withdraw_coins(owner, amount, asset)

    # -------------------------------------------------------------------------
    # Games
    # -------------------------------------------------------------------------

    def play(self, player: str, amount: int, vault_owner: str) -> SettlementResult:
        return self._coin_flip.play(player, amount, vault_owner)

    def play_multi_asset(
        self, player: str, amount: int, vault_owner: str, asset: AssetType
    ) -> SettlementResult:
        return self._coin_flip.play_multi_asset(player, amount, vault_owner, asset)

    def play_delegate(
        self, player: str, amount: int, vault_owner: str, asset: AssetType
    ) -> SettlementResult:
        return self._delegate.play_delegate(player, amount, vault_owner, asset)

    def play_roulette(
        self,
        player: str,
        amount: int,
        chosen_numbers: Iterable[int],
        vault_owner: str,
        asset: AssetType,
    ) -> SettlementResult:
        return self._roulette.play_roulette(player, amount, chosen_numbers, vault_owner, asset)
