"""
Ledger — Интерфейс внешнего ledger

Ledger перемещает типизированную сумму с одного handle на другой. Перевод
либо полностью выполняется, либо поднимает TransferFailed; любой exception
внутри atomic() откатывает все переводы этого scope.

Реализация Ledger (исполнение fungible-переводов) — внешний коллаборатор;
vaultplay.ledger.memory.InMemoryLedger — эталонная in-process реализация.
"""

from typing import ContextManager, Optional, Protocol, runtime_checkable

from vaultplay.core.domain.asset import AssetType
from vaultplay.ledger.capability import CustodyCapability, TransferAuthorization


@runtime_checkable
class Ledger(Protocol):
    """Контракт Ledger, на который опирается settlement-ядро."""

    def create_custody_account(self, label: str) -> CustodyCapability:
        """Создание custody-аккаунта и единственной capability на него."""
        ...

    def register(self, account: str, asset: AssetType) -> None:
        """Регистрация актива на аккаунте (идемпотентно)."""
        ...

    def is_registered(self, account: str, asset: AssetType) -> bool:
        ...

    def balance(self, account: str, asset: AssetType) -> int:
        """Баланс аккаунта; 0 для незарегистрированного актива."""
        ...

    def transfer(
        self,
        source: str,
        destination: str,
        asset: AssetType,
        amount: int,
        authorization: Optional[TransferAuthorization] = None,
    ) -> None:
        """
        Перевод amount с source на destination.

        Переводы со custody-аккаунтов требуют authorization.

        Raises:
            TransferFailed: При любой невозможности выполнить перевод
        """
        ...

    def atomic(self) -> ContextManager[None]:
        """Scope «всё или ничего»: exception откатывает все переводы scope."""
        ...
