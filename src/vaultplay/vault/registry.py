"""
VaultRegistry — Реестр vault: owner -> custody capability

Реестр эксклюзивно владеет capability всех своих vault. Capability хранится
в приватном атрибуте записи _Vault и никогда не покидает реестр: наружу
выдаются только идентификатор custody-аккаунта и балансы.

Namespaces:
- coin_flip: основной реестр (VaultRegistry)
- delegate: реестр fee-splitting vault (DelegateVaultRegistry)

Vault одного namespace никогда не резолвится через другой.

Конкурентность:
- мутация карты owner -> Vault защищена lock реестра; create_vault
  сериализуется отдельным lock и не держит lock карты во время вызовов Ledger
- все исходящие переводы vault сериализуются per-vault RLock;
  settlement удерживает его на всё время ставки (reentrant)

Restricted API:
- _transfer() — cross-game payout hook. Вызывается только из
  vaultplay.settlement; не является частью публичного API реестра.
"""

import logging
import threading
from typing import Dict, Optional, Tuple

from vaultplay.core.domain.asset import PRIMARY_ASSET, AssetType
from vaultplay.core.errors import (
    InsufficientFunds,
    InvalidAmount,
    VaultAlreadyExists,
    VaultNotFound,
)
from vaultplay.core.math.fixed_point import validate_amount
from vaultplay.ledger.base import Ledger
from vaultplay.ledger.capability import CustodyCapability

logger = logging.getLogger(__name__)

NAMESPACE_COIN_FLIP = "coin_flip"
NAMESPACE_DELEGATE = "delegate"


class _Vault:
    """Запись vault. Capability доступна только реестру."""

    __slots__ = ("owner", "account", "lock", "_capability")

    def __init__(self, owner: str, capability: CustodyCapability):
        self.owner = owner
        self.account = capability.account
        self.lock = threading.RLock()
        self._capability = capability

    def __repr__(self) -> str:
        return f"_Vault(owner={self.owner!r}, account={self.account!r})"


def _checked_amount(amount: int) -> int:
    try:
        validate_amount(amount, "amount")
    except ValueError as e:
        raise InvalidAmount(str(e)) from e
    return amount


class VaultRegistry:
    """
    Реестр vault одного namespace.

    Операции:
    - create_vault(owner)
    - add_coins(from_account, owner, amount[, asset])
    - withdraw_coins(owner, amount[, asset])
    - vault_exists / vault_balance / custody_account / owners (read-only)
    """

    namespace: str = NAMESPACE_COIN_FLIP

    def __init__(
        self,
        ledger: Ledger,
        primary_asset: AssetType = PRIMARY_ASSET,
        namespace: Optional[str] = None,
    ):
        """
        Args:
            ledger: Ledger, на котором открываются custody-аккаунты
            primary_asset: актив, регистрируемый в каждом новом vault
            namespace: переопределение namespace (по умолчанию — атрибут класса)
        """
        self.ledger = ledger
        self.primary_asset = primary_asset
        if namespace is not None:
            self.namespace = namespace

        self._vaults: Dict[str, _Vault] = {}
        self._lock = threading.Lock()
        self._create_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def create_vault(self, owner: str) -> None:
        """
        Создание vault для owner.

        Не идемпотентно: повторный вызов всегда падает.

        Raises:
            VaultAlreadyExists: Если vault для owner уже есть в namespace
        """
        # self._lock не удерживается во время вызовов Ledger
        with self._create_lock:
            if self.vault_exists(owner):
                raise VaultAlreadyExists(self.namespace, owner)

            capability = self.ledger.create_custody_account(f"{self.namespace}:{owner}")
            self.ledger.register(capability.account, self.primary_asset)
            with self._lock:
                self._vaults[owner] = _Vault(owner, capability)

        logger.info("Vault created: namespace=%s owner=%s account=%s",
                    self.namespace, owner, capability.account)

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    def vault_exists(self, owner: str) -> bool:
        with self._lock:
            return owner in self._vaults

    def owners(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._vaults)

    def custody_account(self, owner: str) -> str:
        """Идентификатор custody-аккаунта (без capability)."""
        return self._resolve(owner).account

    def vault_balance(self, owner: str, asset: Optional[AssetType] = None) -> int:
        vault = self._resolve(owner)
        return self.ledger.balance(vault.account, asset or self.primary_asset)

    # -------------------------------------------------------------------------
    # Funds
    # -------------------------------------------------------------------------

    def add_coins(
        self,
        from_account: str,
        owner: str,
        amount: int,
        asset: Optional[AssetType] = None,
    ) -> None:
        """
        Пополнение vault с аккаунта from_account.

        Состояние реестра не меняется. Новый актив регистрируется в
        custody-аккаунте при первом пополнении.

        Raises:
            VaultNotFound: Если vault для owner нет
            InsufficientFunds: Если баланс from_account < amount
        """
        asset = asset or self.primary_asset
        amount = _checked_amount(amount)
        vault = self._resolve(owner)

        available = self.ledger.balance(from_account, asset)
        if available < amount:
            raise InsufficientFunds(from_account, asset.name, amount, available)

        with vault.lock:
            self.ledger.register(vault.account, asset)
            with self.ledger.atomic():
                self.ledger.transfer(from_account, vault.account, asset, amount)

        logger.info("Vault deposit: namespace=%s owner=%s from=%s amount=%d %s",
                    self.namespace, owner, from_account, amount, asset.symbol)

    def withdraw_coins(
        self,
        owner: str,
        amount: int,
        asset: Optional[AssetType] = None,
    ) -> None:
        """
        Вывод средств из vault на аккаунт owner.

        Вызывающий — сам owner: только его identity резолвит capability
        данного vault.

        Raises:
            VaultNotFound: Если vault для owner нет
            InsufficientFunds: Если custody-баланс < amount (балансы не меняются)
        """
        asset = asset or self.primary_asset
        amount = _checked_amount(amount)
        vault = self._resolve(owner)

        with vault.lock:
            self._pay_out(vault, owner, asset, amount)

        logger.info("Vault withdrawal: namespace=%s owner=%s amount=%d %s",
                    self.namespace, owner, amount, asset.symbol)

    # -------------------------------------------------------------------------
    # Restricted: settlement only
    # -------------------------------------------------------------------------

    def _transfer(
        self,
        amount: int,
        vault_owner: str,
        recipient: str,
        asset: Optional[AssetType] = None,
    ) -> None:
        """
        Cross-game payout hook: перевод из vault vault_owner на recipient.

        Только для vaultplay.settlement.

        Raises:
            VaultNotFound: Если vault для vault_owner нет
            InsufficientFunds: Если custody-баланс < amount
        """
        asset = asset or self.primary_asset
        vault = self._resolve(vault_owner)

        with vault.lock:
            self._pay_out(vault, recipient, asset, amount)

        logger.debug("Vault payout: namespace=%s owner=%s recipient=%s amount=%d",
                     self.namespace, vault_owner, recipient, amount)

    def _vault_lock(self, owner: str) -> Tuple[str, threading.RLock]:
        """(custody account, lock) для упорядоченного захвата в settlement."""
        vault = self._resolve(owner)
        return vault.account, vault.lock

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _resolve(self, owner: str) -> _Vault:
        with self._lock:
            vault = self._vaults.get(owner)
        if vault is None:
            raise VaultNotFound(self.namespace, owner)
        return vault

    def _pay_out(self, vault: _Vault, recipient: str, asset: AssetType, amount: int) -> None:
        available = self.ledger.balance(vault.account, asset)
        if available < amount:
            raise InsufficientFunds(vault.account, asset.name, amount, available)

        authorization = vault._capability.issue_authorization()
        self.ledger.transfer(vault.account, recipient, asset, amount, authorization)


class DelegateVaultRegistry(VaultRegistry):
    """
    Реестр delegate vault.

    Структурно идентичен VaultRegistry, но отдельный namespace: используется
    с фиксированным fee receiver и меньшей комиссией.
    """

    namespace: str = NAMESPACE_DELEGATE

    def create_delegate_vault(self, owner: str) -> None:
        """Создание delegate vault (см. create_vault)."""
        self.create_vault(owner)
