"""
InMemoryLedger — Эталонная in-process реализация Ledger

Используется тестами и симуляциями. Поддерживает:
- обычные аккаунты игроков (доверенная identity, авторизация не нужна)
- custody-аккаунты с capability-проверкой каждого исходящего перевода
- регистрацию активов (strict_registration: перевод на незарегистрированный
  аккаунт -> TransferFailed, иначе авто-регистрация получателя)
- вложенные atomic() scope с журналом и откатом

Журнал ведётся per-thread, а открытый atomic() удерживает lock ledger:
чужие потоки ждут commit/rollback. Откат применяет обратные дельты напрямую.
"""

import logging
import threading
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from vaultplay.core.domain.asset import AssetType
from vaultplay.core.errors import TransferFailed, UnauthorizedTransfer
from vaultplay.core.math.fixed_point import validate_amount
from vaultplay.ledger.capability import CustodyCapability, TransferAuthorization

logger = logging.getLogger(__name__)

CUSTODY_PREFIX = "custody:"


@dataclass(frozen=True)
class _JournalEntry:
    source: str
    destination: str
    asset: AssetType
    amount: int


class InMemoryLedger:
    """In-process Ledger с capability-guarded custody и атомарными scope."""

    def __init__(self, strict_registration: bool = False):
        """
        Args:
            strict_registration: если True, получатель должен заранее
                зарегистрировать актив
        """
        self.strict_registration = strict_registration

        self._lock = threading.RLock()
        self._balances: Dict[str, Dict[AssetType, int]] = defaultdict(dict)
        self._capabilities: Dict[str, CustodyCapability] = {}
        self._last_nonce: Dict[str, int] = {}
        self._local = threading.local()

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    def create_custody_account(self, label: str) -> CustodyCapability:
        account = f"{CUSTODY_PREFIX}{label}"
        with self._lock:
            if account in self._capabilities:
                raise TransferFailed(f"Custody account already exists: {account}")
            capability = CustodyCapability(account)
            self._capabilities[account] = capability
            self._last_nonce[account] = 0
            # Создаём запись аккаунта без активов
            self._balances[account]
        return capability

    def is_custody(self, account: str) -> bool:
        return account in self._capabilities

    def register(self, account: str, asset: AssetType) -> None:
        with self._lock:
            self._balances[account].setdefault(asset, 0)

    def is_registered(self, account: str, asset: AssetType) -> bool:
        with self._lock:
            return asset in self._balances.get(account, {})

    def balance(self, account: str, asset: AssetType) -> int:
        with self._lock:
            return self._balances.get(account, {}).get(asset, 0)

    def mint(self, account: str, asset: AssetType, amount: int) -> None:
        """Зачисление новых средств (funding для тестов и симуляций)."""
        validate_amount(amount, "amount", allow_zero=True)
        with self._lock:
            balances = self._balances[account]
            balances[asset] = balances.get(asset, 0) + amount

    # -------------------------------------------------------------------------
    # Transfers
    # -------------------------------------------------------------------------

    def transfer(
        self,
        source: str,
        destination: str,
        asset: AssetType,
        amount: int,
        authorization: Optional[TransferAuthorization] = None,
    ) -> None:
        try:
            validate_amount(amount, "amount", allow_zero=True)
        except ValueError as e:
            raise TransferFailed(str(e)) from e

        with self._lock:
            if source in self._capabilities:
                self._consume_authorization(source, authorization)

            source_balances = self._balances.get(source, {})
            if asset not in source_balances:
                raise TransferFailed(f"{source} has no {asset.name} registered")

            available = source_balances[asset]
            if available < amount:
                raise TransferFailed(
                    f"{source} balance {available} {asset.name} below transfer amount {amount}"
                )

            destination_balances = self._balances[destination]
            if asset not in destination_balances:
                if self.strict_registration:
                    raise TransferFailed(f"{destination} has no {asset.name} registered")
                destination_balances[asset] = 0

            source_balances[asset] = available - amount
            destination_balances[asset] += amount

            journal = self._journal_stack()
            if journal:
                journal[-1].append(_JournalEntry(source, destination, asset, amount))

    def _consume_authorization(
        self, account: str, authorization: Optional[TransferAuthorization]
    ) -> None:
        if authorization is None:
            raise UnauthorizedTransfer(f"Transfer from {account} requires authorization")

        if authorization.capability is not self._capabilities[account]:
            raise UnauthorizedTransfer(f"Authorization was not issued for {account}")

        if authorization.nonce <= self._last_nonce[account]:
            raise UnauthorizedTransfer(
                f"Authorization nonce {authorization.nonce} for {account} already used"
            )

        self._last_nonce[account] = authorization.nonce

    # -------------------------------------------------------------------------
    # Atomic scopes
    # -------------------------------------------------------------------------

    def _journal_stack(self) -> List[List[_JournalEntry]]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = []
            self._local.stack = stack
        return stack

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """
        Атомарный scope переводов.

        Lock ledger удерживается до commit/rollback: другие потоки не видят
        незафиксированных переводов и не могут их потратить.
        """
        with self._lock:
            stack = self._journal_stack()
            stack.append([])
            try:
                yield
            except BaseException:
                entries = stack.pop()
                self._rollback(entries)
                raise
            else:
                entries = stack.pop()
                if stack:
                    stack[-1].extend(entries)

    def _rollback(self, entries: List[_JournalEntry]) -> None:
        if not entries:
            return

        logger.warning("Rolling back %d transfer(s)", len(entries))
        with self._lock:
            for entry in reversed(entries):
                self._balances[entry.destination][entry.asset] -= entry.amount
                self._balances[entry.source][entry.asset] += entry.amount
