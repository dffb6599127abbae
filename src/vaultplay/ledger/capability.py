"""
CustodyCapability — Capability custody-аккаунта

Непередаваемый, неподделываемый handle, авторизующий переводы со
custody-аккаунта. Выдаётся Ledger при создании custody-аккаунта и
эксклюзивно принадлежит записи Vault в реестре.

Единственная легальная операция — issue_authorization(): токен на ОДИН
перевод. Ledger принимает токен, только если он выдан тем же объектом
capability, который Ledger создал для аккаунта (сравнение по identity),
и его nonce строго больше последнего использованного.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Capability не копируется (copy/deepcopy/pickle запрещены)
2. Новый экземпляр с тем же account не принимается Ledger (identity check)
3. Каждый TransferAuthorization используется не более одного раза
"""

import itertools
import threading
from dataclasses import dataclass


class CustodyCapability:
    """Capability на переводы со custody-аккаунта."""

    __slots__ = ("_account", "_nonces", "_nonce_lock")

    def __init__(self, account: str):
        self._account = account
        self._nonces = itertools.count(1)
        self._nonce_lock = threading.Lock()

    @property
    def account(self) -> str:
        """Custody-аккаунт, которым управляет capability."""
        return self._account

    def issue_authorization(self) -> "TransferAuthorization":
        """Выпуск одноразовой авторизации на один перевод."""
        with self._nonce_lock:
            nonce = next(self._nonces)
        return TransferAuthorization(capability=self, nonce=nonce)

    def __copy__(self):
        raise TypeError("CustodyCapability cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("CustodyCapability cannot be copied")

    def __reduce_ex__(self, protocol):
        raise TypeError("CustodyCapability cannot be serialized")

    def __repr__(self) -> str:
        return f"CustodyCapability(account={self._account!r})"


@dataclass(frozen=True)
class TransferAuthorization:
    """Одноразовая авторизация перевода со custody-аккаунта."""

    capability: CustodyCapability
    nonce: int

    @property
    def account(self) -> str:
        return self.capability.account
