"""Ledger — интерфейс внешнего ledger, custody capability и in-memory реализация."""

from .base import Ledger
from .capability import CustodyCapability, TransferAuthorization
from .memory import InMemoryLedger

__all__ = [
    "Ledger",
    "CustodyCapability",
    "TransferAuthorization",
    "InMemoryLedger",
]
