"""Vault — реестры vault и delegate vault."""

from .registry import (
    NAMESPACE_COIN_FLIP,
    NAMESPACE_DELEGATE,
    DelegateVaultRegistry,
    VaultRegistry,
)

__all__ = [
    "NAMESPACE_COIN_FLIP",
    "NAMESPACE_DELEGATE",
    "VaultRegistry",
    "DelegateVaultRegistry",
]
