"""Unit тесты для VaultRegistry и DelegateVaultRegistry.

Coverage:
- create_vault: один vault на owner, повторный вызов падает без эффекта
- add_coins / withdraw_coins: ошибки и отсутствие частичных эффектов
- Изоляция namespaces
- Capability не выдаётся наружу
- Restricted cross-game payout hook
"""

import pytest

from vaultplay.core.domain import PRIMARY_ASSET, AssetType
from vaultplay.core.errors import (
    InsufficientFunds,
    InvalidAmount,
    VaultAlreadyExists,
    VaultNotFound,
)
from vaultplay.ledger import CustodyCapability, InMemoryLedger
from vaultplay.vault import (
    NAMESPACE_COIN_FLIP,
    NAMESPACE_DELEGATE,
    DelegateVaultRegistry,
    VaultRegistry,
)


USDC = AssetType(name="test::usdc::USDC", symbol="USDC", decimals=6)


@pytest.fixture
def ledger():
    ledger = InMemoryLedger()
    ledger.mint("owner", PRIMARY_ASSET, 5_000)
    ledger.mint("owner", USDC, 1_000)
    return ledger


@pytest.fixture
def registry(ledger):
    """Fixture для реестра с vault у 'owner' (1000 на custody)."""
    registry = VaultRegistry(ledger)
    registry.create_vault("owner")
    registry.add_coins("owner", "owner", 1_000)
    return registry


# =============================================================================
# CREATE VAULT
# =============================================================================


def test_create_vault_registers_primary_asset(ledger):
    registry = VaultRegistry(ledger)
    registry.create_vault("alice")

    account = registry.custody_account("alice")
    assert account == "custody:coin_flip:alice"
    assert ledger.is_registered(account, PRIMARY_ASSET)
    assert registry.vault_balance("alice") == 0


def test_create_vault_twice_fails_without_state_change(ledger, registry):
    with pytest.raises(VaultAlreadyExists) as exc_info:
        registry.create_vault("owner")

    assert exc_info.value.namespace == NAMESPACE_COIN_FLIP
    assert registry.owners() == ("owner",)
    assert registry.vault_balance("owner") == 1_000


def test_vault_exists(registry):
    assert registry.vault_exists("owner")
    assert not registry.vault_exists("stranger")


def test_unknown_vault(registry):
    with pytest.raises(VaultNotFound):
        registry.custody_account("stranger")
    with pytest.raises(VaultNotFound):
        registry.vault_balance("stranger")


# =============================================================================
# ADD COINS
# =============================================================================


def test_add_coins_moves_funds(ledger, registry):
    registry.add_coins("owner", "owner", 500)

    assert registry.vault_balance("owner") == 1_500
    assert ledger.balance("owner", PRIMARY_ASSET) == 3_500


def test_add_coins_from_third_party(ledger, registry):
    ledger.mint("sponsor", PRIMARY_ASSET, 200)
    registry.add_coins("sponsor", "owner", 200)

    assert registry.vault_balance("owner") == 1_200
    assert ledger.balance("sponsor", PRIMARY_ASSET) == 0


def test_add_coins_insufficient_funds(ledger, registry):
    with pytest.raises(InsufficientFunds) as exc_info:
        registry.add_coins("owner", "owner", 4_001)

    assert exc_info.value.required == 4_001
    assert exc_info.value.available == 4_000
    assert registry.vault_balance("owner") == 1_000


def test_add_coins_unknown_vault(registry):
    with pytest.raises(VaultNotFound):
        registry.add_coins("owner", "stranger", 10)


@pytest.mark.parametrize("amount", [0, -10])
def test_add_coins_invalid_amount(registry, amount):
    with pytest.raises(InvalidAmount):
        registry.add_coins("owner", "owner", amount)


def test_add_coins_new_asset_registers_it(ledger, registry):
    registry.add_coins("owner", "owner", 300, USDC)

    assert ledger.is_registered(registry.custody_account("owner"), USDC)
    assert registry.vault_balance("owner", USDC) == 300
    assert registry.vault_balance("owner") == 1_000


# =============================================================================
# WITHDRAW COINS
# =============================================================================


def test_withdraw_coins(ledger, registry):
    registry.withdraw_coins("owner", 400)

    assert registry.vault_balance("owner") == 600
    assert ledger.balance("owner", PRIMARY_ASSET) == 4_400


def test_withdraw_typed(ledger, registry):
    registry.add_coins("owner", "owner", 300, USDC)
    registry.withdraw_coins("owner", 100, USDC)

    assert registry.vault_balance("owner", USDC) == 200
    assert ledger.balance("owner", USDC) == 800


def test_withdraw_more_than_custody_leaves_balances_unchanged(ledger, registry):
    with pytest.raises(InsufficientFunds):
        registry.withdraw_coins("owner", 1_001)

    assert registry.vault_balance("owner") == 1_000
    assert ledger.balance("owner", PRIMARY_ASSET) == 4_000


def test_withdraw_unknown_vault(registry):
    with pytest.raises(VaultNotFound):
        registry.withdraw_coins("stranger", 1)


# =============================================================================
# NAMESPACES
# =============================================================================


def test_delegate_namespace_is_separate(ledger, registry):
    delegate = DelegateVaultRegistry(ledger)

    assert delegate.namespace == NAMESPACE_DELEGATE
    assert not delegate.vault_exists("owner")
    with pytest.raises(VaultNotFound) as exc_info:
        delegate.withdraw_coins("owner", 1)
    assert exc_info.value.namespace == NAMESPACE_DELEGATE


def test_same_owner_in_both_namespaces(ledger, registry):
    delegate = DelegateVaultRegistry(ledger)
    delegate.create_delegate_vault("owner")
    delegate.add_coins("owner", "owner", 250)

    assert delegate.custody_account("owner") == "custody:delegate:owner"
    assert delegate.vault_balance("owner") == 250
    assert registry.vault_balance("owner") == 1_000


def test_custom_namespace(ledger):
    roulette = VaultRegistry(ledger, namespace="roulette")
    roulette.create_vault("house")

    assert roulette.custody_account("house") == "custody:roulette:house"


# =============================================================================
# CAPABILITY ENCAPSULATION & RESTRICTED HOOK
# =============================================================================


def test_capability_not_exposed(registry):
    public_values = [
        getattr(registry, name) for name in dir(registry) if not name.startswith("_")
    ]
    assert not any(isinstance(value, CustodyCapability) for value in public_values)

    vault = registry._resolve("owner")
    assert "capability" not in [n for n in dir(vault) if not n.startswith("_")]


def test_transfer_hook_pays_recipient(ledger, registry):
    registry._transfer(300, "owner", "winner")

    assert registry.vault_balance("owner") == 700
    assert ledger.balance("winner", PRIMARY_ASSET) == 300


def test_transfer_hook_checks_custody_balance(ledger, registry):
    with pytest.raises(InsufficientFunds):
        registry._transfer(1_001, "owner", "winner")

    assert ledger.balance("winner", PRIMARY_ASSET) == 0


def test_transfer_hook_unknown_vault(registry):
    with pytest.raises(VaultNotFound):
        registry._transfer(1, "stranger", "winner")
