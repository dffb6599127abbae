"""Unit тесты для InMemoryLedger и CustodyCapability.

Coverage:
- Балансы, mint, регистрация активов
- Capability: одноразовые авторизации, защита от подделки и копирования
- atomic(): откат, вложенные scope
- strict_registration
"""

import copy
import pickle
import threading

import pytest

from vaultplay.core.domain import PRIMARY_ASSET, AssetType
from vaultplay.core.errors import TransferFailed, UnauthorizedTransfer
from vaultplay.ledger import CustodyCapability, InMemoryLedger, Ledger, TransferAuthorization


USDC = AssetType(name="test::usdc::USDC", symbol="USDC", decimals=6)


@pytest.fixture
def ledger():
    """Fixture для ledger с двумя игроками."""
    ledger = InMemoryLedger()
    ledger.mint("alice", PRIMARY_ASSET, 1_000)
    ledger.mint("bob", PRIMARY_ASSET, 500)
    return ledger


@pytest.fixture
def custody(ledger):
    """Fixture для custody-аккаунта с балансом 300."""
    capability = ledger.create_custody_account("coin_flip:house")
    ledger.register(capability.account, PRIMARY_ASSET)
    ledger.transfer("alice", capability.account, PRIMARY_ASSET, 300)
    return capability


# =============================================================================
# BALANCES
# =============================================================================


def test_ledger_satisfies_protocol(ledger):
    assert isinstance(ledger, Ledger)


def test_mint_and_balance(ledger):
    assert ledger.balance("alice", PRIMARY_ASSET) == 1_000
    assert ledger.balance("alice", USDC) == 0
    assert ledger.balance("nobody", PRIMARY_ASSET) == 0


def test_mint_registers_asset(ledger):
    assert ledger.is_registered("alice", PRIMARY_ASSET)
    assert not ledger.is_registered("alice", USDC)


def test_player_transfer(ledger):
    ledger.transfer("alice", "bob", PRIMARY_ASSET, 250)

    assert ledger.balance("alice", PRIMARY_ASSET) == 750
    assert ledger.balance("bob", PRIMARY_ASSET) == 750


def test_transfer_overdraft_fails_without_effect(ledger):
    with pytest.raises(TransferFailed, match="below transfer amount"):
        ledger.transfer("bob", "alice", PRIMARY_ASSET, 501)

    assert ledger.balance("bob", PRIMARY_ASSET) == 500
    assert ledger.balance("alice", PRIMARY_ASSET) == 1_000


def test_transfer_unregistered_source(ledger):
    with pytest.raises(TransferFailed, match="no test::usdc::USDC registered"):
        ledger.transfer("alice", "bob", USDC, 1)


def test_transfer_negative_amount(ledger):
    with pytest.raises(TransferFailed):
        ledger.transfer("alice", "bob", PRIMARY_ASSET, -1)


# =============================================================================
# CUSTODY CAPABILITY
# =============================================================================


def test_custody_account_id(custody):
    assert custody.account == "custody:coin_flip:house"


def test_duplicate_custody_account_rejected(ledger, custody):
    with pytest.raises(TransferFailed, match="already exists"):
        ledger.create_custody_account("coin_flip:house")


def test_custody_transfer_with_authorization(ledger, custody):
    ledger.transfer(
        custody.account, "bob", PRIMARY_ASSET, 100, custody.issue_authorization()
    )

    assert ledger.balance(custody.account, PRIMARY_ASSET) == 200
    assert ledger.balance("bob", PRIMARY_ASSET) == 600


def test_custody_transfer_requires_authorization(ledger, custody):
    with pytest.raises(UnauthorizedTransfer, match="requires authorization"):
        ledger.transfer(custody.account, "bob", PRIMARY_ASSET, 100)

    assert ledger.balance(custody.account, PRIMARY_ASSET) == 300


def test_forged_capability_rejected(ledger, custody):
    """Новый экземпляр с тем же account не принимается"""
    forged = CustodyCapability(custody.account)

    with pytest.raises(UnauthorizedTransfer, match="not issued"):
        ledger.transfer(
            custody.account, "bob", PRIMARY_ASSET, 100, forged.issue_authorization()
        )


def test_authorization_of_other_account_rejected(ledger, custody):
    other = ledger.create_custody_account("coin_flip:other")

    with pytest.raises(UnauthorizedTransfer):
        ledger.transfer(
            custody.account, "bob", PRIMARY_ASSET, 100, other.issue_authorization()
        )


def test_authorization_is_single_use(ledger, custody):
    authorization = custody.issue_authorization()
    ledger.transfer(custody.account, "bob", PRIMARY_ASSET, 10, authorization)

    with pytest.raises(UnauthorizedTransfer, match="already used"):
        ledger.transfer(custody.account, "bob", PRIMARY_ASSET, 10, authorization)

    assert ledger.balance(custody.account, PRIMARY_ASSET) == 290


def test_handcrafted_authorization_nonce_rejected(ledger, custody):
    ledger.transfer(custody.account, "bob", PRIMARY_ASSET, 10, custody.issue_authorization())
    replay = TransferAuthorization(capability=custody, nonce=1)

    with pytest.raises(UnauthorizedTransfer):
        ledger.transfer(custody.account, "bob", PRIMARY_ASSET, 10, replay)


def test_capability_cannot_be_copied(custody):
    with pytest.raises(TypeError):
        copy.copy(custody)
    with pytest.raises(TypeError):
        copy.deepcopy(custody)
    with pytest.raises(TypeError):
        pickle.dumps(custody)


# =============================================================================
# ATOMIC SCOPES
# =============================================================================


def test_atomic_commit(ledger):
    with ledger.atomic():
        ledger.transfer("alice", "bob", PRIMARY_ASSET, 100)
        ledger.transfer("bob", "carol", PRIMARY_ASSET, 50)

    assert ledger.balance("alice", PRIMARY_ASSET) == 900
    assert ledger.balance("bob", PRIMARY_ASSET) == 550
    assert ledger.balance("carol", PRIMARY_ASSET) == 50


def test_atomic_rollback_on_failed_transfer(ledger):
    with pytest.raises(TransferFailed):
        with ledger.atomic():
            ledger.transfer("alice", "bob", PRIMARY_ASSET, 100)
            ledger.transfer("bob", "carol", PRIMARY_ASSET, 10_000)

    assert ledger.balance("alice", PRIMARY_ASSET) == 1_000
    assert ledger.balance("bob", PRIMARY_ASSET) == 500
    assert ledger.balance("carol", PRIMARY_ASSET) == 0


def test_atomic_rollback_on_any_exception(ledger):
    with pytest.raises(RuntimeError):
        with ledger.atomic():
            ledger.transfer("alice", "bob", PRIMARY_ASSET, 100)
            raise RuntimeError("boom")

    assert ledger.balance("alice", PRIMARY_ASSET) == 1_000


def test_nested_inner_rollback_keeps_outer(ledger):
    with ledger.atomic():
        ledger.transfer("alice", "bob", PRIMARY_ASSET, 100)
        with pytest.raises(TransferFailed):
            with ledger.atomic():
                ledger.transfer("alice", "carol", PRIMARY_ASSET, 200)
                ledger.transfer("carol", "bob", PRIMARY_ASSET, 10_000)

    assert ledger.balance("alice", PRIMARY_ASSET) == 900
    assert ledger.balance("bob", PRIMARY_ASSET) == 600
    assert ledger.balance("carol", PRIMARY_ASSET) == 0


def test_nested_outer_rollback_undoes_committed_inner(ledger):
    with pytest.raises(RuntimeError):
        with ledger.atomic():
            with ledger.atomic():
                ledger.transfer("alice", "bob", PRIMARY_ASSET, 100)
            raise RuntimeError("outer failure")

    assert ledger.balance("alice", PRIMARY_ASSET) == 1_000
    assert ledger.balance("bob", PRIMARY_ASSET) == 500


def test_atomic_journal_is_per_thread(ledger):
    """Откат в одном потоке не затрагивает переводы другого"""
    def committed():
        with ledger.atomic():
            ledger.transfer("bob", "dave", PRIMARY_ASSET, 50)

    worker = threading.Thread(target=committed)
    with pytest.raises(RuntimeError):
        with ledger.atomic():
            ledger.transfer("alice", "carol", PRIMARY_ASSET, 100)
            worker.start()
            raise RuntimeError("abort")
    worker.join(timeout=5)

    assert ledger.balance("carol", PRIMARY_ASSET) == 0
    assert ledger.balance("dave", PRIMARY_ASSET) == 50


def test_uncommitted_transfers_invisible_to_other_threads(ledger):
    """Другой поток ждёт конца scope и не может потратить откатываемые средства"""
    started = threading.Event()
    release = threading.Event()
    observed = []

    def failing():
        try:
            with ledger.atomic():
                ledger.transfer("alice", "carol", PRIMARY_ASSET, 100)
                started.set()
                release.wait(timeout=5)
                raise RuntimeError("abort")
        except RuntimeError:
            pass

    def spender():
        amount = ledger.balance("carol", PRIMARY_ASSET)
        observed.append(amount)
        if amount:
            ledger.transfer("carol", "dave", PRIMARY_ASSET, amount)

    worker = threading.Thread(target=failing)
    worker.start()
    started.wait(timeout=5)

    thief = threading.Thread(target=spender)
    thief.start()
    thief.join(timeout=0.2)
    assert thief.is_alive()

    release.set()
    worker.join(timeout=5)
    thief.join(timeout=5)

    assert observed == [0]
    assert ledger.balance("carol", PRIMARY_ASSET) == 0
    assert ledger.balance("dave", PRIMARY_ASSET) == 0
    assert ledger.balance("alice", PRIMARY_ASSET) == 1_000


# =============================================================================
# REGISTRATION
# =============================================================================


def test_auto_registration_by_default(ledger):
    ledger.transfer("alice", "newcomer", PRIMARY_ASSET, 1)
    assert ledger.is_registered("newcomer", PRIMARY_ASSET)


def test_strict_registration_rejects_unregistered_destination():
    ledger = InMemoryLedger(strict_registration=True)
    ledger.mint("alice", PRIMARY_ASSET, 100)

    with pytest.raises(TransferFailed, match="newcomer has no"):
        ledger.transfer("alice", "newcomer", PRIMARY_ASSET, 1)

    ledger.register("newcomer", PRIMARY_ASSET)
    ledger.transfer("alice", "newcomer", PRIMARY_ASSET, 1)
    assert ledger.balance("newcomer", PRIMARY_ASSET) == 1
