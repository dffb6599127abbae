"""
Errors — Таксономия ошибок settlement-ядра

Все ошибки обнаруживаются синхронно в рамках одного вызова и прерывают его
целиком, без частичных эффектов. Внутренних retry нет: повтор — это новый,
независимый вызов со стороны клиента.

Иерархия:
    SettlementError
    ├── VaultAlreadyExists
    ├── VaultNotFound
    ├── InsufficientFunds
    ├── InvalidAmount
    ├── InvalidWager
    ├── BetExceedsMaximum
    ├── PayoutExceedsMaximum
    ├── ZeroChoices
    ├── TooManyChoices
    ├── InvalidChoice
    ├── TransferFailed        (поднимается Ledger, пропагируется без изменений)
    └── UnauthorizedTransfer  (capability не соответствует custody-аккаунту)
"""


class SettlementError(Exception):
    """Базовый класс всех ошибок vaultplay."""

    pass


# =============================================================================
# VAULT REGISTRY
# =============================================================================


class VaultAlreadyExists(SettlementError):
    """Vault для owner уже существует в данном namespace."""

    def __init__(self, namespace: str, owner: str):
        self.namespace = namespace
        self.owner = owner
        super().__init__(f"Vault already exists: namespace={namespace} owner={owner}")


class VaultNotFound(SettlementError):
    """Vault для owner отсутствует в данном namespace."""

    def __init__(self, namespace: str, owner: str):
        self.namespace = namespace
        self.owner = owner
        super().__init__(f"Vault not found: namespace={namespace} owner={owner}")


# =============================================================================
# FUNDS & AMOUNTS
# =============================================================================


class InsufficientFunds(SettlementError):
    """Баланс аккаунта меньше требуемой суммы."""

    def __init__(self, account: str, asset_name: str, required: int, available: int):
        self.account = account
        self.asset_name = asset_name
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient funds on {account}: required {required} {asset_name}, "
            f"available {available}"
        )


class InvalidAmount(SettlementError):
    """Сумма не является положительным целым числом."""

    pass


class InvalidWager(SettlementError):
    """Поля ставки (player, vault_owner, asset) не проходят валидацию модели."""

    pass


class BetExceedsMaximum(SettlementError):
    """Ставка не строго меньше сконфигурированного максимума."""

    def __init__(self, amount: int, max_bet: int):
        self.amount = amount
        self.max_bet = max_bet
        super().__init__(f"Bet {amount} must be strictly below maximum {max_bet}")


class PayoutExceedsMaximum(SettlementError):
    """Выплата по primary asset превышает сконфигурированный максимум."""

    def __init__(self, payout: int, max_payout: int):
        self.payout = payout
        self.max_payout = max_payout
        super().__init__(f"Payout {payout} exceeds maximum {max_payout}")


# =============================================================================
# ROULETTE CHOICES
# =============================================================================


class ZeroChoices(SettlementError):
    """Пустой набор выбранных номеров (защита от деления на ноль)."""

    def __init__(self):
        super().__init__("At least one number must be chosen")


class TooManyChoices(SettlementError):
    """Выбрано больше номеров, чем допускает конфигурация."""

    def __init__(self, count: int, max_choices: int):
        self.count = count
        self.max_choices = max_choices
        super().__init__(f"Chosen {count} numbers, maximum is {max_choices}")


class InvalidChoice(SettlementError):
    """Номер вне диапазона колеса или повторяется."""

    pass


# =============================================================================
# LEDGER
# =============================================================================


class TransferFailed(SettlementError):
    """Ledger не смог выполнить перевод. Прерывает всю охватывающую операцию."""

    pass


class UnauthorizedTransfer(TransferFailed):
    """Авторизация не выдана capability данного custody-аккаунта."""

    pass
