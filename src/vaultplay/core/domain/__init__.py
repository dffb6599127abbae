"""
Domain models and value objects.

Contains fundamental domain entities like AssetType, Wager, Outcome and
settlement events.
"""

from vaultplay.core.domain.asset import PRIMARY_ASSET, AssetType
from vaultplay.core.domain.events import (
    FlipEvent,
    FlipEventTyped,
    RouletteEvent,
    SettlementEvent,
)
from vaultplay.core.domain.wager import FLIP_WINNING_OUTCOME, Outcome, RouletteWager, Wager

__all__ = [
    # Asset
    "AssetType",
    "PRIMARY_ASSET",
    # Wager
    "Wager",
    "RouletteWager",
    "Outcome",
    "FLIP_WINNING_OUTCOME",
    # Events
    "FlipEvent",
    "FlipEventTyped",
    "RouletteEvent",
    "SettlementEvent",
]
