"""Deterministic, headless battle rules for the chain-combo card minigame.

IMPORTANT: This package must never import presentation code.
"""

from .actions import DeselectCardAction, ExecuteAttackAction, SelectCardAction
from .battle import BattleInitError, StepResult, new_battle, replay, step
from .combo import ComboResult, compute_damage, deselect, try_select
from .deck import DeckService
from .events import BattleListener, FanOutListener, NullListener
from .state import BattleConfig, BattleState, CardInstance, EnemyState, PlayerState
from .types import Attribute, CardDatabase, CardDefinition, EnemyDatabase, EnemyDefinition, Rarity

__all__ = [
    "Attribute",
    "BattleConfig",
    "BattleInitError",
    "BattleListener",
    "BattleState",
    "CardDatabase",
    "CardDefinition",
    "CardInstance",
    "ComboResult",
    "DeckService",
    "DeselectCardAction",
    "EnemyDatabase",
    "EnemyDefinition",
    "EnemyState",
    "ExecuteAttackAction",
    "FanOutListener",
    "NullListener",
    "PlayerState",
    "Rarity",
    "SelectCardAction",
    "StepResult",
    "compute_damage",
    "deselect",
    "new_battle",
    "replay",
    "step",
    "try_select",
]
