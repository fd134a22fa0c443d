from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from .actions import Action
from .types import CardDatabase, CardDefinition, EnemyDefinition

if TYPE_CHECKING:
    from .deck import DeckService
    from .events import BattleListener

Phase = Literal["init", "player_turn", "resolving_attack", "enemy_turn", "game_over"]
BattleResult = Literal["win", "lose"]
StatusEffectType = Literal["poison", "paralyze", "silence", "vulnerable", "barrier"]

Event = dict[str, object]


@dataclass(frozen=True)
class BattleConfig:
    player_max_hp: int = 1000
    starting_hand: int = 5
    refill_to: int = 5
    hand_limit: int = 10
    base_damage_per_number: int = 10
    combo_run_length: int = 3
    combo_bonus: float = 0.5
    enemy_id: str = "1"


@dataclass
class StatusEffect:
    # Carried on both sides for save compatibility; no turn logic reads it yet.
    type: StatusEffectType
    duration: int
    value: float = 0.0


@dataclass(eq=False)
class CardInstance:
    """A card in hand. Compared by identity, two copies of one card are distinct."""

    uid: int
    card: CardDefinition

    @property
    def card_id(self) -> str:
        return self.card.id

    @property
    def number(self) -> int:
        return self.card.number

    @property
    def attribute(self) -> str:
        return self.card.attribute


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass
class PlayerState:
    max_hp: int
    current_hp: int
    deck: list[str] = field(default_factory=list)
    hand: list[CardInstance] = field(default_factory=list)
    discard_pile: list[str] = field(default_factory=list)
    status_effects: list[StatusEffect] = field(default_factory=list)

    def take_damage(self, amount: int) -> int:
        before = self.current_hp
        self.current_hp = _clamp(self.current_hp - max(0, amount), 0, self.max_hp)
        return before - self.current_hp

    @property
    def is_defeated(self) -> bool:
        return self.current_hp <= 0


@dataclass
class EnemyState:
    definition: EnemyDefinition
    current_hp: int
    is_charging: bool = False
    charge_counter: int = 0
    status_effects: list[StatusEffect] = field(default_factory=list)

    @staticmethod
    def from_definition(definition: EnemyDefinition) -> "EnemyState":
        return EnemyState(definition=definition, current_hp=definition.max_hp)

    @property
    def max_hp(self) -> int:
        return self.definition.max_hp

    @property
    def attack(self) -> int:
        return self.definition.attack

    def take_damage(self, amount: int) -> int:
        before = self.current_hp
        self.current_hp = _clamp(self.current_hp - max(0, amount), 0, self.max_hp)
        return before - self.current_hp

    @property
    def is_defeated(self) -> bool:
        return self.current_hp <= 0


@dataclass
class BattleState:
    cards: CardDatabase
    config: BattleConfig
    seed: int
    rng: random.Random
    player: PlayerState
    enemy: EnemyState
    deck_service: DeckService
    phase: Phase = "init"
    result: BattleResult | None = None
    turn: int = 0
    chain: list[CardInstance] = field(default_factory=list)
    listener: BattleListener | None = None
    action_log: list[Action] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @property
    def is_over(self) -> bool:
        return self.phase == "game_over"

    def find_in_hand(self, uid: int) -> CardInstance | None:
        for inst in self.player.hand:
            if inst.uid == uid:
                return inst
        return None
