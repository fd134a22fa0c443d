from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

Attribute = Literal["none", "fire", "water", "earth", "wind", "thunder", "light", "dark"]
Rarity = Literal["R", "SR", "SSR"]

ATTRIBUTES: tuple[Attribute, ...] = (
    "none",
    "fire",
    "water",
    "earth",
    "wind",
    "thunder",
    "light",
    "dark",
)


@dataclass(frozen=True)
class CardDefinition:
    id: str
    name: str
    number: int
    attribute: Attribute
    rarity: Rarity
    power: int
    effect_text: str
    art_path: str = ""


@dataclass(frozen=True)
class EnemyDefinition:
    id: str
    name: str
    max_hp: int
    attack: int
    attribute: Attribute
    art_path: str = ""


@dataclass(frozen=True)
class CardDatabase:
    """Immutable card catalog used by the engine."""

    cards: dict[str, CardDefinition]

    def get(self, card_id: str) -> CardDefinition:
        return self.cards[card_id]

    def find(self, card_id: str) -> CardDefinition | None:
        return self.cards.get(card_id)

    def all_ids(self) -> Sequence[str]:
        return list(self.cards.keys())


@dataclass(frozen=True)
class EnemyDatabase:
    """Immutable catalog of the fixed enemies a battle can be started against."""

    enemies: dict[str, EnemyDefinition]

    def get(self, enemy_id: str) -> EnemyDefinition:
        return self.enemies[enemy_id]

    def find(self, enemy_id: str) -> EnemyDefinition | None:
        return self.enemies.get(enemy_id)

    def all_ids(self) -> Sequence[str]:
        return list(self.enemies.keys())
