from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from chainbattle.engine.types import (
    ATTRIBUTES,
    Attribute,
    CardDatabase,
    CardDefinition,
    EnemyDatabase,
    EnemyDefinition,
)

logger = logging.getLogger(__name__)


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def _load_schema(path: Path) -> object:
    return _load_json(path)


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


def _optional_str(obj: Mapping[str, object], key: str, default: str = "") -> str:
    v = obj.get(key, default)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _parse_attribute(obj: Mapping[str, object]) -> Attribute:
    raw = _require_str(obj, "attribute").strip().lower()
    if raw not in ATTRIBUTES:
        raise ContentError(f"Unknown attribute: {raw}")
    return raw  # type: ignore[return-value]


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def _load_validated(self, name: str) -> dict[str, object]:
        path = self._data_dir / f"{name}.json"
        raw = _load_json(path)
        schema = _load_schema(self._schema_dir / f"{name}.schema.json")
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError(f"{name}.json must be an object")
        return raw

    def load_cards_db(self) -> CardDatabase:
        raw = self._load_validated("cards")
        raw_cards = raw.get("cards")
        if not isinstance(raw_cards, list):
            raise ContentError("cards.json.cards must be a list")

        cards: dict[str, CardDefinition] = {}
        for item in raw_cards:
            if not isinstance(item, dict):
                continue
            card = CardDefinition(
                id=_require_str(item, "id"),
                name=_require_str(item, "name"),
                number=_require_int(item, "number"),
                attribute=_parse_attribute(item),
                rarity=_require_str(item, "rarity"),  # type: ignore[arg-type]
                power=_require_int(item, "power"),
                effect_text=_optional_str(item, "effect_text"),
                art_path=_optional_str(item, "art_path"),
            )
            if card.id in cards:
                raise ContentError(f"Duplicate card id: {card.id}")
            cards[card.id] = card
        logger.info("Loaded %d card definitions", len(cards))
        return CardDatabase(cards=cards)

    def load_enemies_db(self) -> EnemyDatabase:
        raw = self._load_validated("enemies")
        raw_enemies = raw.get("enemies")
        if not isinstance(raw_enemies, list):
            raise ContentError("enemies.json.enemies must be a list")

        enemies: dict[str, EnemyDefinition] = {}
        for item in raw_enemies:
            if not isinstance(item, dict):
                continue
            enemy = EnemyDefinition(
                id=_require_str(item, "id"),
                name=_require_str(item, "name"),
                max_hp=_require_int(item, "max_hp"),
                attack=_require_int(item, "attack"),
                attribute=_parse_attribute(item),
                art_path=_optional_str(item, "art_path"),
            )
            if enemy.id in enemies:
                raise ContentError(f"Duplicate enemy id: {enemy.id}")
            enemies[enemy.id] = enemy
        logger.info("Loaded %d enemy definitions", len(enemies))
        return EnemyDatabase(enemies=enemies)

    def load_default_deck(self) -> list[str]:
        """The starter master deck shipped alongside the card catalog."""
        raw = self._load_validated("cards")
        deck = raw.get("default_deck")
        if not isinstance(deck, list) or not all(isinstance(c, str) for c in deck):
            raise ContentError("cards.json.default_deck must be a list of card ids")
        return list(deck)

    def validate_all(self) -> None:
        # Load is validation (schema + parse), plus the starter deck must resolve.
        cards = self.load_cards_db()
        _ = self.load_enemies_db()
        unknown = [cid for cid in self.load_default_deck() if cards.find(cid) is None]
        if unknown:
            raise ContentError(f"default_deck references unknown cards: {', '.join(unknown)}")
