from __future__ import annotations

import json
from pathlib import Path

import pytest

from chainbattle.paths import get_paths
from chainbattle.services.content import ContentError, ContentService


def test_content_schemas_validate() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    content.validate_all()


def test_shipped_enemies_match_fixed_roster() -> None:
    paths = get_paths()
    enemies = ContentService(paths.data_dir, paths.schema_dir).load_enemies_db()
    dragon = enemies.get("1")
    assert (dragon.name, dragon.max_hp, dragon.attack, dragon.attribute) == ("RED DRAGON", 300, 25, "fire")
    assert enemies.find("42") is None


def test_default_deck_is_twenty_cards() -> None:
    paths = get_paths()
    deck = ContentService(paths.data_dir, paths.schema_dir).load_default_deck()
    assert len(deck) == 20


def _write_content(tmp_path: Path, cards: object) -> ContentService:
    paths = get_paths()
    (tmp_path / "cards.json").write_text(json.dumps(cards), encoding="utf-8")
    return ContentService(tmp_path, paths.schema_dir)


def test_bad_attribute_fails_schema(tmp_path: Path) -> None:
    content = _write_content(
        tmp_path,
        {
            "cards": [{"id": "1", "name": "X", "number": 1, "attribute": "plasma", "rarity": "R", "power": 1}],
            "default_deck": ["1"],
        },
    )
    with pytest.raises(ContentError) as exc:
        content.load_cards_db()
    assert "Schema validation failed" in str(exc.value)


def test_duplicate_card_id_is_rejected(tmp_path: Path) -> None:
    card = {"id": "1", "name": "X", "number": 1, "attribute": "fire", "rarity": "R", "power": 1}
    content = _write_content(tmp_path, {"cards": [card, dict(card)], "default_deck": ["1"]})
    with pytest.raises(ContentError):
        content.load_cards_db()


def test_missing_file_is_content_error(tmp_path: Path) -> None:
    paths = get_paths()
    content = ContentService(tmp_path, paths.schema_dir)
    with pytest.raises(ContentError):
        content.load_enemies_db()
