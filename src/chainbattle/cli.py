from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from chainbattle.engine.ai import AutoPlaySpec, auto_play
from chainbattle.engine.battle import BattleInitError, new_battle
from chainbattle.engine.events import BattleListener
from chainbattle.engine.state import BattleConfig
from chainbattle.paths import get_paths
from chainbattle.services.content import ContentError, ContentService
from chainbattle.services.telemetry import TelemetryListener, TelemetryService

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="chainbattle", description="Run an auto-played chain battle.")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--enemy", default="1", help="enemy id from enemies.json")
    parser.add_argument("--max-chain", type=int, default=None)
    parser.add_argument("--telemetry", type=Path, default=None, help="append battle events to this JSONL file")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    paths = get_paths()
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    try:
        cards = content.load_cards_db()
        enemies = content.load_enemies_db()
        deck = content.load_default_deck()
    except ContentError as e:
        logger.error("%s", e)
        print(f"cannot load content: {e}", file=sys.stderr)
        return 2

    listener: BattleListener | None = None
    if args.telemetry is not None:
        listener = TelemetryListener(TelemetryService(args.telemetry), battle_id=f"seed-{args.seed}")

    try:
        state = new_battle(
            cards,
            enemies,
            deck,
            seed=args.seed,
            config=BattleConfig(enemy_id=args.enemy),
            listener=listener,
        )
    except BattleInitError as e:
        print(f"cannot start battle: {e}", file=sys.stderr)
        return 2

    auto_play(state, AutoPlaySpec(max_chain=args.max_chain))

    print(
        f"{state.enemy.definition.name}: {state.result or 'unfinished'} after {state.turn} turn(s) "
        f"(player {state.player.current_hp}/{state.player.max_hp}, "
        f"enemy {state.enemy.current_hp}/{state.enemy.max_hp})"
    )
    return 0 if state.result == "win" else 1


if __name__ == "__main__":
    raise SystemExit(main())
