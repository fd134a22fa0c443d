from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from chainbattle.engine.events import DamageTarget
from chainbattle.engine.state import BattleResult


@dataclass
class TelemetryService:
    path: Path

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")


class TelemetryListener:
    """Battle listener that records every notification as a telemetry line."""

    def __init__(self, telemetry: TelemetryService, battle_id: str) -> None:
        self._telemetry = telemetry
        self._battle_id = battle_id

    def on_damage_dealt(self, target: DamageTarget, amount: int, combo_tier: int) -> None:
        self._telemetry.log(
            "damage_dealt",
            {"battle": self._battle_id, "target": target, "amount": amount, "combo_tier": combo_tier},
        )

    def on_card_discarded(self, card_id: str) -> None:
        self._telemetry.log("card_discarded", {"battle": self._battle_id, "card_id": card_id})

    def on_turn_start(self, turn: int) -> None:
        self._telemetry.log("turn_start", {"battle": self._battle_id, "turn": turn})

    def on_battle_end(self, result: BattleResult) -> None:
        self._telemetry.log("battle_end", {"battle": self._battle_id, "result": result})
