from __future__ import annotations

from typing import Literal, Protocol, Sequence

from .state import BattleResult

DamageTarget = Literal["player", "enemy"]


class BattleListener(Protocol):
    """Presentation hooks. Called after the engine has committed the state change.

    Return values are ignored; a listener can never alter the outcome.
    """

    def on_damage_dealt(self, target: DamageTarget, amount: int, combo_tier: int) -> None: ...

    def on_card_discarded(self, card_id: str) -> None: ...

    def on_turn_start(self, turn: int) -> None: ...

    def on_battle_end(self, result: BattleResult) -> None: ...


class NullListener:
    def on_damage_dealt(self, target: DamageTarget, amount: int, combo_tier: int) -> None:
        pass

    def on_card_discarded(self, card_id: str) -> None:
        pass

    def on_turn_start(self, turn: int) -> None:
        pass

    def on_battle_end(self, result: BattleResult) -> None:
        pass


class FanOutListener:
    """Forwards every notification to each wrapped listener in order."""

    def __init__(self, listeners: Sequence[BattleListener]) -> None:
        self._listeners = list(listeners)

    def on_damage_dealt(self, target: DamageTarget, amount: int, combo_tier: int) -> None:
        for lst in self._listeners:
            lst.on_damage_dealt(target, amount, combo_tier)

    def on_card_discarded(self, card_id: str) -> None:
        for lst in self._listeners:
            lst.on_card_discarded(card_id)

    def on_turn_start(self, turn: int) -> None:
        for lst in self._listeners:
            lst.on_turn_start(turn)

    def on_battle_end(self, result: BattleResult) -> None:
        for lst in self._listeners:
            lst.on_battle_end(result)
