from __future__ import annotations

from dataclasses import dataclass

from . import combo
from .actions import DeselectCardAction, ExecuteAttackAction, SelectCardAction
from .battle import step
from .state import BattleState, CardInstance


@dataclass(frozen=True)
class AutoPlaySpec:
    """Simple auto-player tuning parameters.

    max_chain:
      None = build the longest profitable chain the greedy search finds
      n    = never select more than n cards per attack
    """

    max_chain: int | None = None


def _chain_damage(state: BattleState, chain: list[CardInstance]) -> int:
    cfg = state.config
    return combo.compute_damage(
        chain,
        base_per_number=cfg.base_damage_per_number,
        run_length=cfg.combo_run_length,
        bonus=cfg.combo_bonus,
    ).damage


def _grow_chain(state: BattleState, start: CardInstance, limit: int) -> list[CardInstance]:
    chain = [start]
    while len(chain) < limit:
        best: tuple[int, CardInstance] | None = None
        for cand in combo.selectable(state.player.hand, chain):
            score = _chain_damage(state, chain + [cand])
            # strict > keeps the earliest hand card on ties, so play is deterministic
            if best is None or score > best[0]:
                best = (score, cand)
        if best is None:
            break
        chain.append(best[1])
    return chain


def plan_chain(state: BattleState, spec: AutoPlaySpec | None = None) -> list[CardInstance]:
    """Pick the chain to attack with, trying every hand card as the opener."""
    spec = spec or AutoPlaySpec()
    hand = state.player.hand
    limit = len(hand) if spec.max_chain is None else max(1, min(spec.max_chain, len(hand)))
    best: tuple[int, list[CardInstance]] | None = None
    for start in hand:
        chain = _grow_chain(state, start, limit)
        score = _chain_damage(state, chain)
        if best is None or score > best[0]:
            best = (score, chain)
    return [] if best is None else best[1]


def auto_take_turn(state: BattleState, spec: AutoPlaySpec | None = None) -> None:
    """Select a planned chain and attack with it.

    Leaves the battle untouched when it is not the player's turn or the hand is empty.
    """
    if state.phase != "player_turn":
        return
    if state.chain:
        step(state, DeselectCardAction(index=0))
    for inst in plan_chain(state, spec):
        step(state, SelectCardAction(uid=inst.uid))
    if state.chain:
        step(state, ExecuteAttackAction())


def auto_play(state: BattleState, spec: AutoPlaySpec | None = None) -> None:
    while not state.is_over:
        turn = state.turn
        auto_take_turn(state, spec)
        if state.turn == turn and not state.is_over:
            # Empty hand with nothing to draw: no legal attack remains.
            break
