from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Sequence

from . import combo
from .actions import Action, DeselectCardAction, ExecuteAttackAction, SelectCardAction
from .deck import DeckService
from .events import BattleListener, NullListener
from .state import (
    BattleConfig,
    BattleResult,
    BattleState,
    EnemyState,
    Event,
    Phase,
    PlayerState,
)
from .types import CardDatabase, EnemyDatabase

logger = logging.getLogger(__name__)


class BattleInitError(ValueError):
    """The battle could not be set up (unknown enemy id or card id)."""


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None


def _listener(state: BattleState) -> BattleListener:
    return state.listener if state.listener is not None else NullListener()


def _enter(state: BattleState, phase: Phase) -> None:
    logger.debug("Battle phase %s -> %s (turn %d)", state.phase, phase, state.turn)
    state.event_log.append({"type": "PHASE_CHANGED", "from": state.phase, "to": phase})
    state.phase = phase


def _draw(state: BattleState, n: int) -> None:
    for inst in state.deck_service.draw(n):
        state.event_log.append({"type": "CARD_DRAWN", "uid": inst.uid, "card_id": inst.card_id})


def _start_player_turn(state: BattleState) -> None:
    state.turn += 1
    state.chain.clear()
    cfg = state.config
    ps = state.player
    # Opening hand is dealt by new_battle, later turns refill then draw one extra.
    if state.turn > 1:
        missing = cfg.refill_to - len(ps.hand)
        if missing > 0:
            _draw(state, missing)
        if len(ps.hand) < cfg.hand_limit:
            _draw(state, 1)
    _enter(state, "player_turn")
    state.event_log.append({"type": "TURN_STARTED", "turn": state.turn, "hand": len(ps.hand)})
    _listener(state).on_turn_start(state.turn)


def _end_battle(state: BattleState, result: BattleResult) -> None:
    state.result = result
    state.chain.clear()
    _enter(state, "game_over")
    state.event_log.append({"type": "BATTLE_ENDED", "result": result, "turn": state.turn})
    logger.info(
        "Battle ended: %s on turn %d (player %d/%d, enemy %d/%d)",
        result,
        state.turn,
        state.player.current_hp,
        state.player.max_hp,
        state.enemy.current_hp,
        state.enemy.max_hp,
    )
    _listener(state).on_battle_end(result)


def _enemy_turn(state: BattleState) -> None:
    _enter(state, "enemy_turn")
    amount = state.enemy.attack
    dealt = state.player.take_damage(amount)
    state.event_log.append(
        {"type": "DAMAGE_PLAYER", "amount": amount, "dealt": dealt, "hp": state.player.current_hp}
    )
    _listener(state).on_damage_dealt("player", amount, 0)
    if state.player.is_defeated:
        _end_battle(state, "lose")
        return
    _start_player_turn(state)


def _resolve_attack(state: BattleState) -> None:
    _enter(state, "resolving_attack")
    cfg = state.config
    chain = list(state.chain)
    result = combo.compute_damage(
        chain,
        base_per_number=cfg.base_damage_per_number,
        run_length=cfg.combo_run_length,
        bonus=cfg.combo_bonus,
    )
    dealt = state.enemy.take_damage(result.damage)
    state.event_log.append(
        {
            "type": "DAMAGE_ENEMY",
            "amount": result.damage,
            "dealt": dealt,
            "base": result.total_base,
            "multiplier": result.multiplier,
            "tier": result.tier,
            "hp": state.enemy.current_hp,
        }
    )
    listener = _listener(state)
    listener.on_damage_dealt("enemy", result.damage, result.tier)

    for inst in chain:
        if state.deck_service.discard(inst):
            state.event_log.append({"type": "CARD_DISCARDED", "uid": inst.uid, "card_id": inst.card_id})
            listener.on_card_discarded(inst.card_id)
    state.chain.clear()

    # Enemy defeat is checked before it can counter, so a mutual KO is a win.
    if state.enemy.is_defeated:
        _end_battle(state, "win")
        return
    _enemy_turn(state)


def _select(state: BattleState, action: SelectCardAction) -> StepResult:
    inst = state.find_in_hand(action.uid)
    if inst is None:
        return StepResult(ok=False, events=[], error="Card is not in hand.")
    if not combo.try_select(inst, state.chain):
        return StepResult(ok=False, events=[], error="Card does not link to the chain.")
    event: Event = {"type": "CARD_SELECTED", "uid": inst.uid, "card_id": inst.card_id}
    state.event_log.append(event)
    return StepResult(ok=True, events=[event])


def _deselect(state: BattleState, action: DeselectCardAction) -> StepResult:
    before = len(state.chain)
    if not combo.deselect(state.chain, action.index):
        return StepResult(ok=True, events=[])
    event: Event = {"type": "CHAIN_TRUNCATED", "index": action.index, "removed": before - action.index}
    state.event_log.append(event)
    return StepResult(ok=True, events=[event])


def _execute_attack(state: BattleState, action: ExecuteAttackAction) -> StepResult:
    if not state.chain:
        return StepResult(ok=False, events=[], error="Select at least one card.")
    start = len(state.event_log)
    _resolve_attack(state)
    return StepResult(ok=True, events=state.event_log[start:])


def step(state: BattleState, action: Action) -> StepResult:
    """Apply a single player action to the battle.

    Attacks run the resolution and the enemy's reply synchronously, so by the
    time this returns the battle is back in `player_turn` or in `game_over`.
    """
    if state.phase == "game_over":
        return StepResult(ok=False, events=[], error="Battle already ended.")
    if state.phase != "player_turn":
        return StepResult(ok=False, events=[], error="Not the player's turn.")

    state.action_log.append(action)

    if isinstance(action, SelectCardAction):
        return _select(state, action)
    if isinstance(action, DeselectCardAction):
        return _deselect(state, action)
    if isinstance(action, ExecuteAttackAction):
        return _execute_attack(state, action)
    return StepResult(ok=False, events=[], error="Unknown action.")


def new_battle(
    cards: CardDatabase,
    enemies: EnemyDatabase,
    master_deck: Sequence[str],
    seed: int,
    config: BattleConfig | None = None,
    listener: BattleListener | None = None,
) -> BattleState:
    cfg = config or BattleConfig()

    enemy_def = enemies.find(cfg.enemy_id)
    if enemy_def is None:
        logger.warning("Cannot start battle: unknown enemy id %r", cfg.enemy_id)
        raise BattleInitError(f"Unknown enemy id: {cfg.enemy_id}")
    missing = sorted({cid for cid in master_deck if cards.find(cid) is None})
    if missing:
        logger.warning("Cannot start battle: unknown card ids %s", missing)
        raise BattleInitError(f"Unknown card ids in deck: {', '.join(missing)}")

    rng = random.Random(seed)
    player = PlayerState(max_hp=cfg.player_max_hp, current_hp=cfg.player_max_hp, deck=list(master_deck))
    deck_service = DeckService(player, cards, rng, hand_limit=cfg.hand_limit)
    state = BattleState(
        cards=cards,
        config=cfg,
        seed=seed,
        rng=rng,
        player=player,
        enemy=EnemyState.from_definition(enemy_def),
        deck_service=deck_service,
        listener=listener,
    )
    deck_service.shuffle()
    _draw(state, cfg.starting_hand)
    logger.info(
        "Battle started against %s (%d HP) with a %d-card deck, seed %d",
        enemy_def.name,
        enemy_def.max_hp,
        len(master_deck),
        seed,
    )
    _start_player_turn(state)
    return state


def replay(
    cards: CardDatabase,
    enemies: EnemyDatabase,
    master_deck: Sequence[str],
    seed: int,
    actions: Iterable[Action],
    config: BattleConfig | None = None,
) -> BattleState:
    state = new_battle(cards, enemies, master_deck, seed=seed, config=config)
    for a in actions:
        step(state, a)
        if state.is_over:
            break
    return state


def chain_preview(state: BattleState) -> combo.ComboResult | None:
    """Damage the current chain would deal, for live combo displays."""
    if not state.chain:
        return None
    cfg = state.config
    return combo.compute_damage(
        state.chain,
        base_per_number=cfg.base_damage_per_number,
        run_length=cfg.combo_run_length,
        bonus=cfg.combo_bonus,
    )
