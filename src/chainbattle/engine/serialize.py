from __future__ import annotations


from .actions import Action, DeselectCardAction, ExecuteAttackAction, SelectCardAction
from .state import BattleState, CardInstance, EnemyState, PlayerState, StatusEffect


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, SelectCardAction):
        return {"type": "select", "uid": a.uid}
    if isinstance(a, DeselectCardAction):
        return {"type": "deselect", "index": a.index}
    if isinstance(a, ExecuteAttackAction):
        return {"type": "attack"}
    # should be unreachable
    return {"type": "unknown"}


def action_from_dict(d: dict[str, object]) -> Action:
    kind = d.get("type")
    if kind == "select":
        uid = d.get("uid")
        if not isinstance(uid, int):
            raise ValueError("select action needs an int uid")
        return SelectCardAction(uid=uid)
    if kind == "deselect":
        index = d.get("index")
        if not isinstance(index, int):
            raise ValueError("deselect action needs an int index")
        return DeselectCardAction(index=index)
    if kind == "attack":
        return ExecuteAttackAction()
    raise ValueError(f"Unknown action type: {kind}")


def _instance_to_dict(c: CardInstance) -> dict[str, object]:
    return {"uid": c.uid, "card_id": c.card_id}


def _status_to_dict(s: StatusEffect) -> dict[str, object]:
    return {"type": s.type, "duration": s.duration, "value": s.value}


def _player_to_dict(p: PlayerState) -> dict[str, object]:
    return {
        "max_hp": p.max_hp,
        "current_hp": p.current_hp,
        "deck": list(p.deck),
        "hand": [_instance_to_dict(c) for c in p.hand],
        "discard_pile": list(p.discard_pile),
        "status_effects": [_status_to_dict(s) for s in p.status_effects],
    }


def _enemy_to_dict(e: EnemyState) -> dict[str, object]:
    return {
        "id": e.definition.id,
        "current_hp": e.current_hp,
        "is_charging": e.is_charging,
        "charge_counter": e.charge_counter,
        "status_effects": [_status_to_dict(s) for s in e.status_effects],
    }


def snapshot(state: BattleState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current battle state."""
    return {
        "seed": state.seed,
        "phase": state.phase,
        "result": state.result,
        "turn": state.turn,
        "player": _player_to_dict(state.player),
        "enemy": _enemy_to_dict(state.enemy),
        "chain": [c.uid for c in state.chain],
        "action_log": [action_to_dict(a) for a in state.action_log],
    }
