from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SelectCardAction:
    """Append the hand card with this uid to the active chain."""

    uid: int


@dataclass(frozen=True)
class DeselectCardAction:
    """Drop the chain entry at `index` together with everything after it."""

    index: int


@dataclass(frozen=True)
class ExecuteAttackAction:
    pass


Action = SelectCardAction | DeselectCardAction | ExecuteAttackAction
