from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, Sequence


class ChainCard(Protocol):
    @property
    def number(self) -> int: ...

    @property
    def attribute(self) -> str: ...


@dataclass(frozen=True)
class ComboStep:
    base: int
    number_run: int
    attribute_run: int
    multiplier: float
    bonus: bool


@dataclass(frozen=True)
class ComboResult:
    steps: tuple[ComboStep, ...]
    total_base: int
    multiplier: float
    damage: int

    @property
    def tier(self) -> int:
        return sum(1 for s in self.steps if s.bonus)


def links(candidate: ChainCard, last: ChainCard) -> bool:
    return candidate.number == last.number or candidate.attribute == last.attribute


def can_extend(candidate: ChainCard, chain: Sequence[ChainCard]) -> bool:
    if any(c is candidate for c in chain):
        return False
    if not chain:
        return True
    return links(candidate, chain[-1])


def try_select(candidate: ChainCard, chain: list) -> bool:
    """Append `candidate` to the chain if it links to the current last card.

    Returns False and leaves the chain untouched when it does not.
    """
    if not can_extend(candidate, chain):
        return False
    chain.append(candidate)
    return True


def deselect(chain: list, index: int) -> bool:
    # Later cards may only have linked through the removed one, so they go too.
    if index < 0 or index >= len(chain):
        return False
    del chain[index:]
    return True


def selectable(hand: Sequence[ChainCard], chain: Sequence[ChainCard]) -> list[ChainCard]:
    """Hand cards that could be appended to the chain right now."""
    return [c for c in hand if can_extend(c, chain)]


def round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def compute_damage(
    chain: Sequence[ChainCard],
    *,
    base_per_number: int = 10,
    run_length: int = 3,
    bonus: float = 0.5,
) -> ComboResult:
    """Damage for a chain: summed `number * base_per_number`, times the combo multiplier.

    Two run counters (same number, same attribute) are tracked against the
    previous card. Every card from the second on whose update leaves either
    counter at `run_length` or more adds `bonus` to the multiplier. Bonuses
    accumulate over the whole chain and are never reset or capped.
    """
    if not chain:
        raise ValueError("Cannot compute damage for an empty chain.")

    steps: list[ComboStep] = []
    total_base = 0
    multiplier = 1.0
    number_run = 1
    attribute_run = 1
    last: ChainCard | None = None

    for card in chain:
        base = card.number * base_per_number
        total_base += base
        fired = False
        if last is not None:
            number_run = number_run + 1 if card.number == last.number else 1
            attribute_run = attribute_run + 1 if card.attribute == last.attribute else 1
            if number_run >= run_length or attribute_run >= run_length:
                multiplier += bonus
                fired = True
        steps.append(
            ComboStep(
                base=base,
                number_run=number_run,
                attribute_run=attribute_run,
                multiplier=multiplier,
                bonus=fired,
            )
        )
        last = card

    return ComboResult(
        steps=tuple(steps),
        total_base=total_base,
        multiplier=multiplier,
        damage=round_half_away(total_base * multiplier),
    )
