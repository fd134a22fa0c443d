from __future__ import annotations

import itertools
import logging
import random
from typing import MutableSequence

from .state import CardInstance, PlayerState
from .types import CardDatabase

logger = logging.getLogger(__name__)


def fisher_yates(rng: random.Random, items: MutableSequence[str]) -> None:
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


class DeckService:
    """Owns one player's deck/hand/discard lifecycle for a single battle.

    Every card the player owns is always in exactly one of the three piles,
    so the combined multiset of ids never changes while the battle runs.
    """

    def __init__(
        self,
        player: PlayerState,
        cards: CardDatabase,
        rng: random.Random,
        hand_limit: int = 10,
    ) -> None:
        self._player = player
        self._cards = cards
        self._rng = rng
        self._hand_limit = hand_limit
        self._uids = itertools.count(1)

    @property
    def hand_limit(self) -> int:
        return self._hand_limit

    def shuffle(self, deck: MutableSequence[str] | None = None) -> None:
        fisher_yates(self._rng, self._player.deck if deck is None else deck)

    def _reshuffle_discard(self) -> None:
        ps = self._player
        ps.deck.extend(ps.discard_pile)
        ps.discard_pile.clear()
        self.shuffle(ps.deck)
        logger.debug("Discard pile reshuffled into deck (%d cards)", len(ps.deck))

    def draw(self, n: int) -> list[CardInstance]:
        """Move up to `n` cards from the top of the deck into the hand.

        A short draw (hand full, or deck and discard both empty) is not an error;
        the caller gets back only the instances actually drawn.
        """
        ps = self._player
        drawn: list[CardInstance] = []
        for _ in range(max(0, n)):
            if len(ps.hand) >= self._hand_limit:
                break
            if not ps.deck:
                if not ps.discard_pile:
                    break
                self._reshuffle_discard()
            card_id = ps.deck.pop(0)
            inst = CardInstance(uid=next(self._uids), card=self._cards.get(card_id))
            ps.hand.append(inst)
            drawn.append(inst)
        return drawn

    def discard(self, inst: CardInstance) -> bool:
        ps = self._player
        for i, held in enumerate(ps.hand):
            if held is inst:
                ps.hand.pop(i)
                ps.discard_pile.append(inst.card_id)
                return True
        return False
