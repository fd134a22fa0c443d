from __future__ import annotations

import random
from collections import Counter

from chainbattle.engine.deck import DeckService, fisher_yates
from chainbattle.engine.state import PlayerState
from chainbattle.engine.types import CardDatabase, CardDefinition


def _cards(n: int) -> CardDatabase:
    cards = {}
    for i in range(1, n + 1):
        cid = str(i)
        cards[cid] = CardDefinition(
            id=cid,
            name=f"Card {cid}",
            number=(i % 9) + 1,
            attribute="fire" if i % 2 else "water",
            rarity="R",
            power=10,
            effect_text="",
        )
    return CardDatabase(cards=cards)


def _service(deck: list[str], seed: int = 0, hand_limit: int = 10) -> tuple[PlayerState, DeckService]:
    ps = PlayerState(max_hp=100, current_hp=100, deck=list(deck))
    return ps, DeckService(ps, _cards(30), random.Random(seed), hand_limit=hand_limit)


def _pile_ids(ps: PlayerState) -> Counter[str]:
    return Counter(ps.deck) + Counter(c.card_id for c in ps.hand) + Counter(ps.discard_pile)


def test_shuffle_is_a_permutation() -> None:
    rng = random.Random(7)
    original = ["1", "1", "2", "3", "3", "3", "4", "5"]
    for _ in range(50):
        items = list(original)
        fisher_yates(rng, items)
        assert Counter(items) == Counter(original)


def test_shuffle_actually_reorders() -> None:
    rng = random.Random(11)
    original = [str(i) for i in range(20)]
    orders = set()
    for _ in range(20):
        items = list(original)
        fisher_yates(rng, items)
        orders.add(tuple(items))
    assert len(orders) > 1


def test_shuffle_handles_tiny_decks() -> None:
    rng = random.Random(0)
    empty: list[str] = []
    fisher_yates(rng, empty)
    assert empty == []
    single = ["1"]
    fisher_yates(rng, single)
    assert single == ["1"]


def test_draw_takes_from_front_of_deck() -> None:
    ps, svc = _service(["1", "2", "3", "4"])
    drawn = svc.draw(2)
    assert [c.card_id for c in drawn] == ["1", "2"]
    assert [c.card_id for c in ps.hand] == ["1", "2"]
    assert ps.deck == ["3", "4"]


def test_draw_assigns_unique_uids() -> None:
    ps, svc = _service(["1", "1", "1"])
    svc.draw(3)
    assert len({c.uid for c in ps.hand}) == 3


def test_draw_stops_at_hand_limit() -> None:
    ps, svc = _service([str(i) for i in range(1, 16)])
    drawn = svc.draw(12)
    assert len(drawn) == 10
    assert len(ps.hand) == 10
    assert len(ps.deck) == 5
    assert svc.draw(1) == []


def test_draw_reshuffles_discard_when_deck_runs_out() -> None:
    ps, svc = _service(["1"])
    ps.discard_pile.extend(["2", "3", "4"])
    drawn = svc.draw(3)
    assert len(drawn) == 3
    assert drawn[0].card_id == "1"
    assert ps.discard_pile == []
    assert len(ps.deck) == 1
    assert _pile_ids(ps) == Counter(["1", "2", "3", "4"])


def test_draw_is_partial_when_everything_is_empty() -> None:
    ps, svc = _service(["1", "2"])
    drawn = svc.draw(5)
    assert len(drawn) == 2
    assert ps.deck == []
    assert svc.draw(3) == []


def test_discard_moves_instance_to_discard_pile() -> None:
    ps, svc = _service(["1", "2", "3"])
    svc.draw(3)
    middle = ps.hand[1]
    assert svc.discard(middle)
    assert [c.card_id for c in ps.hand] == ["1", "3"]
    assert ps.discard_pile == ["2"]


def test_discard_uses_identity_not_card_id() -> None:
    ps, svc = _service(["5", "5"])
    first, second = svc.draw(2)
    assert svc.discard(second)
    assert ps.hand == [first]
    assert ps.hand[0] is first


def test_discard_of_card_not_in_hand_is_noop() -> None:
    ps, svc = _service(["1", "2"])
    svc.draw(1)
    inst = ps.hand[0]
    assert svc.discard(inst)
    assert not svc.discard(inst)
    assert ps.discard_pile == ["1"]
    assert ps.hand == []


def test_piles_are_conserved_over_random_draw_discard_sequences() -> None:
    deck = [str(i) for i in range(1, 21)] + ["3", "3", "7"]
    original = Counter(deck)
    for seed in range(10):
        ps, svc = _service(deck, seed=seed)
        rng = random.Random(1000 + seed)
        for _ in range(200):
            if ps.hand and rng.random() < 0.5:
                svc.discard(rng.choice(ps.hand))
            else:
                svc.draw(rng.randint(0, 4))
            assert _pile_ids(ps) == original
            assert len(ps.deck) + len(ps.hand) + len(ps.discard_pile) == len(deck)
            assert 0 <= len(ps.hand) <= 10
