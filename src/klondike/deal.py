# deal.py - the opening Klondike layout
from __future__ import annotations

import random
from typing import Optional, Sequence

from klondike.cards import DECK_SIZE, Card, make_deck
from klondike.state import TABLEAU_COUNT, GameState


def deal_from_deck(deck: Sequence[Card]) -> GameState:
    """Lay out ``deck`` front to back: tableau i gets i+1 cards with the last one
    face-up, and the 24 cards left over become the face-down stock."""
    if len(deck) != DECK_SIZE or len({c.key for c in deck}) != DECK_SIZE:
        raise ValueError(f"deal needs {DECK_SIZE} distinct cards, got {len(deck)}")
    cards = [c.flipped(False) for c in deck]
    pos = 0
    tableau = []
    for col in range(TABLEAU_COUNT):
        pile = cards[pos:pos + col + 1]
        pile[-1] = pile[-1].flipped(True)
        tableau.append(tuple(pile))
        pos += col + 1
    return GameState(stock=tuple(cards[pos:]), tableau=tuple(tableau))


def deal(rng: Optional[random.Random] = None) -> GameState:
    """Shuffle a fresh deck with ``rng`` and deal it."""
    return deal_from_deck(make_deck(shuffle=True, rng=rng))
