# cards.py - card identity, deck construction and shuffling
from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Optional, Tuple


class Suit(IntEnum):
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]


class Rank(IntEnum):
    ACE = 0
    TWO = 1
    THREE = 2
    FOUR = 3
    FIVE = 4
    SIX = 5
    SEVEN = 6
    EIGHT = 7
    NINE = 8
    TEN = 9
    JACK = 10
    QUEEN = 11
    KING = 12

    @property
    def label(self) -> str:
        return RANK_TO_TEXT[self]


SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

RANK_TO_TEXT = {Rank.ACE: "A", Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K"}
for _r in Rank:
    if _r not in RANK_TO_TEXT:
        RANK_TO_TEXT[_r] = str(_r.value + 1)

DECK_SIZE = len(Suit) * len(Rank)


@dataclass(frozen=True)
class Card:
    """A playing card.

    Two cards are the same card when ``key`` matches; ``face_up`` is view state
    and flipping a card returns a new value.
    """

    suit: Suit
    rank: Rank
    face_up: bool = False

    @property
    def key(self) -> Tuple[Suit, Rank]:
        return (self.suit, self.rank)

    @property
    def is_red(self) -> bool:
        return self.suit.is_red

    def color(self) -> str:
        return "red" if self.is_red else "black"

    def flipped(self, face_up: bool) -> "Card":
        if self.face_up == face_up:
            return self
        return replace(self, face_up=face_up)

    def __repr__(self):
        return f"{self.rank.label}{self.suit.symbol}{'↑' if self.face_up else '↓'}"


def make_deck(shuffle: bool = True, rng: Optional[random.Random] = None) -> List[Card]:
    """Return all 52 cards face-down, suit by suit, optionally shuffled by ``rng``."""
    d = [Card(suit, rank, False) for suit in Suit for rank in Rank]
    if shuffle:
        (rng if rng is not None else random.Random()).shuffle(d)
    return d
