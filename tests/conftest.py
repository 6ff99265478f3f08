from typing import Optional, Sequence

import pytest

from klondike.cards import Card, Rank, Suit, make_deck
from klondike.state import GameState

_SUIT_CODES = {"H": Suit.HEARTS, "D": Suit.DIAMONDS, "C": Suit.CLUBS, "S": Suit.SPADES}
_RANK_CODES = {"A": Rank.ACE, "J": Rank.JACK, "Q": Rank.QUEEN, "K": Rank.KING}
_RANK_CODES.update({str(n): Rank(n - 1) for n in range(2, 11)})


def card(code: str, up: bool = True) -> Card:
    """'7H' -> seven of hearts; a trailing '-' means face-down ('7H-')."""
    if code.endswith("-"):
        code, up = code[:-1], False
    return Card(_SUIT_CODES[code[-1]], _RANK_CODES[code[:-1]], up)


def cards(codes: str, up: bool = True):
    return tuple(card(c, up) for c in codes.split())


def build_state(
    waste: str = "",
    foundations: Optional[Sequence[str]] = None,
    tableau: Optional[Sequence[str]] = None,
    stock: Optional[str] = None,
) -> GameState:
    """Build a table; every card not placed elsewhere goes face-down into the stock."""
    foundations = list(foundations or []) + [""] * (4 - len(foundations or []))
    tableau = list(tableau or []) + [""] * (7 - len(tableau or []))
    placed = {
        "waste": cards(waste) if waste else (),
        "foundations": tuple(cards(f) if f else () for f in foundations),
        "tableau": tuple(cards(t) if t else () for t in tableau),
    }
    if stock is not None:
        stock_cards = cards(stock, up=False) if stock else ()
    else:
        used = {c.key for c in placed["waste"]}
        for pile in placed["foundations"] + placed["tableau"]:
            used.update(c.key for c in pile)
        stock_cards = tuple(c for c in make_deck(shuffle=False) if c.key not in used)
    return GameState(stock=stock_cards, **placed)


@pytest.fixture
def table():
    return build_state


@pytest.fixture(name="card")
def card_fixture():
    return card


@pytest.fixture(name="cards")
def cards_fixture():
    return cards
