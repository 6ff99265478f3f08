"""Pile references, the immutable game state and its invariants.

A :class:`GameState` is a value: every engine operation builds a new one and
leaves its input untouched, so snapshots kept in the history never change
underneath the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Optional, Sequence, Tuple

from klondike.cards import DECK_SIZE, Card

FOUNDATION_COUNT = 4
TABLEAU_COUNT = 7

Pile = Tuple[Card, ...]


class PileKind(Enum):
    STOCK = "stock"
    WASTE = "waste"
    FOUNDATION = "foundation"
    TABLEAU = "tableau"


_INDEX_LIMITS = {
    PileKind.STOCK: 0,
    PileKind.WASTE: 0,
    PileKind.FOUNDATION: FOUNDATION_COUNT,
    PileKind.TABLEAU: TABLEAU_COUNT,
}


@dataclass(frozen=True)
class PileRef:
    """Names one pile on the table; ``index`` is only meaningful for foundations and tableaux."""

    kind: PileKind
    index: int = 0

    def __post_init__(self):
        limit = _INDEX_LIMITS[self.kind]
        if limit == 0:
            if self.index != 0:
                raise ValueError(f"{self.kind.value} pile takes no index, got {self.index}")
        elif not 0 <= self.index < limit:
            raise ValueError(f"{self.kind.value} index must be in 0..{limit - 1}, got {self.index}")

    @classmethod
    def stock(cls) -> "PileRef":
        return cls(PileKind.STOCK)

    @classmethod
    def waste(cls) -> "PileRef":
        return cls(PileKind.WASTE)

    @classmethod
    def foundation(cls, index: int) -> "PileRef":
        return cls(PileKind.FOUNDATION, index)

    @classmethod
    def tableau(cls, index: int) -> "PileRef":
        return cls(PileKind.TABLEAU, index)

    def __str__(self):
        if _INDEX_LIMITS[self.kind]:
            return f"{self.kind.value}[{self.index}]"
        return self.kind.value


def _empty_piles(count: int) -> Tuple[Pile, ...]:
    return tuple(() for _ in range(count))


@dataclass(frozen=True)
class GameState:
    stock: Pile = ()
    waste: Pile = ()
    foundations: Tuple[Pile, ...] = field(default_factory=lambda: _empty_piles(FOUNDATION_COUNT))
    tableau: Tuple[Pile, ...] = field(default_factory=lambda: _empty_piles(TABLEAU_COUNT))
    # Number of times the waste has been turned back into the stock.
    recycles: int = 0

    def pile(self, ref: PileRef) -> Pile:
        if ref.kind is PileKind.STOCK:
            return self.stock
        if ref.kind is PileKind.WASTE:
            return self.waste
        if ref.kind is PileKind.FOUNDATION:
            return self.foundations[ref.index]
        return self.tableau[ref.index]

    def replace_pile(self, ref: PileRef, cards: Sequence[Card]) -> "GameState":
        cards = tuple(cards)
        if ref.kind is PileKind.STOCK:
            return replace(self, stock=cards)
        if ref.kind is PileKind.WASTE:
            return replace(self, waste=cards)
        if ref.kind is PileKind.FOUNDATION:
            piles = list(self.foundations)
            piles[ref.index] = cards
            return replace(self, foundations=tuple(piles))
        piles = list(self.tableau)
        piles[ref.index] = cards
        return replace(self, tableau=tuple(piles))

    def all_piles(self) -> Iterator[Tuple[PileRef, Pile]]:
        yield PileRef.stock(), self.stock
        yield PileRef.waste(), self.waste
        for i, f in enumerate(self.foundations):
            yield PileRef.foundation(i), f
        for i, t in enumerate(self.tableau):
            yield PileRef.tableau(i), t

    def locate(self, card: Card) -> Optional[Tuple[PileRef, int]]:
        """Return the pile and position holding ``card`` (matched by suit and rank)."""
        for ref, cards in self.all_piles():
            for i, c in enumerate(cards):
                if c.key == card.key:
                    return ref, i
        return None


class InvariantError(AssertionError):
    """A game state broke one of the table invariants; always a programming error."""


def _check_conservation(state: GameState):
    seen = set()
    total = 0
    for ref, cards in state.all_piles():
        for c in cards:
            total += 1
            if c.key in seen:
                raise InvariantError(f"I1: duplicate card {c!r} (found again in {ref})")
            seen.add(c.key)
    if total != DECK_SIZE:
        raise InvariantError(f"I1: expected {DECK_SIZE} cards on the table, found {total}")


def _check_foundations(state: GameState):
    for i, f in enumerate(state.foundations):
        for pos, c in enumerate(f):
            if c.rank != pos or c.suit != f[0].suit:
                raise InvariantError(f"I2: foundation[{i}] out of order at position {pos}: {list(f)}")
            if not c.face_up:
                raise InvariantError(f"I2: face-down card {c!r} on foundation[{i}]")


def _check_tableau(state: GameState):
    for i, t in enumerate(state.tableau):
        first_up = next((pos for pos, c in enumerate(t) if c.face_up), len(t))
        if any(not c.face_up for c in t[first_up:]):
            raise InvariantError(f"I3: tableau[{i}] has a face-down card above a face-up one: {list(t)}")
        run = t[first_up:]
        for lower, upper in zip(run, run[1:]):
            if upper.rank != lower.rank - 1 or upper.is_red == lower.is_red:
                raise InvariantError(f"I3: tableau[{i}] run breaks at {lower!r} -> {upper!r}")


def _check_stock_and_waste(state: GameState):
    if any(c.face_up for c in state.stock):
        raise InvariantError("I4: face-up card in stock")
    if any(not c.face_up for c in state.waste):
        raise InvariantError("I4: face-down card in waste")


def check_invariants(state: GameState) -> None:
    """Raise :class:`InvariantError` naming the first broken invariant (I1-I4)."""
    if len(state.foundations) != FOUNDATION_COUNT or len(state.tableau) != TABLEAU_COUNT:
        raise InvariantError("table must have 4 foundations and 7 tableau piles")
    _check_conservation(state)
    _check_foundations(state)
    _check_tableau(state)
    _check_stock_and_waste(state)
