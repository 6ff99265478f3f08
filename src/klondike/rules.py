# rules.py - move legality, drag selection and the win check
from __future__ import annotations

import logging
from typing import Sequence, Tuple

from klondike.cards import Card, Rank
from klondike.state import GameState, Pile, PileKind, PileRef

logger = logging.getLogger(__name__)


def can_stack_tableau(upper: Card, lower: Card) -> bool:
    """True when ``upper`` may sit on ``lower`` in a tableau: opposite color, one rank down."""
    return upper.is_red != lower.is_red and upper.rank == lower.rank - 1


def can_move_to_foundation(card: Card, foundation: Pile) -> bool:
    if not foundation:
        return card.rank == Rank.ACE
    top = foundation[-1]
    return card.suit == top.suit and card.rank == top.rank + 1


def can_move_to_empty_tableau(card: Card) -> bool:
    return card.rank == Rank.KING


def _target_accepts(cards: Sequence[Card], target: PileRef, state: GameState) -> bool:
    first = cards[0]
    if target.kind is PileKind.FOUNDATION:
        if len(cards) > 1:
            return False
        return can_move_to_foundation(first, state.foundations[target.index])
    if target.kind is PileKind.TABLEAU:
        pile = state.tableau[target.index]
        if not pile:
            return can_move_to_empty_tableau(first)
        return can_stack_tableau(first, pile[-1])
    # Stock and waste never receive a drop.
    return False


def is_valid_move(cards: Sequence[Card], source: PileRef, target: PileRef, state: GameState) -> bool:
    """Decide whether dropping the run ``cards`` from ``source`` onto ``target`` is legal.

    The run is trusted to be what :func:`draggable_run` produced; this only
    looks at the first card of the run and the target pile. Never raises.
    """
    if not cards or source == target:
        return False
    try:
        result = _target_accepts(cards, target, state)
    except (AttributeError, IndexError, TypeError):
        logger.debug("malformed move intent %s -> %s: %r", source, target, cards)
        return False
    logger.debug("is_valid_move %r %s -> %s: %s", list(cards), source, target, result)
    return result


def draggable_run(card: Card, source: PileRef, state: GameState) -> Tuple[Card, ...]:
    """Return the cards that move together when ``card`` is picked up from ``source``.

    Tableau: the card and everything above it, but only if the card is face-up.
    Waste: the top card alone. Nothing is ever picked up from stock or foundations.
    """
    if source.kind is PileKind.TABLEAU:
        pile = state.tableau[source.index]
        for i, c in enumerate(pile):
            if c.key == card.key:
                return pile[i:] if c.face_up else ()
        return ()
    if source.kind is PileKind.WASTE:
        if state.waste and state.waste[-1].key == card.key:
            return state.waste[-1:]
        return ()
    return ()


def is_won(state: GameState) -> bool:
    return all(len(f) == len(Rank) for f in state.foundations)
