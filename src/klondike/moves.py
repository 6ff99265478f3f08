# moves.py - carry out a validated move on a copy of the table
from __future__ import annotations

import logging
from typing import Sequence

from klondike.cards import Card
from klondike.state import GameState, PileKind, PileRef

logger = logging.getLogger(__name__)

_SOURCE_KINDS = (PileKind.WASTE, PileKind.TABLEAU)
_TARGET_KINDS = (PileKind.FOUNDATION, PileKind.TABLEAU)


def apply_move(state: GameState, cards: Sequence[Card], source: PileRef, target: PileRef) -> GameState:
    """Move the run ``cards`` from the top of ``source`` to the top of ``target``.

    Legality is not checked here; call :func:`klondike.rules.is_valid_move`
    first. The dragged cards are matched against the source by suit and rank
    and must be its top run, otherwise ``state`` is returned unchanged. A
    tableau left with a face-down top card has that card turned up.
    """
    if source.kind not in _SOURCE_KINDS or target.kind not in _TARGET_KINDS or source == target:
        logger.warning("apply_move ignored: cannot move %s -> %s", source, target)
        return state
    if not cards:
        return state

    src = state.pile(source)
    wanted = [c.key for c in cards]
    split = len(src) - len(wanted)
    if split < 0 or [c.key for c in src[split:]] != wanted:
        logger.warning("apply_move ignored: %r is not the top of %s", list(cards), source)
        return state

    remaining = list(src[:split])
    moving = src[split:]
    if source.kind is PileKind.TABLEAU and remaining and not remaining[-1].face_up:
        remaining[-1] = remaining[-1].flipped(True)

    new_state = state.replace_pile(source, remaining)
    new_state = new_state.replace_pile(target, new_state.pile(target) + moving)
    logger.debug("moved %r %s -> %s", list(moving), source, target)
    return new_state
