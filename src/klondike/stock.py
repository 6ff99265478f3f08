# stock.py - drawing from the stock and turning the waste over
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from klondike.state import GameState

logger = logging.getLogger(__name__)

DEFAULT_DRAW_COUNT = 3


def recycle_waste(state: GameState, max_recycles: Optional[int] = None) -> GameState:
    """Turn the waste back into a face-down stock so the next draws replay the same order."""
    if not state.waste:
        return state
    if max_recycles is not None and state.recycles >= max_recycles:
        logger.debug("recycle refused: %d of %d used", state.recycles, max_recycles)
        return state
    stock = tuple(c.flipped(False) for c in reversed(state.waste))
    return replace(state, stock=stock, waste=(), recycles=state.recycles + 1)


def draw_from_stock(
    state: GameState,
    draw_count: int = DEFAULT_DRAW_COUNT,
    max_recycles: Optional[int] = None,
) -> GameState:
    """Deal up to ``draw_count`` cards face-up onto the waste, or recycle an empty stock."""
    if draw_count < 1:
        raise ValueError(f"draw_count must be at least 1, got {draw_count}")
    if not state.stock:
        return recycle_waste(state, max_recycles)
    n = min(draw_count, len(state.stock))
    split = len(state.stock) - n
    # The stock's top card is dealt first and ends up deepest of the batch.
    drawn = tuple(c.flipped(True) for c in reversed(state.stock[split:]))
    return replace(state, stock=state.stock[:split], waste=state.waste + drawn)
