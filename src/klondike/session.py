"""One game of Klondike as seen by a front-end.

The session owns the :class:`~klondike.history.History` and is the only thing
that records into it. Front-ends hand it abstract intents (a card picked up
from a pile, a run dropped on a pile, a click on the stock) and read back
``state``, ``won``, ``can_undo()`` and ``can_redo()`` to redraw.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence, Tuple

from klondike.cards import Card
from klondike.deal import deal
from klondike.history import History
from klondike.moves import apply_move
from klondike.rules import draggable_run, is_valid_move, is_won
from klondike.settings import Rules
from klondike.state import GameState, PileRef, check_invariants
from klondike.stock import draw_from_stock

logger = logging.getLogger(__name__)


class GameSession:
    def __init__(
        self,
        rules: Optional[Rules] = None,
        rng: Optional[random.Random] = None,
        initial: Optional[GameState] = None,
        max_history: Optional[int] = None,
    ):
        self.rules = rules if rules is not None else Rules()
        self.rng = rng if rng is not None else random.Random()
        self.won = False
        start = initial if initial is not None else deal(self.rng)
        self._check(start)
        self._initial = start
        self.history = History(start, max_entries=max_history)
        self.won = is_won(start)

    @property
    def state(self) -> GameState:
        return self.history.current()

    def _check(self, state: GameState):
        if __debug__:
            check_invariants(state)

    def _record(self, state: GameState):
        self._check(state)
        self.history.record(state)
        self.won = is_won(state)
        if self.won:
            logger.info("game won after %d recorded states", len(self.history))

    # ---------- Lifecycle ----------
    def new_game(self) -> GameState:
        start = deal(self.rng)
        self._check(start)
        self._initial = start
        self.history.reset(start)
        self.won = False
        logger.debug("new game dealt")
        return start

    def restart(self) -> GameState:
        """Go back to the opening layout of the current deal; the history starts over."""
        self.history.reset(self._initial)
        self.won = is_won(self._initial)
        return self._initial

    # ---------- Player actions ----------
    def pick_up(self, card: Card, source: PileRef) -> Tuple[Card, ...]:
        return draggable_run(card, source, self.state)

    def try_move(self, cards: Sequence[Card], source: PileRef, target: PileRef) -> bool:
        """Validate and play a drop; False leaves the game untouched."""
        current = self.state
        if not is_valid_move(cards, source, target, current):
            logger.debug("rejected %r %s -> %s", list(cards), source, target)
            return False
        new_state = apply_move(current, cards, source, target)
        if new_state is current:
            # The executor could not find the run on the source pile.
            return False
        self._record(new_state)
        return True

    def draw(self) -> bool:
        """Click on the stock: draw, or turn the waste over when the stock is empty."""
        current = self.state
        new_state = draw_from_stock(current, self.rules.draw_count, self.rules.max_recycles)
        if new_state is current:
            logger.debug("stock click did nothing")
            return False
        self._record(new_state)
        return True

    def undo(self) -> bool:
        moved = self.history.undo()
        if moved:
            self.won = is_won(self.state)
        return moved

    def redo(self) -> bool:
        moved = self.history.redo()
        if moved:
            self.won = is_won(self.state)
        return moved

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def recycles_left(self) -> Optional[int]:
        if self.rules.max_recycles is None:
            return None
        return max(0, self.rules.max_recycles - self.state.recycles)
