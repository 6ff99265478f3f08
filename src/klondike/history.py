"""Linear undo/redo history of game states."""

from __future__ import annotations

from typing import List, Optional, Tuple

from klondike.state import GameState


class History:
    """Recorded states plus a cursor naming the visible one.

    ``record`` is the only way in: it throws away whatever lies past the cursor
    (the redo branch) before appending. ``undo``/``redo`` just move the cursor,
    so redoing replays exactly what was recorded.
    """

    def __init__(self, initial: GameState, max_entries: Optional[int] = None):
        if max_entries is not None and max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.max_entries = max_entries
        self._states: List[GameState] = [initial]
        self._cursor = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self):
        return len(self._states)

    def current(self) -> GameState:
        return self._states[self._cursor]

    def initial(self) -> GameState:
        return self._states[0]

    def states(self) -> Tuple[GameState, ...]:
        return tuple(self._states)

    def record(self, state: GameState) -> None:
        del self._states[self._cursor + 1:]
        self._states.append(state)
        if self.max_entries is not None and len(self._states) > self.max_entries:
            del self._states[:len(self._states) - self.max_entries]
        self._cursor = len(self._states) - 1

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._states) - 1

    def undo(self) -> bool:
        if not self.can_undo():
            return False
        self._cursor -= 1
        return True

    def redo(self) -> bool:
        if not self.can_redo():
            return False
        self._cursor += 1
        return True

    def reset(self, state: GameState) -> None:
        self._states = [state]
        self._cursor = 0
