"""Draw-three Klondike solitaire: rules, moves and undo/redo history."""

from klondike.cards import Card, Rank, Suit, make_deck
from klondike.deal import deal, deal_from_deck
from klondike.history import History
from klondike.moves import apply_move
from klondike.rules import draggable_run, is_valid_move, is_won
from klondike.session import GameSession
from klondike.settings import Rules
from klondike.state import GameState, InvariantError, PileKind, PileRef, check_invariants
from klondike.stock import draw_from_stock, recycle_waste

__all__ = [
    "Card",
    "GameSession",
    "GameState",
    "History",
    "InvariantError",
    "PileKind",
    "PileRef",
    "Rank",
    "Rules",
    "Suit",
    "apply_move",
    "check_invariants",
    "deal",
    "deal_from_deck",
    "draggable_run",
    "draw_from_stock",
    "is_valid_move",
    "is_won",
    "make_deck",
    "recycle_waste",
]
