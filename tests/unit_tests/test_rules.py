import pytest

from klondike.rules import can_stack_tableau, draggable_run, is_valid_move, is_won
from klondike.state import PileRef

T = PileRef.tableau
F = PileRef.foundation
WASTE = PileRef.waste()
STOCK = PileRef.stock()


@pytest.mark.parametrize(
    "upper, lower, expected",
    [
        ("6S", "7H", True),
        ("6C", "7D", True),
        ("6H", "7S", True),
        ("6H", "7D", False),
        ("5S", "7H", False),
        ("7S", "6H", False),
    ],
)
def test_can_stack_tableau(card, upper, lower, expected):
    assert can_stack_tableau(card(upper), card(lower)) is expected


def test_empty_run_is_never_valid(table):
    state = table()
    assert is_valid_move((), WASTE, F(0), state) is False
    assert is_valid_move([], T(0), T(1), state) is False


@pytest.mark.parametrize(
    "foundation, dragged, expected",
    [
        ("", "AS", True),
        ("", "2S", False),
        ("AS", "2S", True),
        ("AS", "2C", False),
        ("AS", "3S", False),
        ("AS 2S", "3S", True),
    ],
)
def test_foundation_rules(table, cards, foundation, dragged, expected):
    state = table(waste=dragged, foundations=[foundation])
    assert is_valid_move(cards(dragged), WASTE, F(0), state) is expected


def test_foundation_takes_single_cards_only(table, cards):
    # 7H,6S is a perfectly good run and 7H would even fit, but runs never go up.
    state = table(foundations=["AH 2H 3H 4H 5H 6H"], tableau=["KS- 7H 6S"])
    assert is_valid_move(cards("7H 6S"), T(0), F(0), state) is False
    assert is_valid_move(cards("AD 2D"), T(0), F(1), table(tableau=["AD 2D"])) is False


@pytest.mark.parametrize(
    "target, dragged, expected",
    [
        ("", "KH", True),
        ("", "QS", False),
        ("8C", "7H", True),
        ("8C", "7D", True),
        ("8C", "7S", False),
        ("8C", "6H", False),
        ("8C", "8H", False),
    ],
)
def test_tableau_rules(table, cards, target, dragged, expected):
    state = table(waste=dragged, tableau=[target])
    assert is_valid_move(cards(dragged), WASTE, T(0), state) is expected


def test_tableau_checks_first_card_of_run(table, cards):
    state = table(tableau=["8C", "QD- 7H 6S"])
    assert is_valid_move(cards("7H 6S"), T(1), T(0), state) is True
    assert is_valid_move(cards("6S"), T(1), T(0), state) is False


@pytest.mark.parametrize("target", [STOCK, WASTE])
def test_stock_and_waste_never_accept_drops(table, cards, target):
    state = table(tableau=["KS"])
    assert is_valid_move(cards("KS"), T(0), target, state) is False


def test_drop_on_own_pile_is_rejected(table, cards):
    state = table(tableau=["KS"])
    assert is_valid_move(cards("KS"), T(0), T(0), state) is False


def test_malformed_input_returns_false(table):
    state = table()
    assert is_valid_move(["not a card"], WASTE, T(0), state) is False


class TestDraggableRun:
    def test_tableau_run_from_face_up_card(self, table, card, cards):
        state = table(tableau=["QD- 9S 8H 7C"])
        assert draggable_run(card("8H"), T(0), state) == cards("8H 7C")
        assert draggable_run(card("9S"), T(0), state) == cards("9S 8H 7C")
        assert draggable_run(card("7C"), T(0), state) == cards("7C")

    def test_face_down_tableau_card_is_not_draggable(self, table, card):
        state = table(tableau=["QD- 9S"])
        assert draggable_run(card("QD"), T(0), state) == ()

    def test_card_not_in_pile(self, table, card):
        state = table(tableau=["9S"])
        assert draggable_run(card("9H"), T(0), state) == ()

    def test_waste_top_only(self, table, card, cards):
        state = table(waste="3D 9C 4H")
        assert draggable_run(card("4H"), WASTE, state) == cards("4H")
        assert draggable_run(card("9C"), WASTE, state) == ()

    def test_stock_and_foundation_never_drag(self, table, card):
        state = table(foundations=["AH"])
        assert draggable_run(card("AH"), F(0), state) == ()
        assert draggable_run(state.stock[-1], STOCK, state) == ()


def test_is_won(table):
    suits = "HDCS"
    full = [" ".join(f"{r}{s}" for r in "A 2 3 4 5 6 7 8 9 10 J Q K".split()) for s in suits]
    assert is_won(table(foundations=full, stock=""))
    assert not is_won(table(foundations=full[:3] + [full[3].rsplit(" ", 1)[0]]))
    assert not is_won(table())
