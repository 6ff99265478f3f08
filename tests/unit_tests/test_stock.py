import random

import pytest

from klondike.deal import deal
from klondike.state import check_invariants
from klondike.stock import draw_from_stock, recycle_waste


def test_draw_three_moves_stock_top_first(table, cards):
    state = table(stock="2C 3C 4C 5C 6C")
    new = draw_from_stock(state)
    assert new.stock == cards("2C 3C", up=False)
    # 6C was on top of the stock, so it is dealt first and 4C ends up on top.
    assert new.waste == cards("6C 5C 4C")


def test_draw_fewer_than_three_when_stock_is_short(table, cards):
    state = table(waste="9D", stock="2C 3C")
    new = draw_from_stock(state)
    assert new.stock == ()
    assert new.waste == cards("9D 3C 2C")


@pytest.mark.parametrize("draw_count, left", [(1, 4), (3, 2), (5, 0)])
def test_draw_count_is_a_parameter(table, draw_count, left):
    state = table(stock="2C 3C 4C 5C 6C")
    assert len(draw_from_stock(state, draw_count=draw_count).stock) == left


def test_draw_count_must_be_positive(table):
    with pytest.raises(ValueError):
        draw_from_stock(table(), draw_count=0)


def test_empty_stock_recycles_the_waste(table, cards):
    state = table(waste="AH 2H 3H", stock="")
    new = draw_from_stock(state)
    assert new.stock == cards("3H 2H AH", up=False)
    assert not any(c.face_up for c in new.stock)
    assert new.waste == ()
    assert new.recycles == 1


def test_draw_with_nothing_left_is_a_no_op(table):
    state = table(stock="", tableau=[])
    assert draw_from_stock(state) is state
    assert recycle_waste(state) is state


def test_recycle_limit(table):
    state = table(waste="AH 2H", stock="")
    once = recycle_waste(state, max_recycles=1)
    assert once.recycles == 1
    drawn = draw_from_stock(once, max_recycles=1)
    assert drawn.stock == ()
    assert draw_from_stock(drawn, max_recycles=1) is drawn
    assert recycle_waste(drawn) != drawn


def test_recycle_then_draw_replays_waste_order():
    state = deal(random.Random(3))
    while state.stock:
        state = draw_from_stock(state)
    before = [c.key for c in state.waste]
    state = recycle_waste(state)
    while state.stock:
        state = draw_from_stock(state, draw_count=3)
    assert [c.key for c in state.waste] == before
    check_invariants(state)


def test_draws_keep_invariants():
    state = deal(random.Random(11))
    for _ in range(20):
        state = draw_from_stock(state)
        check_invariants(state)
