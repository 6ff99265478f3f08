# table.py - the Klondike table: hit-testing, dragging and drawing over a GameSession
import logging
from typing import Optional, Sequence, Tuple

import pygame

from klondike import common as C
from klondike.cards import Card
from klondike.session import GameSession
from klondike.settings import current_rules
from klondike.state import FOUNDATION_COUNT, TABLEAU_COUNT, PileKind, PileRef

logger = logging.getLogger(__name__)

WIN_MESSAGE = "Congratulations! You won! Press N for a new game."


class KlondikeScene(C.Scene):
    def __init__(self, app, session: Optional[GameSession] = None):
        super().__init__(app)
        self.session = session if session is not None else GameSession(rules=current_rules())
        self.message = ""
        self.mouse_pos = (0, 0)
        # (cards, source ref, grab offset) while a run is being dragged
        self.drag: Optional[Tuple[Tuple[Card, ...], PileRef, Tuple[int, int]]] = None

        row_y = C.TOP_BAR_H + 20
        step = C.CARD_W + C.CARD_GAP_X
        self.stock_view = C.PileView(PileRef.stock(), C.MARGIN_X, row_y)
        self.waste_view = C.PileView(PileRef.waste(), C.MARGIN_X + step, row_y,
                                     fan_x=C.WASTE_FAN_X, visible_tail=3)
        self.foundation_views = [
            C.PileView(PileRef.foundation(i), C.MARGIN_X + (3 + i) * step, row_y)
            for i in range(FOUNDATION_COUNT)
        ]
        tableau_y = row_y + C.CARD_H + 30
        self.tableau_views = [
            C.PileView(PileRef.tableau(i), C.MARGIN_X + i * step, tableau_y, fan_y=C.FAN_Y)
            for i in range(TABLEAU_COUNT)
        ]

        self.b_undo = C.Button("Undo", 20, 10, enabled_fn=self.session.can_undo)
        self.b_redo = C.Button("Redo", 150, 10, enabled_fn=self.session.can_redo)
        self.b_restart = C.Button("Restart", 280, 10)
        self.b_new = C.Button("New Game", 410, 10, w=140)
        self.buttons = [
            (self.b_undo, self.undo),
            (self.b_redo, self.redo),
            (self.b_restart, self.restart),
            (self.b_new, self.new_game),
        ]

    # ---------- Actions ----------
    def _after_change(self):
        self.drag = None
        self.message = WIN_MESSAGE if self.session.won else ""

    def undo(self):
        self.session.undo()
        self._after_change()

    def redo(self):
        self.session.redo()
        self._after_change()

    def restart(self):
        self.session.restart()
        self._after_change()

    def new_game(self):
        self.session.new_game()
        self._after_change()

    def click_stock(self):
        if not self.session.draw() and not self.session.state.stock and self.session.state.waste:
            self.message = "No more stock cycles!"
        else:
            self.message = ""

    # ---------- Hit-testing ----------
    def all_views(self):
        return [self.stock_view, self.waste_view, *self.foundation_views, *self.tableau_views]

    def cards_of(self, view: C.PileView) -> Sequence[Card]:
        return self.session.state.pile(view.ref)

    def view_for(self, ref: PileRef) -> C.PileView:
        for v in self.all_views():
            if v.ref == ref:
                return v
        raise KeyError(ref)

    def drop_target(self, pos) -> Optional[PileRef]:
        """Map a drop position onto a foundation or tableau pile, if any."""
        for v in [*self.foundation_views, *self.tableau_views]:
            if v.drop_rect(self.cards_of(v)).collidepoint(pos):
                return v.ref
        return None

    def start_drag(self, pos) -> bool:
        for v in [self.waste_view, *self.tableau_views]:
            cards = self.cards_of(v)
            hi = v.hit(pos, cards)
            if hi is None or hi == -1:
                continue
            run = self.session.pick_up(cards[hi], v.ref)
            if not run:
                return False
            r = v.rect_for_index(hi, len(cards))
            self.drag = (run, v.ref, (pos[0] - r.x, pos[1] - r.y))
            return True
        return False

    def finish_drag(self, pos):
        run, source, _ = self.drag
        self.drag = None
        target = self.drop_target(pos)
        if target is None:
            logger.debug("dropped %r from %s outside any pile at %s", list(run), source, pos)
        elif self.session.try_move(run, source, target):
            self.message = WIN_MESSAGE if self.session.won else ""
        # Otherwise the run just snaps back: the state never changed.

    # ---------- Event handling ----------
    def handle_event(self, e):
        if e.type == pygame.MOUSEMOTION:
            self.mouse_pos = e.pos
        elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            self.mouse_pos = e.pos
            for button, action in self.buttons:
                if button.hovered(e.pos) and button.is_enabled():
                    action()
                    return
            if self.stock_view.base_rect().collidepoint(e.pos):
                self.click_stock()
                return
            self.start_drag(e.pos)
        elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            self.mouse_pos = e.pos
            if self.drag:
                self.finish_drag(e.pos)
        elif e.type == pygame.KEYDOWN:
            if e.key == pygame.K_u:
                self.undo()
            elif e.key == pygame.K_y:
                self.redo()
            elif e.key == pygame.K_r:
                self.restart()
            elif e.key == pygame.K_n:
                self.new_game()
            elif e.key == pygame.K_ESCAPE:
                self.quit_requested = True

    # ---------- Drawing ----------
    def draw(self, screen):
        screen.fill(C.TABLE_BG)

        for button, _ in self.buttons:
            button.draw(screen, hover=button.hovered(self.mouse_pos))
        left = self.session.recycles_left()
        if left is not None:
            sc = C.FONT_UI.render(f"Stock cycles left: {left}", True, C.WHITE)
            screen.blit(sc, (C.SCREEN_W - sc.get_width() - 20, 18))

        drag_source = self.drag[1] if self.drag else None
        drag_len = len(self.drag[0]) if self.drag else 0
        for v in self.all_views():
            cards = self.cards_of(v)
            hide_from = len(cards) - drag_len if v.ref == drag_source else None
            v.draw(screen, cards, hide_from=hide_from)
            if v.ref.kind is PileKind.FOUNDATION and not cards:
                label = C.FONT_SMALL.render("A", True, C.LIGHT)
                screen.blit(label, (v.x + (C.CARD_W - label.get_width()) // 2,
                                    v.y + (C.CARD_H - label.get_height()) // 2))

        if self.drag:
            run, _, (ox, oy) = self.drag
            mx, my = self.mouse_pos
            for i, c in enumerate(run):
                screen.blit(C.get_card_surface(c), (mx - ox, my - oy + i * C.FAN_Y))

        if self.message:
            msg = C.FONT_UI.render(self.message, True, C.MESSAGE)
            screen.blit(msg, (C.SCREEN_W // 2 - msg.get_width() // 2, C.SCREEN_H - 40))
