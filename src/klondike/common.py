# common.py - pygame drawing helpers and pile geometry for the front-end
from typing import Optional, Sequence

import pygame

from klondike.cards import Card
from klondike.state import PileRef

# ---------- Configuration ----------
SCREEN_W, SCREEN_H = 1024, 720
TABLE_BG = (2, 100, 40)

CARD_W, CARD_H = 90, 126
CARD_RADIUS = 8
CARD_GAP_X = 18
FAN_Y = 26
WASTE_FAN_X = 22
MARGIN_X = 40
TOP_BAR_H = 60

# Colors
BLACK = (20, 20, 20)
WHITE = (245, 245, 245)
RED = (200, 20, 20)
BLUE = (34, 96, 200)
GOLD = (230, 190, 80)
LIGHT = (220, 220, 220)
MESSAGE = (255, 255, 180)

# Fonts are initialized via setup_fonts() AFTER pygame.init()
FONT_NAME = None
FONT_UI = None
FONT_SMALL = None
FONT_CORNER = None
FONT_CENTER = None


def setup_fonts():
    global FONT_NAME, FONT_UI, FONT_SMALL, FONT_CORNER, FONT_CENTER
    FONT_NAME = pygame.font.get_default_font()
    FONT_UI = pygame.font.SysFont(FONT_NAME, 26, bold=True)
    FONT_SMALL = pygame.font.SysFont(FONT_NAME, 20, bold=True)
    FONT_CORNER = pygame.font.SysFont(FONT_NAME, 24, bold=True)
    FONT_CENTER = pygame.font.SysFont(FONT_NAME, 48, bold=True)
    invalidate_card_caches()


# ---------- Card surfaces ----------
_card_face_cache = {}
_card_back_cache = None


def invalidate_card_caches():
    global _card_face_cache, _card_back_cache
    _card_face_cache = {}
    _card_back_cache = None


def _blank_card() -> pygame.Surface:
    surf = pygame.Surface((CARD_W, CARD_H), pygame.SRCALPHA)
    pygame.draw.rect(surf, WHITE, (0, 0, CARD_W, CARD_H), border_radius=CARD_RADIUS)
    pygame.draw.rect(surf, BLACK, (0, 0, CARD_W, CARD_H), width=2, border_radius=CARD_RADIUS)
    return surf


def get_back_surface() -> pygame.Surface:
    global _card_back_cache
    if _card_back_cache is not None:
        return _card_back_cache
    surf = _blank_card()
    inset = 7
    pygame.draw.rect(surf, BLUE, (inset, inset, CARD_W - 2 * inset, CARD_H - 2 * inset), border_radius=6)
    for i in range(-CARD_H, CARD_W, 12):
        pygame.draw.line(surf, LIGHT, (i, inset), (i + CARD_H, CARD_H - inset), 1)
    _card_back_cache = surf
    return surf


def get_card_surface(card: Card) -> pygame.Surface:
    if not card.face_up:
        return get_back_surface()
    if card.key in _card_face_cache:
        return _card_face_cache[card.key]
    surf = _blank_card()
    color = RED if card.is_red else BLACK
    margin = 8
    corner = FONT_CORNER.render(f"{card.rank.label}{card.suit.symbol}", True, color)
    surf.blit(corner, (margin, margin))
    flipped = pygame.transform.rotate(corner, 180)
    surf.blit(flipped, (CARD_W - margin - flipped.get_width(), CARD_H - margin - flipped.get_height()))
    center = FONT_CENTER.render(card.suit.symbol, True, color)
    surf.blit(center, (CARD_W // 2 - center.get_width() // 2, CARD_H // 2 - center.get_height() // 2))
    _card_face_cache[card.key] = surf
    return surf


# ---------- Pile geometry ----------
class PileView:
    """Where a pile sits on screen and how its cards fan out.

    Views hold no cards; callers pass the pile's cards from the current game
    state so the drawing always matches the session.
    """

    def __init__(self, ref: PileRef, x, y, fan_y=0, fan_x=0, visible_tail: Optional[int] = None):
        self.ref = ref
        self.x, self.y = x, y
        self.fan_y = fan_y
        self.fan_x = fan_x
        # Only the last N cards are fanned (waste shows its top three).
        self.visible_tail = visible_tail

    def _slot(self, idx, count):
        if self.visible_tail is None:
            return idx
        return max(0, idx - max(0, count - self.visible_tail))

    def rect_for_index(self, idx, count) -> pygame.Rect:
        slot = self._slot(idx, count)
        return pygame.Rect(self.x + slot * self.fan_x, self.y + slot * self.fan_y, CARD_W, CARD_H)

    def base_rect(self) -> pygame.Rect:
        return pygame.Rect(self.x, self.y, CARD_W, CARD_H)

    def top_rect(self, cards: Sequence[Card]) -> pygame.Rect:
        if not cards:
            return self.base_rect()
        return self.rect_for_index(len(cards) - 1, len(cards))

    def drop_rect(self, cards: Sequence[Card]) -> pygame.Rect:
        """Area that counts as dropping onto this pile: from its base to its top card."""
        return self.base_rect().union(self.top_rect(cards))

    def hit(self, pos, cards: Sequence[Card]):
        """Index of the card under ``pos``, -1 for an empty pile's outline, None for a miss."""
        if not cards:
            return -1 if self.base_rect().collidepoint(pos) else None
        for i in reversed(range(len(cards))):
            if self.rect_for_index(i, len(cards)).collidepoint(pos):
                return i
        return None

    def draw(self, screen, cards: Sequence[Card], hide_from: Optional[int] = None):
        shown = cards if hide_from is None else cards[:hide_from]
        if not shown:
            pygame.draw.rect(screen, LIGHT, self.base_rect(), border_radius=CARD_RADIUS, width=2)
        start = 0 if self.visible_tail is None else max(0, len(shown) - self.visible_tail - 1)
        for i in range(start, len(shown)):
            r = self.rect_for_index(i, len(cards))
            screen.blit(get_card_surface(shown[i]), r.topleft)


# ---------- UI ----------
class Button:
    def __init__(self, text, x, y, w=120, h=40, enabled_fn=None):
        self.text = text
        self.rect = pygame.Rect(x, y, w, h)
        self.enabled_fn = enabled_fn

    def is_enabled(self) -> bool:
        return True if self.enabled_fn is None else bool(self.enabled_fn())

    def draw(self, screen, hover=False):
        if not self.is_enabled():
            col = (150, 150, 150)
        else:
            col = GOLD if hover else (200, 200, 200)
        pygame.draw.rect(screen, col, self.rect, border_radius=10)
        pygame.draw.rect(screen, BLACK, self.rect, 2, border_radius=10)
        t = FONT_SMALL.render(self.text, True, BLACK)
        screen.blit(t, (self.rect.centerx - t.get_width() // 2,
                        self.rect.centery - t.get_height() // 2))

    def hovered(self, mouse_pos):
        return self.rect.collidepoint(mouse_pos)


# ---------- Base Scene ----------
class Scene:
    def __init__(self, app):
        self.app = app
        self.next_scene = None
        self.quit_requested = False

    def handle_event(self, e): pass

    def update(self, dt): pass

    def draw(self, screen): pass
