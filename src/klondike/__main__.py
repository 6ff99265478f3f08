# __main__.py - entry point: python -m klondike
import logging
import os
import random

import pygame

from klondike import common as C
from klondike.scenes.table import KlondikeScene
from klondike.session import GameSession
from klondike.settings import current_rules, load_settings

logger = logging.getLogger(__name__)


def _initial_window_size():
    info = pygame.display.Info()
    # Keep a safety margin so the window never hides under taskbar
    margin_w, margin_h = 120, 140
    w = min(C.SCREEN_W, max(640, info.current_w - margin_w))
    h = min(C.SCREEN_H, max(480, info.current_h - margin_h))
    return w, h


def _configure_logging():
    level_name = os.environ.get("KLONDIKE_LOG_LEVEL", "WARNING").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _seeded_rng():
    seed = os.environ.get("KLONDIKE_SEED", "").strip()
    if not seed:
        return random.Random()
    logger.info("dealing with seed %s", seed)
    return random.Random(seed)


def _allowed_keys_set():
    # Scenes only ever see these keys; media/system keys are dropped.
    names = ["K_ESCAPE", "K_n", "K_r", "K_u", "K_y"]
    out = set()
    for n in names:
        v = getattr(pygame, n, None)
        if isinstance(v, int):
            out.add(v)
    return out


def main():
    _configure_logging()
    load_settings()

    # Center window and init
    os.environ.setdefault("SDL_VIDEO_CENTERED", "1")
    pygame.init()

    w, h = _initial_window_size()
    C.SCREEN_W, C.SCREEN_H = w, h
    screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
    pygame.display.set_caption("Klondike")
    C.setup_fonts()
    clock = pygame.time.Clock()

    session = GameSession(rules=current_rules(), rng=_seeded_rng())
    scene = KlondikeScene(app=None, session=session)
    allowed_keys = _allowed_keys_set()

    running = True
    while running:
        dt = clock.tick(60) / 1000.0
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
                break
            if e.type == pygame.VIDEORESIZE:
                C.SCREEN_W, C.SCREEN_H = e.size
                screen = pygame.display.set_mode((C.SCREEN_W, C.SCREEN_H), pygame.RESIZABLE)
                continue
            if e.type == pygame.KEYDOWN and getattr(e, "key", None) not in allowed_keys:
                continue
            scene.handle_event(e)
            if scene.quit_requested:
                running = False
                break
        if not running:
            break
        if scene.next_scene is not None:
            scene = scene.next_scene
        scene.update(dt)
        scene.draw(screen)
        pygame.display.flip()
    pygame.quit()


if __name__ == "__main__":
    main()
