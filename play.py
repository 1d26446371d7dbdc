from __future__ import annotations

import argparse
import logging
import random
import sys

import pygame

from snakegame.controller import GameController
from snakegame.controls import Key
from snakegame.render import TICK_EVENT, PygameTicker, Renderer, ToastQueue
from snakegame.storage import JsonFileStore, MemoryStore

PYGAME_KEYS = {
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_SPACE: Key.SPACE,
}


def parse_args():
    parser = argparse.ArgumentParser(description="Play Snake")
    parser.add_argument("--cell-size", type=int, default=24)
    parser.add_argument("--highscore-file", type=str, default="~/.snakegame/highscore.json")
    parser.add_argument("--no-save", action="store_true", help="Keep the high score in memory only")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args()


def press_button(controller: GameController, name: str) -> None:
    if name in ("start", "play_again"):
        controller.start()
    elif name == "pause":
        controller.pause()
    elif name == "reset":
        controller.reset()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = MemoryStore() if args.no_save else JsonFileStore(args.highscore_file)
    renderer = Renderer(cell_size=args.cell_size)
    toasts = ToastQueue()
    controller = GameController(
        store=store,
        ticker=PygameTicker(),
        notify=toasts,
        rng=random.Random(args.seed),
    )
    clock = pygame.time.Clock()

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                renderer.close()
                print(f"Final score: {controller.state.score}, high score: {controller.state.high_score}")
                sys.exit()
            if event.type == TICK_EVENT:
                controller.tick()
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    pygame.event.post(pygame.event.Event(pygame.QUIT))
                elif event.key == pygame.K_RETURN and not controller.state.running:
                    controller.start()
                elif event.key == pygame.K_r:
                    controller.reset()
                elif event.key in PYGAME_KEYS:
                    controller.handle_key(PYGAME_KEYS[event.key])
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                name = renderer.button_at(event.pos)
                if name:
                    press_button(controller, name)

        renderer.draw(controller.state, controller.phase, controller.board(), toasts.visible())
        clock.tick(60)


if __name__ == "__main__":
    main()
