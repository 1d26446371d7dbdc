from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Dict

from snakegame.game import DIRECTIONS, GameState, Vec2


class Key(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    SPACE = "space"


KEY_DIRECTIONS: Dict[Key, Vec2] = {
    Key.UP: DIRECTIONS["UP"],
    Key.DOWN: DIRECTIONS["DOWN"],
    Key.LEFT: DIRECTIONS["LEFT"],
    Key.RIGHT: DIRECTIONS["RIGHT"],
}


def same_axis(a: Vec2, b: Vec2) -> bool:
    return (a[0] == 0) == (b[0] == 0)


def map_key(state: GameState, key: object) -> GameState:
    """Apply a key press to the state while the game is running.

    Arrow keys only turn the snake onto the other axis, so pressing the
    current heading or its reverse does nothing. Space pauses. Anything else,
    and every key while not running, leaves the state as it was.
    """
    if not state.running or not isinstance(key, Key):
        return state

    if key is Key.SPACE:
        return replace(state, running=False)

    new_dir = KEY_DIRECTIONS[key]
    if same_axis(new_dir, state.direction):
        return state
    return replace(state, direction=new_dir)
