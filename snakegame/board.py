from __future__ import annotations

import numpy as np

from snakegame.game import GRID_SIZE, GameState, in_bounds

EMPTY = 0
HEAD = 1
BODY = 2
FOOD = 3


def classify_cells(state: GameState) -> np.ndarray:
    """Grid of cell kinds indexed ``[y, x]``.

    Later writes win, so the order below gives head > body > food > empty.
    """
    board = np.full((GRID_SIZE, GRID_SIZE), EMPTY, dtype=np.uint8)

    if in_bounds(state.food):
        fx, fy = state.food
        board[fy, fx] = FOOD

    for x, y in state.snake[1:]:
        board[y, x] = BODY

    head_x, head_y = state.head
    board[head_y, head_x] = HEAD
    return board
