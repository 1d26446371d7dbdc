from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

Vec2 = Tuple[int, int]

GRID_SIZE = 20
TICK_MS = 150
POINTS_PER_FOOD = 10
FOOD_SAMPLE_ATTEMPTS = 64

INITIAL_SNAKE: Tuple[Vec2, ...] = ((10, 10),)
INITIAL_FOOD: Vec2 = (5, 5)


def add_pos(a: Vec2, b: Vec2) -> Vec2:
    return a[0] + b[0], a[1] + b[1]


def in_bounds(pos: Vec2) -> bool:
    x, y = pos
    return 0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE


DIRECTIONS = {
    "UP": (0, -1),
    "RIGHT": (1, 0),
    "DOWN": (0, 1),
    "LEFT": (-1, 0),
}

INITIAL_DIRECTION: Vec2 = DIRECTIONS["UP"]


class EventKind(Enum):
    WALL_COLLISION = "wall collision"
    SELF_COLLISION = "self collision"
    BOARD_FULL = "board full"
    FOOD_EATEN = "food eaten"
    NEW_HIGH_SCORE = "new high score"


TERMINAL_EVENTS = (
    EventKind.WALL_COLLISION,
    EventKind.SELF_COLLISION,
    EventKind.BOARD_FULL,
)


@dataclass(frozen=True)
class GameState:
    snake: Tuple[Vec2, ...]
    food: Vec2
    direction: Vec2
    running: bool
    over: bool
    score: int
    high_score: int

    @property
    def head(self) -> Vec2:
        return self.snake[0]


@dataclass(frozen=True)
class GameEvent:
    kind: EventKind
    score: int


@dataclass
class StepResult:
    state: GameState
    events: List[GameEvent]

    def has(self, kind: EventKind) -> bool:
        return any(event.kind is kind for event in self.events)

    @property
    def ate_food(self) -> bool:
        return self.has(EventKind.FOOD_EATEN)

    @property
    def new_high_score(self) -> bool:
        return self.has(EventKind.NEW_HIGH_SCORE)

    @property
    def collision(self) -> Optional[EventKind]:
        for event in self.events:
            if event.kind in (EventKind.WALL_COLLISION, EventKind.SELF_COLLISION):
                return event.kind
        return None

    @property
    def done(self) -> bool:
        return self.state.over


def initial_state(high_score: int = 0) -> GameState:
    return GameState(
        snake=INITIAL_SNAKE,
        food=INITIAL_FOOD,
        direction=INITIAL_DIRECTION,
        running=False,
        over=False,
        score=0,
        high_score=high_score,
    )


def place_food(snake: Sequence[Vec2], rng: random.Random) -> Optional[Vec2]:
    """Pick a uniformly random cell that the snake does not occupy.

    Rejection sampling is tried first since the board is mostly empty in
    normal play. After ``FOOD_SAMPLE_ATTEMPTS`` misses the free cells are
    enumerated and one is chosen from that list, so a nearly full board still
    terminates. Returns ``None`` when no free cell is left.
    """
    occupied = set(snake)
    for _ in range(FOOD_SAMPLE_ATTEMPTS):
        pos = (rng.randrange(GRID_SIZE), rng.randrange(GRID_SIZE))
        if pos not in occupied:
            return pos

    available = [
        (x, y)
        for x in range(GRID_SIZE)
        for y in range(GRID_SIZE)
        if (x, y) not in occupied
    ]
    return rng.choice(available) if available else None


def _game_over(state: GameState, kind: EventKind) -> StepResult:
    ended = replace(state, running=False, over=True)
    return StepResult(state=ended, events=[GameEvent(kind, state.score)])


def step(state: GameState, rng: Optional[random.Random] = None) -> StepResult:
    """Advance the game by one tick.

    The input state is left untouched; the returned ``StepResult`` carries the
    next state plus the events the tick produced, in the order they happened.
    Nothing moves unless the game is running and not over.
    """
    if not state.running or state.over:
        return StepResult(state=state, events=[])
    rng = rng or random.Random()

    new_head = add_pos(state.head, state.direction)

    # Terminal checks come before growth so a losing tick leaves the board as is.
    if not in_bounds(new_head):
        return _game_over(state, EventKind.WALL_COLLISION)
    if new_head in state.snake:
        return _game_over(state, EventKind.SELF_COLLISION)

    grown = (new_head,) + state.snake

    if new_head != state.food:
        moved = replace(state, snake=grown[:-1])
        return StepResult(state=moved, events=[])

    events: List[GameEvent] = []
    score = state.score + POINTS_PER_FOOD
    high_score = state.high_score
    if score > high_score:
        high_score = score
        events.append(GameEvent(EventKind.NEW_HIGH_SCORE, score))
    events.append(GameEvent(EventKind.FOOD_EATEN, score))

    fed = replace(state, snake=grown, score=score, high_score=high_score)
    food = place_food(grown, rng)
    if food is None:
        events.append(GameEvent(EventKind.BOARD_FULL, score))
        return StepResult(state=replace(fed, running=False, over=True), events=events)

    return StepResult(state=replace(fed, food=food), events=events)
