from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Protocol

import numpy as np

from snakegame.board import classify_cells
from snakegame.controls import map_key
from snakegame.game import (
    TERMINAL_EVENTS,
    TICK_MS,
    EventKind,
    GameState,
    StepResult,
    initial_state,
    step,
)
from snakegame.storage import KeyValueStore, load_high_score, save_high_score

logger = logging.getLogger(__name__)


class Phase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game over"


class Ticker(Protocol):
    active: bool

    def start(self, period_ms: int) -> None: ...

    def stop(self) -> None: ...


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    severity: str = "default"


NotificationSink = Callable[[Notification], None]

GAME_OVER_MESSAGES = {
    EventKind.WALL_COLLISION: "You hit the wall!",
    EventKind.SELF_COLLISION: "You hit yourself!",
}


def visible_buttons(state: GameState) -> List[str]:
    """Control buttons to offer for the current state, in display order."""
    buttons = []
    if not state.running and not state.over:
        buttons.append("start")
    if state.running:
        buttons.append("pause")
    if state.over:
        buttons.append("play_again")
    buttons.append("reset")
    return buttons


class GameController:
    """Owns the game state and wires it to the timer, storage and toasts.

    All mutation goes through ``start``/``pause``/``reset``/``handle_key``/
    ``tick``, which are expected to run on a single event loop.
    """

    def __init__(
        self,
        store: KeyValueStore,
        ticker: Ticker,
        notify: Optional[NotificationSink] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.store = store
        self.ticker = ticker
        self.notify = notify or (lambda notification: None)
        self.random = rng or random.Random()
        self.state: GameState = initial_state(load_high_score(store))
        self.started = False

    @property
    def phase(self) -> Phase:
        if self.state.over:
            return Phase.GAME_OVER
        if self.state.running:
            return Phase.RUNNING
        return Phase.PAUSED if self.started else Phase.IDLE

    def start(self) -> None:
        if self.state.over:
            self._restore()
        if not self.state.running:
            logger.info("Game running (score %d)", self.state.score)
        self.state = replace(self.state, running=True)
        self.started = True
        self._sync_ticker()

    def pause(self) -> None:
        if self.state.running:
            logger.info("Game paused at score %d", self.state.score)
        self.state = replace(self.state, running=False)
        self._sync_ticker()

    def reset(self) -> None:
        self._restore()
        self._sync_ticker()
        logger.info("Game reset")

    def handle_key(self, key: object) -> None:
        was_running = self.state.running
        self.state = map_key(self.state, key)
        if was_running and not self.state.running:
            logger.info("Game paused at score %d", self.state.score)
        self._sync_ticker()

    def tick(self) -> StepResult:
        result = step(self.state, self.random)
        self.state = result.state
        if result.events:
            self._apply_events(result)
        return result

    def board(self) -> np.ndarray:
        return classify_cells(self.state)

    def _restore(self) -> None:
        self.state = initial_state(self.state.high_score)

    def _sync_ticker(self) -> None:
        if self.state.running and not self.ticker.active:
            self.ticker.start(TICK_MS)
        elif not self.state.running and self.ticker.active:
            self.ticker.stop()

    def _apply_events(self, result: StepResult) -> None:
        notifications: List[Notification] = []
        for event in result.events:
            if event.kind is EventKind.NEW_HIGH_SCORE:
                save_high_score(self.store, event.score)
                notifications.append(
                    Notification("New High Score!", f"Amazing! New record: {event.score}")
                )
            elif event.kind is EventKind.FOOD_EATEN:
                logger.debug("Food eaten, score %d", event.score)
                notifications.append(Notification("Yummy!", "+10 points"))
            elif event.kind is EventKind.BOARD_FULL:
                logger.info("Board filled, final score %d", event.score)
                notifications.append(
                    Notification("You win!", f"The board is full! Final score: {event.score}")
                )
            elif event.kind in GAME_OVER_MESSAGES:
                logger.info("Game over (%s), final score %d", event.kind.value, event.score)
                notifications.append(
                    Notification(
                        "Game Over!",
                        f"{GAME_OVER_MESSAGES[event.kind]} Final score: {event.score}",
                        severity="destructive",
                    )
                )

        if any(result.has(kind) for kind in TERMINAL_EVENTS):
            self._sync_ticker()

        for notification in notifications:
            self.notify(notification)
