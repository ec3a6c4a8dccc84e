"""
Top-level game for Tetrix.
Wraps the simulation controller in the title / playing / game over /
settings state machine and serialises player input and gravity ticks
through a single action queue.
"""

import logging
from collections import deque
from enum import Enum
from typing import Callable, Deque, List, Optional

from .config import GameConfig
from .controller import Action, SimulationController, Snapshot
from .exceptions import InvalidTransitionError
from .pieces import PieceFactory
from .timer import GravityTimer

logger = logging.getLogger(__name__)


class GameMode(Enum):
    TITLE = "title"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    SETTINGS = "settings"


# Modes each mode may move to when asked by the UI. PLAYING -> GAME_OVER
# only happens when a spawned piece is blocked.
TRANSITIONS = {
    GameMode.TITLE: {GameMode.PLAYING, GameMode.SETTINGS},
    GameMode.PLAYING: set(),
    GameMode.GAME_OVER: {GameMode.PLAYING, GameMode.TITLE},
    GameMode.SETTINGS: {GameMode.TITLE},
}


class Game:
    """
    A Tetrix session.

    Input adapters call :meth:`submit` (or :meth:`handle_key`) and the host
    loop calls :meth:`update` with the milliseconds elapsed since the last
    call. Renderers read :meth:`snapshot`.
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 factory: Optional[PieceFactory] = None):
        self.config = config or GameConfig()
        self.factory = factory or PieceFactory()
        self.mode = GameMode.TITLE
        self.controller = self._build_controller()
        self.timer = GravityTimer(self._on_gravity_tick, self.controller.gravity_interval_ms())
        self._pending: Deque[Action] = deque()

        # Callbacks
        self.on_mode_change: Optional[Callable[[GameMode], None]] = None
        self.on_lines_cleared: Optional[Callable[[List[int]], None]] = None

    def _build_controller(self) -> SimulationController:
        controller = SimulationController(self.config, self.factory)
        controller.on_game_over = self._on_game_over
        controller.on_level_up = self._on_level_up
        controller.on_lines_cleared = self._on_lines_cleared
        return controller

    # Mode transitions

    def _transition(self, target: GameMode):
        if target not in TRANSITIONS[self.mode]:
            raise InvalidTransitionError(self.mode, target)
        self._enter(target)

    def _enter(self, target: GameMode):
        logger.debug("Mode %s -> %s", self.mode.name, target.name)
        self.mode = target
        if target is GameMode.PLAYING:
            self._pending.clear()
            self.controller.initialize()
            self.timer.start(self.controller.gravity_interval_ms())
        else:
            self.timer.stop()
            self._pending.clear()
        if self.on_mode_change:
            self.on_mode_change(target)

    def start(self):
        """Starts a new game from the title or game over screen."""
        self._transition(GameMode.PLAYING)

    def open_settings(self):
        self._transition(GameMode.SETTINGS)

    def close_settings(self):
        self._transition(GameMode.TITLE)

    def return_to_title(self):
        self._transition(GameMode.TITLE)

    def apply_settings(self, config: GameConfig):
        """Replaces the configuration. Only allowed on the settings screen."""
        if self.mode is not GameMode.SETTINGS:
            raise InvalidTransitionError(self.mode, GameMode.SETTINGS)
        self.config = config
        self.controller = self._build_controller()
        self.timer.interval_ms = self.controller.gravity_interval_ms()

    # Input

    def submit(self, action: Action) -> bool:
        """Queues an action. Returns False if the current mode ignores input."""
        if self.mode is not GameMode.PLAYING:
            return False
        self._pending.append(action)
        return True

    def handle_key(self, key: str) -> bool:
        """Queues the action bound to a key. Unbound keys are ignored."""
        name = self.config.action_for_key(key)
        if name is None:
            return False
        return self.submit(Action(name))

    def process_pending(self) -> int:
        """Runs queued actions in order. Returns how many were run."""
        processed = 0
        while self._pending and self.mode is GameMode.PLAYING:
            self.controller.apply(self._pending.popleft())
            processed += 1
        return processed

    def update(self, elapsed_ms: int) -> int:
        """
        Advances the game by ``elapsed_ms``: runs queued player actions,
        then any gravity ticks that became due. Returns the number of ticks.
        """
        if self.mode is not GameMode.PLAYING:
            return 0
        self.process_pending()
        return self.timer.advance(elapsed_ms)

    # Controller callbacks

    def _on_gravity_tick(self):
        if self.submit(Action.GRAVITY):
            self.process_pending()

    def _on_game_over(self):
        self._enter(GameMode.GAME_OVER)

    def _on_level_up(self, level: int):
        self.timer.interval_ms = self.controller.gravity_interval_ms()
        logger.debug("Level %d, gravity every %d ms", level, self.timer.interval_ms)

    def _on_lines_cleared(self, rows: List[int]):
        if self.on_lines_cleared:
            self.on_lines_cleared(rows)

    def snapshot(self) -> Snapshot:
        return self.controller.snapshot()
