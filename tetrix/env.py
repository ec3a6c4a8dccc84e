"""
Gymnasium environment for Tetrix.
Lets an agent play through the same discrete actions a keyboard adapter
sends: each step applies one player action, and every ``gravity_every``
steps the piece also falls one row.
"""

import random
from typing import Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import GameConfig
from .controller import PLAYER_ACTIONS, Action, SimulationController
from .pieces import Piece, PieceFactory, PieceType


class TetrixEnv(gym.Env):
    """
    Observation (Dict):
    - board: (rows, cols) uint8, 0 for empty, 1-7 for the locked piece type
    - current_piece: board-sized 0/1 map of the active piece
    - current_piece_id / hold_piece_id: 0 for none, 1-7 otherwise
    - next_piece_ids: (next_pieces_count,) piece ids
    - score, level: (1,) int32

    Reward is the score gained during the step. The episode terminates on
    game over and is truncated after ``max_steps`` steps if given.
    """

    metadata = {"render_modes": ["ansi"]}

    def __init__(self, config: Optional[GameConfig] = None, gravity_every: int = 1,
                 max_steps: Optional[int] = None, render_mode: Optional[str] = None):
        super().__init__()
        if gravity_every < 0:
            raise ValueError("gravity_every cannot be negative")
        self.config = config or GameConfig()
        self.gravity_every = gravity_every
        self.max_steps = max_steps
        self.render_mode = render_mode

        self.factory = PieceFactory(random.Random())
        self.controller = SimulationController(self.config, self.factory)
        self.steps = 0

        rows, cols = self.config.rows, self.config.cols
        num_types = len(PieceType)
        self.action_space = spaces.Discrete(len(PLAYER_ACTIONS))
        self.observation_space = spaces.Dict({
            "board": spaces.Box(low=0, high=num_types, shape=(rows, cols), dtype=np.uint8),
            "current_piece": spaces.Box(low=0, high=1, shape=(rows, cols), dtype=np.uint8),
            "current_piece_id": spaces.Discrete(num_types + 1),
            "hold_piece_id": spaces.Discrete(num_types + 1),
            "next_piece_ids": spaces.Box(low=0, high=num_types,
                                         shape=(self.config.next_pieces_count,), dtype=np.int8),
            "score": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(1,), dtype=np.int32),
            "level": spaces.Box(low=1, high=np.iinfo(np.int32).max, shape=(1,), dtype=np.int32),
        })

    @staticmethod
    def action_for(index: int) -> Action:
        return PLAYER_ACTIONS[index]

    @staticmethod
    def _piece_id(piece: Optional[Piece]) -> int:
        return piece.piece_type.value if piece is not None else 0

    def _current_piece_map(self) -> np.ndarray:
        piece_map = np.zeros((self.config.rows, self.config.cols), dtype=np.uint8)
        piece = self.controller.current_piece
        if piece is None or self.controller.game_over:
            return piece_map
        position = self.controller.position
        for dx, dy in piece.cells():
            x, y = position.x + dx, position.y + dy
            if 0 <= y < self.config.rows and 0 <= x < self.config.cols:
                piece_map[y, x] = 1
        return piece_map

    def _get_observation(self):
        controller = self.controller
        return {
            "board": controller.board.grid.astype(np.uint8),
            "current_piece": self._current_piece_map(),
            "current_piece_id": self._piece_id(controller.current_piece),
            "hold_piece_id": self._piece_id(controller.hold_piece),
            "next_piece_ids": np.array([self._piece_id(p) for p in controller.next_pieces],
                                       dtype=np.int8),
            "score": np.array([controller.score], dtype=np.int32),
            "level": np.array([controller.level], dtype=np.int32),
        }

    def _get_info(self):
        return {
            "lines_cleared": self.controller.lines_cleared,
            "last_cleared_rows": self.controller.last_cleared_rows,
            "pieces_locked": self.controller.pieces_locked,
        }

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        if seed is not None:
            self.factory.seed(seed)
        self.controller.initialize()
        self.steps = 0
        return self._get_observation(), self._get_info()

    def step(self, action):
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r}")
        previous_score = self.controller.score

        self.controller.apply(self.action_for(int(action)))
        self.steps += 1
        if self.gravity_every and self.steps % self.gravity_every == 0:
            self.controller.tick()

        reward = float(self.controller.score - previous_score)
        terminated = self.controller.game_over
        truncated = self.max_steps is not None and self.steps >= self.max_steps and not terminated
        return self._get_observation(), reward, terminated, truncated, self._get_info()

    def render(self):
        if self.render_mode == "ansi":
            return str(self.controller)
        return None
