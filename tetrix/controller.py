"""
Simulation controller for Tetrix.
Owns the board, the active piece, the hold slot and the next-pieces queue,
and runs every player action, the gravity tick, piece locking, line clears,
scoring and game over detection.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

import numpy as np

from .board import Board, collides, drop_position
from .config import GameConfig
from .pieces import Piece, PieceFactory, Position
from .rotation import CLOCKWISE, COUNTER_CLOCKWISE, rotated

logger = logging.getLogger(__name__)

# Score awarded for clearing 1-4 rows with a single piece.
SCORE_TABLE = {1: 100, 2: 300, 3: 500, 4: 800}
POINTS_PER_LEVEL = 1000


def level_for_score(score: int) -> int:
    return score // POINTS_PER_LEVEL + 1


class Action(Enum):
    """Discrete actions the controller accepts."""
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    HOLD = "hold"
    GRAVITY = "gravity"


PLAYER_ACTIONS = tuple(action for action in Action if action is not Action.GRAVITY)


@dataclass(frozen=True, eq=False)
class Snapshot:
    """Read-only view of the simulation for renderers."""
    grid: np.ndarray
    current_piece: Optional[Piece]
    position: Position
    ghost_position: Optional[Position]
    next_pieces: Tuple[Piece, ...]
    hold_piece: Optional[Piece]
    score: int
    level: int
    lines_cleared: int
    game_over: bool
    last_cleared_rows: Tuple[int, ...]


class SimulationController:
    """Runs a single game of Tetrix."""

    def __init__(self, config: Optional[GameConfig] = None,
                 factory: Optional[PieceFactory] = None):
        self.config = config or GameConfig()
        self.factory = factory or PieceFactory()
        self.board = Board(self.config.rows, self.config.cols)

        # Game state
        self.current_piece: Optional[Piece] = None
        self.position = self.spawn_position
        self.hold_piece: Optional[Piece] = None
        self.next_pieces: List[Piece] = []
        self.can_hold = True

        # Game stats
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.pieces_locked = 0
        self.game_over = False
        self.last_cleared_rows: Tuple[int, ...] = ()

        # Callbacks
        self.on_lines_cleared: Optional[Callable[[List[int]], None]] = None
        self.on_level_up: Optional[Callable[[int], None]] = None
        self.on_game_over: Optional[Callable[[], None]] = None

        self._handlers = {
            Action.MOVE_LEFT: self.move_left,
            Action.MOVE_RIGHT: self.move_right,
            Action.ROTATE_LEFT: self.rotate_left,
            Action.ROTATE_RIGHT: self.rotate_right,
            Action.SOFT_DROP: self.soft_drop,
            Action.HARD_DROP: self.hard_drop,
            Action.HOLD: self.hold,
            Action.GRAVITY: self.tick,
        }

    @property
    def spawn_position(self) -> Position:
        return Position(self.config.cols // 2 - 1, 0)

    @property
    def active(self) -> bool:
        return self.current_piece is not None and not self.game_over

    def initialize(self):
        """Starts a fresh game: empty board, new queue, zeroed score."""
        self.board.reset()
        self.hold_piece = None
        self.can_hold = True
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.pieces_locked = 0
        self.game_over = False
        self.last_cleared_rows = ()

        self.current_piece = self.factory.generate()
        self.position = self.spawn_position
        self.next_pieces = [self.factory.generate() for _ in range(self.config.next_pieces_count)]
        logger.debug("Game initialized with %s, next %s", self.current_piece.piece_type.name,
                     [p.piece_type.name for p in self.next_pieces])

    def gravity_interval_ms(self) -> int:
        return self.config.gravity_interval_ms(self.level)

    def apply(self, action: Action) -> bool:
        """Runs a single action. Returns True if it changed the piece or board."""
        return self._handlers[action]()

    def _pull_next_piece(self) -> Piece:
        piece = self.next_pieces.pop(0)
        self.next_pieces.append(self.factory.generate())
        return piece

    def _try_move(self, dx: int, dy: int) -> bool:
        if not self.active:
            return False
        target = self.position.shifted(dx, dy)
        if collides(self.current_piece, target, self.board):
            return False
        self.position = target
        return True

    def move_left(self) -> bool:
        return self._try_move(-1, 0)

    def move_right(self) -> bool:
        return self._try_move(1, 0)

    def _try_rotate(self, direction: int) -> bool:
        if not self.active:
            return False
        candidate = rotated(self.current_piece, direction)
        if collides(candidate, self.position, self.board):
            return False
        self.current_piece = candidate
        return True

    def rotate_left(self) -> bool:
        return self._try_rotate(COUNTER_CLOCKWISE)

    def rotate_right(self) -> bool:
        return self._try_rotate(CLOCKWISE)

    def soft_drop(self) -> bool:
        """Moves the piece down one row, locking it if it cannot move."""
        if not self.active:
            return False
        if not self._try_move(0, 1):
            self._lock()
        return True

    def hard_drop(self) -> bool:
        """Drops the piece as far as it goes and locks it."""
        if not self.active:
            return False
        self.position = drop_position(self.current_piece, self.position, self.board)
        self._lock()
        return True

    def tick(self) -> bool:
        """One gravity step; same as a soft drop."""
        return self.soft_drop()

    def hold(self) -> bool:
        """Swaps the current piece with the hold slot."""
        if not self.active:
            return False
        if self.config.hold_once_per_piece and not self.can_hold:
            return False

        held = self.current_piece.definition()
        if self.hold_piece is None:
            self.current_piece = self._pull_next_piece()
        else:
            self.current_piece = self.hold_piece
        self.hold_piece = held
        self.position = self.spawn_position
        self.can_hold = False
        # The swapped-in piece spawns like any other and can be blocked too.
        if collides(self.current_piece, self.position, self.board):
            self._end_game()
        return True

    def _end_game(self):
        self.game_over = True
        logger.debug("Game over: %s blocked at spawn, score %d",
                     self.current_piece.piece_type.name, self.score)
        if self.on_game_over:
            self.on_game_over()

    def _lock(self):
        """Fixes the current piece, spawns the next one and clears rows."""
        self.board.place(self.current_piece, self.position)
        self.pieces_locked += 1
        logger.debug("Locked %s at (%d, %d)", self.current_piece.piece_type.name,
                     self.position.x, self.position.y)

        self.current_piece = self._pull_next_piece()
        self.position = self.spawn_position
        self.can_hold = True
        # The spawn check runs against the board before rows are cleared, and
        # rows are still scored on the piece that ended the game.
        blocked = collides(self.current_piece, self.position, self.board)

        full_rows = self.board.find_full_rows()
        if full_rows:
            self._score_rows(full_rows)
        else:
            self.last_cleared_rows = ()

        # Cleared rows can shift blocks into the new piece's cells.
        if blocked or collides(self.current_piece, self.position, self.board):
            self._end_game()

    def _score_rows(self, rows: List[int]):
        previous_level = self.level
        self.score += SCORE_TABLE[len(rows)]
        self.level = level_for_score(self.score)
        self.board.clear_rows(rows)
        self.lines_cleared += len(rows)
        self.last_cleared_rows = tuple(rows)
        logger.debug("Cleared rows %s, score %d, level %d", rows, self.score, self.level)

        if self.on_lines_cleared:
            self.on_lines_cleared(list(rows))
        if self.level != previous_level and self.on_level_up:
            self.on_level_up(self.level)

    def ghost_position(self) -> Optional[Position]:
        """Where the current piece would land on a hard drop."""
        if not self.active:
            return None
        return drop_position(self.current_piece, self.position, self.board)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            grid=self.board.to_array(),
            current_piece=self.current_piece,
            position=self.position,
            ghost_position=self.ghost_position(),
            next_pieces=tuple(self.next_pieces),
            hold_piece=self.hold_piece,
            score=self.score,
            level=self.level,
            lines_cleared=self.lines_cleared,
            game_over=self.game_over,
            last_cleared_rows=self.last_cleared_rows,
        )

    def __str__(self):
        """Board with the active piece drawn in, followed by the stats."""
        rows = [list(line) for line in str(self.board).split("\n")]
        if self.current_piece is not None:
            for dx, dy in self.current_piece.cells():
                x, y = self.position.x + dx, self.position.y + dy
                if self.board.in_bounds(x, y):
                    rows[y][x] = self.current_piece.piece_type.name.lower()
        result = ["".join(row) for row in rows]
        result.append("")
        result.append(f"Score: {self.score}")
        result.append(f"Level: {self.level}")
        result.append(f"Lines: {self.lines_cleared}")
        if self.hold_piece is not None:
            result.append(f"Hold: {self.hold_piece.piece_type.name}")
        result.append("Next: " + " ".join(p.piece_type.name for p in self.next_pieces))
        return "\n".join(result)
