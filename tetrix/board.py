"""
Board state management for Tetrix.
Handles the cell matrix, piece placement, full row detection, row clearing
and the collision check shared by every move.
"""

from typing import Iterable, List, Optional

import numpy as np

from .pieces import Piece, PieceType, Position

EMPTY = 0


class Board:
    """
    The Tetris playfield.
    The grid is a (rows, cols) numpy array where 0 is empty and 1-7 is the
    PieceType value of the piece that locked into the cell. Row 0 is the top.
    """

    BOARD_WIDTH = 10
    BOARD_HEIGHT = 20

    def __init__(self, rows: int = BOARD_HEIGHT, cols: int = BOARD_WIDTH):
        self.rows = rows
        self.cols = cols
        self.grid = np.zeros((self.rows, self.cols), dtype=np.int8)

    def reset(self):
        """Empties every cell."""
        self.grid = np.zeros((self.rows, self.cols), dtype=np.int8)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def cell(self, x: int, y: int) -> Optional[PieceType]:
        """Returns the piece type locked at (x, y), or None if the cell is empty."""
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell ({x}, {y}) is outside a {self.cols}x{self.rows} board")
        value = int(self.grid[y, x])
        return PieceType(value) if value != EMPTY else None

    def is_occupied(self, x: int, y: int) -> bool:
        return self.grid[y, x] != EMPTY

    def place(self, piece: Piece, position: Position):
        """
        Writes the piece into the grid at the given position.
        The caller is expected to have checked for collisions first. Cells
        that are still above the top row are dropped.
        """
        for dx, dy in piece.cells():
            x, y = position.x + dx, position.y + dy
            if y < 0:
                continue
            self.grid[y, x] = piece.piece_type.value

    def find_full_rows(self) -> List[int]:
        """Returns the indices of completely filled rows, top to bottom."""
        return [int(y) for y in np.flatnonzero(np.all(self.grid != EMPTY, axis=1))]

    def clear_rows(self, rows: Iterable[int]):
        """
        Removes the given rows, shifts the rows above them down and refills
        the top with the same number of empty rows.
        """
        rows = sorted(set(rows))
        if not rows:
            return
        remaining = np.delete(self.grid, rows, axis=0)
        new_rows = np.zeros((len(rows), self.cols), dtype=np.int8)
        self.grid = np.vstack((new_rows, remaining))

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def to_array(self) -> np.ndarray:
        """Returns a read-only copy of the grid."""
        grid = self.grid.copy()
        grid.setflags(write=False)
        return grid

    def __str__(self):
        """Text rendering of the board, one character per cell."""
        lines = []
        for row in self.grid:
            lines.append("".join(PieceType(int(v)).name if v else "." for v in row))
        return "\n".join(lines)


def collides(piece: Piece, position: Position, board: Board) -> bool:
    """
    Checks whether the piece at the given position hits a wall, the floor
    or a locked cell. Cells above the top row only collide with the walls.
    """
    for dx, dy in piece.cells():
        x, y = position.x + dx, position.y + dy
        if x < 0 or x >= board.cols or y >= board.rows:
            return True
        if y >= 0 and board.is_occupied(x, y):
            return True
    return False


def drop_position(piece: Piece, position: Position, board: Board) -> Position:
    """Returns the lowest position the piece can fall to from the given one."""
    landing = position
    while not collides(piece, landing.shifted(dy=1), board):
        landing = landing.shifted(dy=1)
    return landing
