"""
Tetromino definitions and piece generation for Tetrix.
Holds the immutable catalog of the 7 pieces, their colors and the random
piece factory.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

Shape = Tuple[Tuple[bool, ...], ...]


class PieceType(Enum):
    """The 7 standard Tetris pieces. 0 is kept free for empty cells."""
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


@dataclass(frozen=True)
class Position:
    """Offset of a piece's top-left corner on the board (y grows downward)."""
    x: int
    y: int

    def shifted(self, dx: int = 0, dy: int = 0) -> "Position":
        return Position(self.x + dx, self.y + dy)


def make_shape(rows: List[List[int]]) -> Shape:
    """Builds an immutable shape from a 0/1 matrix."""
    return tuple(tuple(bool(cell) for cell in row) for row in rows)


@dataclass(frozen=True)
class Piece:
    """A shape (possibly rotated) tagged with the type it came from."""
    piece_type: PieceType
    shape: Shape

    @property
    def color(self) -> str:
        return COLORS[self.piece_type]

    @property
    def height(self) -> int:
        return len(self.shape)

    @property
    def width(self) -> int:
        return len(self.shape[0]) if self.shape else 0

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Yields the (x, y) offsets of every occupied cell."""
        for y, row in enumerate(self.shape):
            for x, filled in enumerate(row):
                if filled:
                    yield x, y

    def definition(self) -> "Piece":
        """Returns the unrotated catalog piece of the same type."""
        return PIECES[self.piece_type]

    def __str__(self):
        return "\n".join(
            "".join(self.piece_type.name if filled else "." for filled in row)
            for row in self.shape
        )


COLORS: Dict[PieceType, str] = {
    PieceType.I: "cyan",
    PieceType.O: "yellow",
    PieceType.T: "purple",
    PieceType.S: "green",
    PieceType.Z: "red",
    PieceType.J: "blue",
    PieceType.L: "orange",
}

# Spawn orientation of every piece, tightly cropped to its bounding box.
PIECES: Dict[PieceType, Piece] = {
    PieceType.I: Piece(PieceType.I, make_shape([[1, 1, 1, 1]])),
    PieceType.O: Piece(PieceType.O, make_shape([[1, 1],
                                                [1, 1]])),
    PieceType.T: Piece(PieceType.T, make_shape([[0, 1, 0],
                                                [1, 1, 1]])),
    PieceType.S: Piece(PieceType.S, make_shape([[0, 1, 1],
                                                [1, 1, 0]])),
    PieceType.Z: Piece(PieceType.Z, make_shape([[1, 1, 0],
                                                [0, 1, 1]])),
    PieceType.J: Piece(PieceType.J, make_shape([[1, 0, 0],
                                                [1, 1, 1]])),
    PieceType.L: Piece(PieceType.L, make_shape([[0, 0, 1],
                                                [1, 1, 1]])),
}


class PieceFactory:
    """
    Generates pieces by independent uniform draws over the catalog.
    There is no 7-bag: the same piece may come up any number of times in a row.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._definitions = list(PIECES.values())

    def generate(self) -> Piece:
        return self.rng.choice(self._definitions)

    def seed(self, seed: Optional[int]):
        self.rng.seed(seed)
