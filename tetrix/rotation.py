"""
Shape rotation for Tetrix.
Rotations are plain 90 degree matrix turns with no wall kicks; whether the
result fits is decided by the caller with the collision check.
"""

import numpy as np

from .pieces import Piece, Shape

CLOCKWISE = 1
COUNTER_CLOCKWISE = -1


def _to_shape(matrix: np.ndarray) -> Shape:
    return tuple(tuple(bool(cell) for cell in row) for row in matrix)


def rotate_left(shape: Shape) -> Shape:
    """
    Rotates an H x W shape counter-clockwise into a W x H shape.
    out[i][j] = in[j][W - 1 - i]
    """
    return _to_shape(np.rot90(np.array(shape, dtype=bool), 1))


def rotate_right(shape: Shape) -> Shape:
    """
    Rotates an H x W shape clockwise into a W x H shape.
    out[i][j] = in[H - 1 - j][i]
    """
    return _to_shape(np.rot90(np.array(shape, dtype=bool), -1))


def rotated(piece: Piece, direction: int) -> Piece:
    """
    Returns a rotated copy of the piece.
    :param direction: 1 for clockwise, -1 for counter-clockwise.
    """
    if direction == CLOCKWISE:
        shape = rotate_right(piece.shape)
    elif direction == COUNTER_CLOCKWISE:
        shape = rotate_left(piece.shape)
    else:
        raise ValueError(f"Rotation direction must be 1 or -1, got {direction}")
    return Piece(piece.piece_type, shape)
