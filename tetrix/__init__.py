"""
Tetrix: a falling-block puzzle simulation.
Contains the piece catalog, board, collision and rotation rules, the
simulation controller and the game state machine.
"""

from .board import Board, collides
from .config import GameConfig
from .controller import Action, SimulationController, Snapshot
from .exceptions import ConfigurationError, InvalidTransitionError, TetrixError
from .game import Game, GameMode
from .pieces import PIECES, Piece, PieceFactory, PieceType, Position
from .rotation import rotate_left, rotate_right

__version__ = "0.1.0"

__all__ = [
    'Action', 'Board', 'ConfigurationError', 'Game', 'GameConfig', 'GameMode',
    'InvalidTransitionError', 'PIECES', 'Piece', 'PieceFactory', 'PieceType',
    'Position', 'SimulationController', 'Snapshot', 'TetrixError', 'collides',
    'rotate_left', 'rotate_right',
]
