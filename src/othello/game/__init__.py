"""
Othello game module.
This package contains the rules engine: pieces, coordinates and the board.
"""

from .board import Board, DIRECTIONS
from .coordinate import Coordinate
from .errors import IllegalMoveError, OccupiedCellError, OthelloError, OutOfBoundsError
from .piece import PieceState

__all__ = [
    'Board',
    'Coordinate',
    'DIRECTIONS',
    'IllegalMoveError',
    'OccupiedCellError',
    'OthelloError',
    'OutOfBoundsError',
    'PieceState',
]
