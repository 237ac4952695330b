"""
Exceptions raised by the rules engine.
"""
from typing import Optional

from .coordinate import Coordinate
from .piece import PieceState


class OthelloError(Exception):
    """Base class for every error raised by the board."""


class OutOfBoundsError(OthelloError, IndexError):
    """A coordinate lies outside the grid."""

    def __init__(self, coord: Coordinate, width: int):
        self.coord = coord
        self.width = width
        super().__init__(f"Coordinate {coord} is outside the {width}x{width} board")


class IllegalMoveError(OthelloError, ValueError):
    """A placement fails the capture-line test."""

    def __init__(self, color: PieceState, coord: Coordinate, message: Optional[str] = None):
        self.color = color
        self.coord = coord
        super().__init__(message or f"Illegal move for {color} at {coord}: no pieces would be flipped")


class OccupiedCellError(IllegalMoveError):
    """A placement targets a cell that is not empty."""

    def __init__(self, color: PieceState, coord: Coordinate, occupant: PieceState):
        self.occupant = occupant
        super().__init__(color, coord, f"Illegal move for {color} at {coord}: cell is occupied by {occupant}")
