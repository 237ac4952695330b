"""
Row/column addressing for the board.
"""
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, order=True)
class Coordinate:
    """
    Immutable (row, col) pair, ordered row first and then column.

    Coordinates are the only way to address a board cell, and the value a
    player returns from ``make_move``. ``Coordinate.PASS`` (-1, -1) is the
    no-move sentinel.
    """

    row: int
    col: int

    PASS: ClassVar['Coordinate']

    @property
    def is_pass(self) -> bool:
        return self == Coordinate.PASS

    def in_bounds(self, width: int) -> bool:
        """Check whether the coordinate lies inside a width x width grid."""
        return 0 <= self.row < width and 0 <= self.col < width

    def neighbor(self, drow: int, dcol: int) -> 'Coordinate':
        """Return the coordinate shifted by (drow, dcol)."""
        return Coordinate(self.row + drow, self.col + dcol)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


Coordinate.PASS = Coordinate(-1, -1)
