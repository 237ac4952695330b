"""
Board module for Othello.
Handles the board state, move validation, piece flipping and terminal detection.
Uses a fixed-size numpy grid so that copies are cheap and independent.
"""
from typing import Iterable, List, Optional, Tuple
import numpy as np

from .coordinate import Coordinate
from .errors import IllegalMoveError, OccupiedCellError, OutOfBoundsError
from .piece import PieceState

# The 8 compass directions as (row, col) steps: N, NE, E, SE, S, SW, W, NW
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, 0), (-1, 1), (0, 1), (1, 1),
    (1, 0), (1, -1), (0, -1), (-1, -1),
)


class Board:
    """
    Represents an Othello board as a width x width grid of piece states.

    The board knows the rules (legality, captures, game end) but not whose
    turn it is; alternating turns and passing belong to the match driver.
    Decision-makers must work on a ``copy()``, never on the board they were
    handed.
    """

    def __init__(self, width: int = 8):
        """
        Create a board already set up for a new game.

        Args:
            width: Side length of the square board (8 for standard Othello).
                Must be even and at least 4 so the starting block fits.
        """
        if not isinstance(width, int) or width < 4 or width % 2:
            raise ValueError(f"Board width must be an even integer >= 4, got {width!r}")

        self._width = width
        self._grid = np.zeros((width, width), dtype=np.int8)
        self.initialize()

    @property
    def width(self) -> int:
        """Length of one side of the board."""
        return self._width

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self._width * self._width

    def initialize(self) -> None:
        """Reset to the standard starting layout: four center pieces, all else empty."""
        mid = self._width // 2
        self._grid.fill(PieceState.EMPTY)
        self._grid[mid - 1, mid - 1] = PieceState.WHITE
        self._grid[mid, mid] = PieceState.WHITE
        self._grid[mid - 1, mid] = PieceState.BLACK
        self._grid[mid, mid - 1] = PieceState.BLACK

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> 'Board':
        """
        Build a board from text rows of 'B', 'W' and '.' symbols.

        Whitespace inside a row is ignored, so the output of ``str(board)``
        can be fed back in.

        Args:
            rows: One string per board row, top to bottom.

        Returns:
            A new Board holding exactly the given layout
        """
        cleaned = [''.join(row.split()) for row in rows]
        width = len(cleaned)
        if any(len(row) != width for row in cleaned):
            raise ValueError("Board rows must form a square grid")

        board = cls(width)
        for r, row in enumerate(cleaned):
            for c, symbol in enumerate(row):
                board._grid[r, c] = PieceState.from_symbol(symbol)
        return board

    # -- Placement and query --------------------------------------------------

    def _check_bounds(self, coord: Coordinate) -> None:
        if not coord.in_bounds(self._width):
            raise OutOfBoundsError(coord, self._width)

    @staticmethod
    def _check_color(color: PieceState) -> PieceState:
        color = PieceState(color)
        if not color.is_color:
            raise ValueError("Color must be BLACK or WHITE")
        return color

    def get(self, coord: Coordinate) -> PieceState:
        """
        Return the state of the cell at ``coord``.

        Raises:
            OutOfBoundsError: if ``coord`` is outside the grid
        """
        self._check_bounds(coord)
        return PieceState(int(self._grid[coord.row, coord.col]))

    def set(self, color: PieceState, coord: Coordinate) -> bool:
        """
        Write ``color`` into an empty cell without checking Othello legality.

        Args:
            color: BLACK or WHITE
            coord: Target cell

        Returns:
            bool: True if the piece was placed, False if the cell was occupied

        Raises:
            OutOfBoundsError: if ``coord`` is outside the grid
        """
        self._check_bounds(coord)
        color = self._check_color(color)
        if self._grid[coord.row, coord.col] != PieceState.EMPTY:
            return False
        self._grid[coord.row, coord.col] = color
        return True

    def count_pieces(self, color: PieceState) -> int:
        """Count the cells holding ``color`` (EMPTY is allowed)."""
        return int(np.count_nonzero(self._grid == PieceState(color)))

    def score(self) -> Tuple[int, int]:
        """
        Get the current score.

        Returns:
            Tuple of (black_count, white_count)
        """
        return self.count_pieces(PieceState.BLACK), self.count_pieces(PieceState.WHITE)

    def is_full(self) -> bool:
        return not np.any(self._grid == PieceState.EMPTY)

    def to_array(self) -> np.ndarray:
        """Return a copy of the grid as a (width, width) array of piece codes."""
        return self._grid.copy()

    # -- Legality -------------------------------------------------------------

    def _capture_line(self, color: PieceState, coord: Coordinate, drow: int, dcol: int) -> List[Coordinate]:
        """
        Scan one direction from ``coord`` and return the opposing pieces that
        would be flipped, or an empty list if the line is not closed by ``color``.
        """
        opponent = color.opponent
        line: List[Coordinate] = []
        step = coord.neighbor(drow, dcol)
        while step.in_bounds(self._width):
            cell = self._grid[step.row, step.col]
            if cell == opponent:
                line.append(step)
            elif cell == color:
                return line
            else:
                break  # An empty cell ends the line without a capture
            step = step.neighbor(drow, dcol)
        return []

    def get_flips(self, color: PieceState, coord: Coordinate) -> List[Coordinate]:
        """
        Get the pieces that placing ``color`` at ``coord`` would flip.

        Returns an empty list for an out-of-range, occupied or illegal target.
        """
        color = self._check_color(color)
        if not coord.in_bounds(self._width) or self._grid[coord.row, coord.col] != PieceState.EMPTY:
            return []

        flips: List[Coordinate] = []
        for drow, dcol in DIRECTIONS:
            flips.extend(self._capture_line(color, coord, drow, dcol))
        return flips

    def is_valid_move(self, color: PieceState, coord: Coordinate) -> bool:
        """Check whether ``color`` may legally play at ``coord``."""
        color = self._check_color(color)
        if not coord.in_bounds(self._width) or self._grid[coord.row, coord.col] != PieceState.EMPTY:
            return False
        return any(self._capture_line(color, coord, drow, dcol) for drow, dcol in DIRECTIONS)

    def get_valid_moves(self, color: PieceState) -> List[Coordinate]:
        """
        Get all legal moves for ``color``.

        Returns:
            List of Coordinates in row-major order, each appearing once
        """
        color = self._check_color(color)
        moves = []
        for r, c in zip(*np.nonzero(self._grid == PieceState.EMPTY)):
            coord = Coordinate(int(r), int(c))
            if self.is_valid_move(color, coord):
                moves.append(coord)
        return moves

    def count_valid_moves(self, color: PieceState) -> int:
        """Return the number of legal moves for ``color``."""
        return len(self.get_valid_moves(color))

    # -- Move application -----------------------------------------------------

    def apply_move(self, color: PieceState, coord: Coordinate) -> List[Coordinate]:
        """
        Place ``color`` at ``coord`` and flip every captured piece.

        The flip set is computed before anything is written, so a rejected
        move leaves the board untouched.

        Args:
            color: BLACK or WHITE
            coord: Target cell

        Returns:
            The coordinates that were flipped

        Raises:
            OutOfBoundsError: if ``coord`` is outside the grid
            OccupiedCellError: if the target cell is not empty
            IllegalMoveError: if the move captures nothing
        """
        color = self._check_color(color)
        self._check_bounds(coord)

        occupant = self.get(coord)
        if occupant is not PieceState.EMPTY:
            raise OccupiedCellError(color, coord, occupant)

        flips = self.get_flips(color, coord)
        if not flips:
            raise IllegalMoveError(color, coord)

        self._grid[coord.row, coord.col] = color
        for flipped in flips:
            self._grid[flipped.row, flipped.col] = color
        return flips

    # -- Terminal state -------------------------------------------------------

    def is_game_over(self) -> bool:
        """The game is over when the board is full or neither color can move."""
        if self.is_full():
            return True
        return (self.count_valid_moves(PieceState.BLACK) == 0
                and self.count_valid_moves(PieceState.WHITE) == 0)

    def winner(self) -> PieceState:
        """
        Determine the winner based on piece counts.

        Returns:
            BLACK or WHITE for a strict majority, EMPTY for a draw or while
            the game is still in progress
        """
        if not self.is_game_over():
            return PieceState.EMPTY

        black_count, white_count = self.score()
        if black_count > white_count:
            return PieceState.BLACK
        if white_count > black_count:
            return PieceState.WHITE
        return PieceState.EMPTY

    # -- Copying and rendering ------------------------------------------------

    def copy(self) -> 'Board':
        """Create an independent deep copy of the board."""
        new_board = Board(self._width)
        new_board._grid = self._grid.copy()
        return new_board

    clone = copy

    def __copy__(self) -> 'Board':
        return self.copy()

    def __deepcopy__(self, memo) -> 'Board':
        return self.copy()

    def render(self, color: Optional[PieceState] = None) -> str:
        """
        Return the board as text, one row per line.

        Args:
            color: If given, the legal moves of this color are marked with '*'

        Returns:
            The grid using 'B', 'W', '.' (and '*') separated by spaces
        """
        marks = set(self.get_valid_moves(color)) if color is not None else set()
        rows = []
        for r in range(self._width):
            row = []
            for c in range(self._width):
                if Coordinate(r, c) in marks:
                    row.append('*')
                else:
                    row.append(PieceState(int(self._grid[r, c])).symbol)
            rows.append(' '.join(row))
        return "\n".join(rows)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        black_count, white_count = self.score()
        return f"Board(width={self._width}, black={black_count}, white={white_count})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._width == other._width and np.array_equal(self._grid, other._grid)
