"""
Piece states for an Othello board.
"""
from enum import IntEnum


class PieceState(IntEnum):
    """
    State of a single cell. The integer values are the codes stored in the
    board's numpy grid.
    """

    EMPTY = 0
    BLACK = 1
    WHITE = 2

    @property
    def is_color(self) -> bool:
        """True for BLACK and WHITE, the two playable colors."""
        return self is not PieceState.EMPTY

    @property
    def opponent(self) -> 'PieceState':
        """The opposing color."""
        if self is PieceState.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return PieceState(3 - self.value)  # Toggle between BLACK (1) and WHITE (2)

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> 'PieceState':
        """Parse 'B', 'W' or '.' (case-insensitive for the colors)."""
        try:
            return _FROM_SYMBOL[symbol.upper()]
        except KeyError:
            raise ValueError(f"Invalid piece symbol: {symbol!r}") from None

    def __str__(self) -> str:
        return self.name.capitalize()


_SYMBOLS = {
    PieceState.EMPTY: '.',
    PieceState.BLACK: 'B',
    PieceState.WHITE: 'W',
}

_FROM_SYMBOL = {symbol: state for state, symbol in _SYMBOLS.items()}
