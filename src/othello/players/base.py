"""
The player contract shared by every decision-maker in a tournament.
"""
from abc import ABC, abstractmethod

from ..game import Board, Coordinate, PieceState


class Player(ABC):
    """
    Base class for anything that can take a seat at the board, AI or human.

    A player has a fixed name and color. It never changes the board it is
    given; it only returns the coordinate it wants to play and the match
    driver applies it.

    Under a move time limit a late call keeps running in its worker thread.
    The driver does not call the same player again until that call has
    returned, so ``make_move`` never runs twice at once on one instance.
    """

    def __init__(self, name: str, color: PieceState):
        """
        Args:
            name: Display name, used in match logs and results
            color: BLACK or WHITE, fixed for the lifetime of the player
        """
        color = PieceState(color)
        if not color.is_color:
            raise ValueError("A player's color must be BLACK or WHITE")
        self._name = name
        self._color = color

    @property
    def name(self) -> str:
        return self._name

    @property
    def color(self) -> PieceState:
        return self._color

    @abstractmethod
    def make_move(self, board: Board) -> Coordinate:
        """
        Choose the move for this ply.

        Args:
            board: The position at the start of the ply. Treat it as
                read-only; call ``board.copy()`` before any speculative play.

        Returns:
            A coordinate from ``board.get_valid_moves(self.color)``, or
            ``Coordinate.PASS`` if there is none
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, color={self._color.name})"
