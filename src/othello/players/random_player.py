"""
A baseline player that picks uniformly among its legal moves.
"""
from typing import Optional
import numpy as np

from ..game import Board, Coordinate, PieceState
from .base import Player


class RandomPlayer(Player):
    """Chooses a random legal move, or passes when there is none."""

    def __init__(self, name: str, color: PieceState, seed: Optional[int] = None):
        super().__init__(name, color)
        self.rng = np.random.default_rng(seed)

    def make_move(self, board: Board) -> Coordinate:
        valid_moves = board.get_valid_moves(self.color)
        if not valid_moves:
            return Coordinate.PASS
        return valid_moves[int(self.rng.integers(len(valid_moves)))]
