"""
One-ply greedy player.
"""
from ..game import Board, Coordinate
from .base import Player


class GreedyPlayer(Player):
    """
    Plays the move that leaves it with the most pieces on the board.

    Each candidate is tried on a private copy of the board. Ties go to the
    earliest coordinate in row-major order.
    """

    def make_move(self, board: Board) -> Coordinate:
        best_move = Coordinate.PASS
        best_count = -1

        for move in board.get_valid_moves(self.color):
            sandbox = board.copy()
            sandbox.apply_move(self.color, move)
            count = sandbox.count_pieces(self.color)
            if count > best_count:
                best_move, best_count = move, count

        return best_move
