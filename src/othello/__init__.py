"""
Othello rules engine, player contract and tournament harness.
"""
from .game import Board, Coordinate, PieceState

__version__ = "0.1"

__all__ = ['Board', 'Coordinate', 'PieceState']
