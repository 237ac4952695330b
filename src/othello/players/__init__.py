"""
Players module: the decision-maker contract and reference implementations.
"""
from .base import Player
from .greedy import GreedyPlayer
from .random_player import RandomPlayer

__all__ = ['Player', 'GreedyPlayer', 'RandomPlayer']
