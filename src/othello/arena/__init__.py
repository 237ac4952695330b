"""
Arena module for running matches and tournaments between players.
"""
from .arena import Arena, ELORatingSystem, Entrant
from .match import Match, MatchResult

__all__ = ['Arena', 'ELORatingSystem', 'Entrant', 'Match', 'MatchResult']
