"""
Arena for running round-robin tournaments between players with ELO rating.
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple
from tqdm import tqdm

from ..config import Config, get_default_config
from ..game import PieceState
from ..players import Player
from .match import Match, MatchResult

logger = logging.getLogger(__name__)

PlayerFactory = Callable[[str, PieceState], Player]


@dataclass
class Rating:
    """One player's entry in the rating table."""
    rating: float
    games_played: int = 0


class ELORatingSystem:
    """
    In-memory ELO table updated from finished matches.

    Args:
        k: K-factor, controls how much ratings change after each game
        initial_rating: Rating given to a player on first sight
    """

    def __init__(self, k: float = 32, initial_rating: float = 1500.0):
        self.k = k
        self.initial_rating = initial_rating
        self.table: Dict[str, Rating] = {}

    def add_player(self, player_id: str, rating: Optional[float] = None) -> Rating:
        if player_id not in self.table:
            self.table[player_id] = Rating(self.initial_rating if rating is None else rating)
        return self.table[player_id]

    def get_rating(self, player_id: str) -> float:
        entry = self.table.get(player_id)
        return entry.rating if entry is not None else self.initial_rating

    @staticmethod
    def expected_score(rating: float, opponent_rating: float) -> float:
        """Expected score, between 0 and 1, of a player against an opponent."""
        return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / 400.0))

    def record_match(self, black_id: str, white_id: str,
                     result: MatchResult) -> Dict[PieceState, Tuple[float, float]]:
        """
        Apply the rating change for one finished match.

        Args:
            black_id: ID of the player that held black
            white_id: ID of the player that held white
            result: The finished match

        Returns:
            (rating before, rating after) for each color
        """
        seats = {PieceState.BLACK: self.add_player(black_id), PieceState.WHITE: self.add_player(white_id)}
        before = {color: entry.rating for color, entry in seats.items()}

        changes = {}
        for color, entry in seats.items():
            expected = self.expected_score(before[color], before[color.opponent])
            entry.rating += self.k * (result.score_for(color) - expected)
            entry.games_played += 1
            changes[color] = (before[color], entry.rating)
        return changes

    def get_leaderboard(self) -> List[Dict]:
        """Players sorted by rating, best first."""
        leaderboard = [
            {'player_id': player_id, 'rating': entry.rating, 'games_played': entry.games_played}
            for player_id, entry in self.table.items()
        ]
        leaderboard.sort(key=lambda x: x['rating'], reverse=True)
        return leaderboard


class Entrant:
    """
    A tournament entry. One player per color is built up front and reused
    for every match the entry plays.
    """

    def __init__(self, player_id: str, factory: PlayerFactory):
        """
        Args:
            player_id: Unique identifier, also used as the players' name
            factory: Called as ``factory(name, color)`` to build a player
        """
        self.player_id = player_id
        self.players: Dict[PieceState, Player] = {
            color: factory(player_id, color) for color in (PieceState.BLACK, PieceState.WHITE)
        }

    def player_for(self, color: PieceState) -> Player:
        return self.players[color]


class Arena:
    """Arena for running tournaments between different players."""

    def __init__(self, config: Optional[Config] = None, elo_system: Optional[ELORatingSystem] = None):
        """
        Initialize the arena.

        Args:
            config: Configuration object (default: get_default_config())
            elo_system: Optional ELO rating system to use
        """
        self.config = config or get_default_config()
        if elo_system is None:
            elo_system = ELORatingSystem(k=self.config.tournament.k,
                                         initial_rating=self.config.tournament.initial_rating)
        self.elo = elo_system
        self.entrants: Dict[str, Entrant] = {}

    def add_entrant(self, player_id: str, factory: PlayerFactory) -> Entrant:
        """Register a player and give it a rating."""
        if player_id in self.entrants:
            raise ValueError(f"Duplicate player id: {player_id}")
        entrant = Entrant(player_id, factory)
        self.entrants[player_id] = entrant
        self.elo.add_player(player_id)
        return entrant

    def play_game(self, black_id: str, white_id: str) -> MatchResult:
        """
        Play a single game between two entrants.

        Args:
            black_id: ID of the entrant playing black (moves first)
            white_id: ID of the entrant playing white

        Returns:
            The MatchResult
        """
        for player_id in (black_id, white_id):
            if player_id not in self.entrants:
                raise KeyError(f"Player not found: {player_id}")

        match = Match(
            self.entrants[black_id].player_for(PieceState.BLACK),
            self.entrants[white_id].player_for(PieceState.WHITE),
            config=self.config.match,
            board_width=self.config.board.width,
        )
        return match.play()

    def run_tournament(self, rounds: Optional[int] = None) -> Dict:
        """
        Run a round-robin tournament between all entrants.

        Args:
            rounds: Number of rounds to play (each entrant plays each other
                entrant this many times). Defaults to config.tournament.rounds.

        Returns:
            Dictionary with tournament results
        """
        rounds = rounds if rounds is not None else self.config.tournament.rounds
        player_ids = list(self.entrants.keys())
        num_players = len(player_ids)

        if num_players < 2:
            raise ValueError("Need at least 2 players for a tournament")

        results = {
            'games_played': 0,
            'matchups': {},
            'start_time': time.time(),
            'end_time': None,
            'rounds': []
        }

        for i in range(num_players):
            for j in range(i + 1, num_players):
                p1, p2 = player_ids[i], player_ids[j]
                results['matchups'][f"{p1}_vs_{p2}"] = {
                    'player1': p1,
                    'player2': p2,
                    'games_played': 0,
                    'wins1': 0,
                    'wins2': 0,
                    'draws': 0
                }

        total_games = rounds * num_players * (num_players - 1) // 2
        progress = tqdm(total=total_games, desc="Tournament", unit="game",
                        disable=not self.config.tournament.show_progress)

        for round_num in range(rounds):
            round_results = {
                'round': round_num + 1,
                'games': []
            }

            for i in range(num_players):
                for j in range(i + 1, num_players):
                    black_id, white_id = player_ids[i], player_ids[j]

                    # Alternate who goes first
                    if (i + j + round_num) % 2 == 0:
                        black_id, white_id = white_id, black_id

                    result = self.play_game(black_id, white_id)
                    score = result.score_for(PieceState.BLACK)
                    ratings = self.elo.record_match(black_id, white_id, result)

                    match_key = (f"{black_id}_vs_{white_id}"
                                 if f"{black_id}_vs_{white_id}" in results['matchups']
                                 else f"{white_id}_vs_{black_id}")
                    matchup = results['matchups'][match_key]
                    matchup['games_played'] += 1
                    results['games_played'] += 1

                    if result.is_draw:
                        matchup['draws'] += 1
                    elif (black_id if result.winner == PieceState.BLACK else white_id) == matchup['player1']:
                        matchup['wins1'] += 1
                    else:
                        matchup['wins2'] += 1

                    round_results['games'].append({
                        'black': black_id,
                        'white': white_id,
                        'result': score,
                        'black_count': result.black_count,
                        'white_count': result.white_count,
                        'forfeited_by': result.forfeited_by.name if result.forfeited_by else None,
                        'elo_black_before': ratings[PieceState.BLACK][0],
                        'elo_white_before': ratings[PieceState.WHITE][0],
                        'elo_black_after': ratings[PieceState.BLACK][1],
                        'elo_white_after': ratings[PieceState.WHITE][1]
                    })
                    progress.update(1)

            results['rounds'].append(round_results)
            logger.info("After round %d:\n%s", round_num + 1, self.format_leaderboard())

        progress.close()

        results['end_time'] = time.time()
        results['duration'] = results['end_time'] - results['start_time']
        results['leaderboard'] = self.elo.get_leaderboard()

        return results

    def format_leaderboard(self) -> str:
        """Return the current leaderboard as a text table."""
        lines = [
            "Rank  Player ID               Rating  Games Played",
            "----  ---------------------  -------  ------------",
        ]
        for i, player in enumerate(self.elo.get_leaderboard(), 1):
            lines.append(f"{i:4d}  {player['player_id']:22s}  {player['rating']:7.1f}  {player['games_played']:12d}")
        return "\n".join(lines)
