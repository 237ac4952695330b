"""
Script for running a round-robin tournament between the built-in Othello players.
"""
import os
import argparse
import functools
from typing import Optional

from othello.arena import Arena
from othello.config import Config, get_default_config
from othello.game import PieceState
from othello.logger import setup_logger
from othello.players import GreedyPlayer, RandomPlayer

STRATEGIES = ('random', 'greedy')


def make_random_player(name: str, color: PieceState, seed: Optional[int] = None) -> RandomPlayer:
    """Build a RandomPlayer with a per-color seed so both seats differ but stay reproducible."""
    return RandomPlayer(name, color, seed=None if seed is None else seed + int(color))


def build_config(args: argparse.Namespace) -> Config:
    """Load the config file if there is one, then apply command-line overrides."""
    if args.config and os.path.exists(args.config):
        print(f"Loading configuration from {args.config}")
        config = Config.load(args.config)
    else:
        config = get_default_config()

    if args.rounds is not None:
        config.tournament.rounds = args.rounds
    if args.width is not None:
        config.board.width = args.width
    if args.move_time_limit is not None:
        config.match.move_time_limit = args.move_time_limit
    if args.seed is not None:
        config.seed = args.seed
    if args.log_level is not None:
        config.logging.log_level = args.log_level
    if args.no_progress:
        config.tournament.show_progress = False
    return config.validate()


def main():
    parser = argparse.ArgumentParser(description='Run a tournament between Othello players')

    parser.add_argument('--config', type=str, default=None,
                       help='Path to a JSON config file')
    parser.add_argument('--players', type=str, nargs='+', default=['random', 'greedy'],
                       help=f'Entrants as strategy or id=strategy (strategies: {", ".join(STRATEGIES)})')

    # Tournament parameters
    parser.add_argument('--rounds', type=int, default=None,
                       help='Number of rounds to play')
    parser.add_argument('--width', type=int, default=None,
                       help='Board width')
    parser.add_argument('--move-time-limit', type=float, default=None,
                       help='Seconds allowed per move')
    parser.add_argument('--seed', type=int, default=None,
                       help='Seed for random players')

    # Output
    parser.add_argument('--log-level', type=str, default=None,
                       help='Logging level (DEBUG, INFO, WARNING, ...)')
    parser.add_argument('--no-progress', action='store_true',
                       help='Hide the progress bar')

    args = parser.parse_args()
    config = build_config(args)
    log = setup_logger(config)

    arena = Arena(config)
    for i, entry in enumerate(args.players):
        player_id, _, strategy = entry.rpartition('=')
        player_id = player_id or f"{entry}_{i}"
        if strategy == 'random':
            seed = None if config.seed is None else config.seed + 10 * i
            factory = functools.partial(make_random_player, seed=seed)
        elif strategy == 'greedy':
            factory = GreedyPlayer
        else:
            parser.error(f"Unknown strategy {strategy!r}; choose from {', '.join(STRATEGIES)}")
        arena.add_entrant(player_id, factory)

    if len(arena.entrants) < 2:
        parser.error("Need at least 2 players to start a tournament")

    print("\nTournament Participants:")
    for i, player_id in enumerate(arena.entrants.keys(), 1):
        print(f"{i}. {player_id}")

    print(f"\nStarting tournament with {config.tournament.rounds} rounds...")
    try:
        results = arena.run_tournament()
    finally:
        log.close()

    print(f"\nTournament completed: {results['games_played']} games in {results['duration']:.1f}s")
    print("\nFinal Leaderboard:")
    print(arena.format_leaderboard())


if __name__ == '__main__':
    main()
