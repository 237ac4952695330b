"""
Configuration parameters for Othello tournaments.
"""
import os
from dataclasses import dataclass, asdict, field
from typing import Dict, Any, Optional
import json

ILLEGAL_MOVE_POLICIES = ("match", "ply")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class BoardConfig:
    """Configuration for the game board."""
    width: int = 8


@dataclass
class MatchConfig:
    """Configuration for a single match between two players."""
    move_time_limit: Optional[float] = None  # Seconds per move, None for no limit
    illegal_move_policy: str = "match"  # "match": forfeit the game, "ply": skip the turn
    max_forfeited_plies: int = 3  # Skipped plies allowed under the "ply" policy


@dataclass
class TournamentConfig:
    """Configuration for round-robin tournaments."""
    rounds: int = 10
    k: float = 32.0
    initial_rating: float = 1500.0
    show_progress: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    log_dir: str = "logs"
    log_level: str = "INFO"
    log_to_file: bool = False


@dataclass
class Config:
    """Main configuration class."""
    project_name: str = "Othello-Tournament"
    seed: Optional[int] = 42
    board: BoardConfig = field(default_factory=BoardConfig)
    match: MatchConfig = field(default_factory=MatchConfig)
    tournament: TournamentConfig = field(default_factory=TournamentConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> 'Config':
        """Check value types and ranges, raising ValueError on the first bad field."""
        width = self.board.width
        if not _is_int(width) or width < 4 or width % 2:
            raise ValueError(f"board.width must be an even integer >= 4, got {width!r}")
        limit = self.match.move_time_limit
        if limit is not None and (not _is_number(limit) or limit <= 0):
            raise ValueError(f"match.move_time_limit must be a positive number or None, got {limit!r}")
        if self.match.illegal_move_policy not in ILLEGAL_MOVE_POLICIES:
            raise ValueError(
                f"match.illegal_move_policy must be one of {ILLEGAL_MOVE_POLICIES}, "
                f"got {self.match.illegal_move_policy!r}"
            )
        if not _is_int(self.match.max_forfeited_plies) or self.match.max_forfeited_plies < 1:
            raise ValueError("match.max_forfeited_plies must be an integer >= 1")
        if not _is_int(self.tournament.rounds) or self.tournament.rounds < 1:
            raise ValueError("tournament.rounds must be an integer >= 1")
        if not _is_number(self.tournament.k) or self.tournament.k <= 0:
            raise ValueError("tournament.k must be a positive number")
        if not _is_number(self.tournament.initial_rating):
            raise ValueError("tournament.initial_rating must be a number")
        if not isinstance(self.logging.log_level, str):
            raise ValueError("logging.log_level must be a string")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def save(self, filepath: str):
        """Save config to JSON file."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        return cls(
            project_name=config_dict.get('project_name', 'Othello-Tournament'),
            seed=config_dict.get('seed', 42),
            board=BoardConfig(**config_dict.get('board', {})),
            match=MatchConfig(**config_dict.get('match', {})),
            tournament=TournamentConfig(**config_dict.get('tournament', {})),
            logging=LoggingConfig(**config_dict.get('logging', {}))
        )

    @classmethod
    def load(cls, filepath: str) -> 'Config':
        """Load config from JSON file."""
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)


def get_default_config() -> Config:
    """Get default configuration."""
    return Config().validate()
