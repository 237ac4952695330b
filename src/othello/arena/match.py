"""
Match driver: plays one game of Othello between two players.
"""
import logging
import weakref
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..config import MatchConfig
from ..game import Board, Coordinate, OthelloError, PieceState
from ..players import Player

logger = logging.getLogger(__name__)

# make_move calls that outlived their time limit, by player. Shared across
# matches because the arena reuses player objects.
_pending_calls: "weakref.WeakKeyDictionary[Player, Future]" = weakref.WeakKeyDictionary()


@dataclass
class MatchResult:
    """Outcome of a finished match."""
    black_name: str
    white_name: str
    winner: PieceState  # EMPTY for a draw
    black_count: int
    white_count: int
    plies: int = 0
    passes: int = 0
    forfeited_by: Optional[PieceState] = None
    reason: str = "game over"
    moves: List[Tuple[PieceState, Coordinate]] = field(default_factory=list)

    @property
    def is_draw(self) -> bool:
        return self.winner is PieceState.EMPTY

    def score_for(self, color: PieceState) -> float:
        """1.0 for a win, 0.5 for a draw, 0.0 for a loss."""
        if self.is_draw:
            return 0.5
        return 1.0 if self.winner == color else 0.0

    def name_of(self, color: PieceState) -> str:
        return self.black_name if color == PieceState.BLACK else self.white_name


class Match:
    """
    Alternates turns between two players on a board it owns.

    Black moves first. A side with no legal moves passes without being
    asked. Each player only ever sees a copy of the board, so a misbehaving
    player cannot corrupt the game.
    """

    def __init__(self, black: Player, white: Player, config: Optional[MatchConfig] = None,
                 board_width: int = 8):
        """
        Args:
            black: Player holding the black pieces
            white: Player holding the white pieces
            config: Time limit and illegal-move policy (default: MatchConfig())
            board_width: Side length of the board
        """
        if black.color != PieceState.BLACK or white.color != PieceState.WHITE:
            raise ValueError(
                f"Players are seated on the wrong colors: {black!r} as black, {white!r} as white"
            )
        self.players: Dict[PieceState, Player] = {PieceState.BLACK: black, PieceState.WHITE: white}
        self.config = config or MatchConfig()
        self.board = Board(board_width)
        self.moves: List[Tuple[PieceState, Coordinate]] = []
        self.passes = 0
        self.forfeited_plies = {PieceState.BLACK: 0, PieceState.WHITE: 0}

    def play(self) -> MatchResult:
        """
        Play the game to the end.

        Returns:
            MatchResult describing the final position, or the forfeit
        """
        black, white = self.players[PieceState.BLACK], self.players[PieceState.WHITE]
        logger.info("Starting match: %s (Black) vs %s (White)", black.name, white.name)

        color = PieceState.BLACK
        while not self.board.is_game_over():
            player = self.players[color]

            if self.board.count_valid_moves(color) == 0:
                self.passes += 1
                logger.debug("%s has no legal moves and passes", player.name)
                color = color.opponent
                continue

            move, problem = self._request_move(player)
            if problem is None:
                try:
                    flips = self.board.apply_move(color, move)
                except OthelloError as e:
                    problem = str(e)
                else:
                    self.moves.append((color, move))
                    logger.debug("%s plays %s, flipping %d", player.name, move, len(flips))

            if problem is not None:
                logger.warning("Illegal reply from %s: %s", player.name, problem)
                self.forfeited_plies[color] += 1
                if (self.config.illegal_move_policy == "match"
                        or self.forfeited_plies[color] > self.config.max_forfeited_plies):
                    return self._finish(forfeited_by=color, reason=problem)

            color = color.opponent

        return self._finish()

    def _request_move(self, player: Player) -> Tuple[Optional[Coordinate], Optional[str]]:
        """
        Ask ``player`` for a move on a copy of the board.

        Returns:
            (move, None) on a well-formed reply, (None, reason) otherwise
        """
        snapshot = self.board.copy()
        limit = self.config.move_time_limit

        if limit is None:
            try:
                move = player.make_move(snapshot)
            except Exception as e:
                logger.exception("%s raised while choosing a move", player.name)
                return None, f"make_move raised {e!r}"
        else:
            pending = _pending_calls.get(player)
            if pending is not None and not pending.done():
                # Never run two make_move calls on one player at the same time
                move = self.board.get_valid_moves(player.color)[0]
                logger.warning("%s is still thinking about an earlier ply; playing default move %s",
                               player.name, move)
                return move, None

            executor = ThreadPoolExecutor(max_workers=1)
            future = executor.submit(player.make_move, snapshot)
            # A timed-out worker cannot be interrupted; its result is discarded.
            executor.shutdown(wait=False)
            wait([future], timeout=limit)

            if not future.done():
                _pending_calls[player] = future
                move = self.board.get_valid_moves(player.color)[0]
                logger.warning("%s exceeded %.3fs; playing default move %s",
                               player.name, limit, move)
            else:
                try:
                    move = future.result()
                except Exception as e:
                    logger.exception("%s raised while choosing a move", player.name)
                    return None, f"make_move raised {e!r}"

        if not isinstance(move, Coordinate):
            return None, f"expected a Coordinate, got {move!r}"
        if move.is_pass:
            return None, "passed while legal moves were available"
        return move, None

    def _finish(self, forfeited_by: Optional[PieceState] = None, reason: str = "game over") -> MatchResult:
        black_count, white_count = self.board.score()
        if forfeited_by is not None:
            winner = forfeited_by.opponent
        else:
            winner = self.board.winner()

        result = MatchResult(
            black_name=self.players[PieceState.BLACK].name,
            white_name=self.players[PieceState.WHITE].name,
            winner=winner,
            black_count=black_count,
            white_count=white_count,
            plies=len(self.moves),
            passes=self.passes,
            forfeited_by=forfeited_by,
            reason=reason,
            moves=list(self.moves),
        )

        if result.is_draw:
            logger.info("Match drawn %d-%d", black_count, white_count)
        else:
            logger.info("%s (%s) wins %d-%d (%s)", result.name_of(winner), winner,
                        black_count, white_count, reason)
        return result
