"""
Tests for the match driver.
"""
import threading
import time

import pytest

from othello.arena import Match, MatchResult
from othello.config import MatchConfig
from othello.game import Board, Coordinate, PieceState
from othello.players import GreedyPlayer, Player, RandomPlayer

B, W, E = PieceState.BLACK, PieceState.WHITE, PieceState.EMPTY


class CornerPlayer(Player):
    """Always asks for (0, 0), which is never legal from the opening."""

    def make_move(self, board):
        return Coordinate(0, 0)


class CrashingPlayer(Player):
    def make_move(self, board):
        raise RuntimeError("boom")


class TuplePlayer(Player):
    def make_move(self, board):
        return board.get_valid_moves(self.color)[0].row, 0


class MutatingPlayer(Player):
    """Scribbles over the board it is given, then plays the first legal move."""

    def make_move(self, board):
        move = board.get_valid_moves(self.color)[0]
        for r in range(board.width):
            for c in range(board.width):
                board.set(self.color, Coordinate(r, c))
        return move


class SlowFirstMovePlayer(Player):
    """Stalls on its first move, then plays the first legal move."""

    def __init__(self, name, color, delay):
        super().__init__(name, color)
        self.delay = delay
        self.calls = 0

    def make_move(self, board):
        self.calls += 1
        if self.calls == 1:
            time.sleep(self.delay)
            return Coordinate.PASS
        return board.get_valid_moves(self.color)[0]


class TimeoutRaisingPlayer(Player):
    """Fails with its own TimeoutError, well inside any move time limit."""

    def make_move(self, board):
        raise TimeoutError("socket read timed out")


class SlowPlayer(Player):
    """Overruns the time limit on every call and records overlapping calls."""

    def __init__(self, name, color, delay):
        super().__init__(name, color)
        self.delay = delay
        self.lock = threading.Lock()
        self.active = 0
        self.max_active = 0

    def make_move(self, board):
        with self.lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            time.sleep(self.delay)
            return board.get_valid_moves(self.color)[0]
        finally:
            with self.lock:
                self.active -= 1


def check_consistent(result: MatchResult, width: int = 8):
    assert result.black_count + result.white_count <= width * width
    assert result.plies == len(result.moves)
    if result.forfeited_by is None:
        if result.black_count > result.white_count:
            assert result.winner == B
        elif result.white_count > result.black_count:
            assert result.winner == W
        else:
            assert result.winner == E


def test_full_game_between_reference_players():
    match = Match(GreedyPlayer("greedy", B), RandomPlayer("random", W, seed=3))
    result = match.play()

    check_consistent(result)
    assert result.forfeited_by is None
    assert result.reason == "game over"
    assert match.board.is_game_over()
    assert result.black_name == "greedy"
    assert result.white_name == "random"


def test_recorded_moves_replay_legally():
    result = Match(RandomPlayer("a", B, seed=11), RandomPlayer("b", W, seed=12)).play()

    board = Board()
    for color, move in result.moves:
        board.apply_move(color, move)
    assert board.score() == (result.black_count, result.white_count)
    assert board.is_game_over()


def test_small_board_game():
    result = Match(GreedyPlayer("g", B), GreedyPlayer("h", W), board_width=4).play()
    check_consistent(result, width=4)


def test_illegal_reply_forfeits_match():
    result = Match(CornerPlayer("corner", B), RandomPlayer("random", W, seed=0)).play()

    assert result.forfeited_by == B
    assert result.winner == W
    assert result.plies == 0
    assert "(0, 0)" in result.reason
    assert result.score_for(W) == 1.0
    assert result.score_for(B) == 0.0


def test_illegal_reply_skips_ply_under_ply_policy():
    config = MatchConfig(illegal_move_policy="ply", max_forfeited_plies=1)
    result = Match(CornerPlayer("corner", B), GreedyPlayer("greedy", W), config=config).play()

    # Black's first illegal reply is skipped, white plays, black's second one forfeits
    assert result.forfeited_by == B
    assert result.winner == W
    assert result.moves == [(W, Coordinate(2, 4))]


def test_player_exception_forfeits():
    result = Match(RandomPlayer("random", B, seed=0), CrashingPlayer("crash", W)).play()

    assert result.forfeited_by == W
    assert result.winner == B
    assert "boom" in result.reason
    assert result.plies == 1


def test_non_coordinate_reply_forfeits():
    result = Match(TuplePlayer("tuple", B), RandomPlayer("random", W, seed=0)).play()
    assert result.forfeited_by == B
    assert "Coordinate" in result.reason


def test_player_sees_only_a_copy():
    match = Match(MutatingPlayer("vandal", B), RandomPlayer("random", W, seed=0))
    result = match.play()

    check_consistent(result)
    assert result.forfeited_by is None
    assert result.moves[0] == (B, Coordinate(2, 3))


def test_timeout_substitutes_default_move():
    config = MatchConfig(move_time_limit=0.05)
    slow = SlowFirstMovePlayer("slow", B, delay=0.5)
    result = Match(slow, GreedyPlayer("greedy", W), config=config).play()

    assert result.forfeited_by is None
    assert result.moves[0] == (B, Coordinate(2, 3))
    check_consistent(result)


def test_player_raising_timeout_error_forfeits():
    config = MatchConfig(move_time_limit=5.0)
    result = Match(TimeoutRaisingPlayer("flaky", B), GreedyPlayer("greedy", W), config=config).play()

    assert result.forfeited_by == B
    assert result.winner == W
    assert result.plies == 0
    assert "TimeoutError" in result.reason


def test_late_player_is_not_called_again_while_busy():
    config = MatchConfig(move_time_limit=0.02)
    slow = SlowPlayer("slow", B, delay=0.2)
    result = Match(slow, GreedyPlayer("greedy", W), config=config, board_width=4).play()

    assert result.forfeited_by is None
    check_consistent(result, width=4)
    assert slow.max_active == 1


def test_players_must_sit_on_their_colors():
    with pytest.raises(ValueError):
        Match(RandomPlayer("a", W), RandomPlayer("b", B))


def test_draw_scores_half():
    result = MatchResult(black_name="a", white_name="b", winner=E, black_count=32, white_count=32)
    assert result.is_draw
    assert result.score_for(B) == result.score_for(W) == 0.5
