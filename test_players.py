"""
Tests for the player contract and the reference players.
"""
import pytest

from othello.game import Board, Coordinate, PieceState
from othello.players import GreedyPlayer, Player, RandomPlayer

B, W = PieceState.BLACK, PieceState.WHITE


def midgame_board() -> Board:
    board = Board()
    for color, move in [(B, Coordinate(2, 3)), (W, Coordinate(2, 2)), (B, Coordinate(3, 2)),
                        (W, Coordinate(2, 4))]:
        board.apply_move(color, move)
    return board


def test_player_is_abstract():
    with pytest.raises(TypeError):
        Player("nobody", B)


def test_player_color_must_be_playable():
    with pytest.raises(ValueError):
        RandomPlayer("empty", PieceState.EMPTY)


def test_player_properties():
    player = GreedyPlayer("greedy", W)
    assert player.name == "greedy"
    assert player.color is W
    assert "GreedyPlayer" in repr(player)


@pytest.mark.parametrize("player_cls", [RandomPlayer, GreedyPlayer])
def test_returns_legal_move_without_mutating(player_cls):
    board = midgame_board()
    before = board.copy()

    for color in (B, W):
        player = player_cls("p", color)
        move = player.make_move(board)
        assert move in board.get_valid_moves(color)

    assert board == before


@pytest.mark.parametrize("player_cls", [RandomPlayer, GreedyPlayer])
def test_passes_without_legal_moves(player_cls):
    board = Board.from_rows(["B......."] + ["........"] * 7)
    assert player_cls("p", W).make_move(board) == Coordinate.PASS


def test_random_player_seed_is_reproducible():
    board = midgame_board()
    first = [RandomPlayer("a", B, seed=7).make_move(board) for _ in range(5)]
    second = [RandomPlayer("b", B, seed=7).make_move(board) for _ in range(5)]
    assert first == second


def test_random_player_covers_moves():
    board = Board()
    player = RandomPlayer("r", B, seed=0)
    seen = {player.make_move(board) for _ in range(200)}
    assert seen == set(board.get_valid_moves(B))


def test_greedy_player_maximises_own_pieces():
    board = midgame_board()
    player = GreedyPlayer("g", B)

    counts = {}
    for move in board.get_valid_moves(B):
        sandbox = board.copy()
        sandbox.apply_move(B, move)
        counts[move] = sandbox.count_pieces(B)
    best = max(counts.values())
    expected = min(move for move, count in counts.items() if count == best)

    assert player.make_move(board) == expected


def test_greedy_player_prefers_bigger_capture():
    # (0, 7) flips six pieces, (1, 0) flips one
    rows = [
        "BWWWWWW.",
        ".WB.....",
        "........",
        "........",
        "........",
        "........",
        "........",
        "........",
    ]
    board = Board.from_rows(rows)
    assert Coordinate(1, 0) in board.get_valid_moves(B)
    assert GreedyPlayer("g", B).make_move(board) == Coordinate(0, 7)
