"""Unit tests for /src/engine/rules.py"""

import logging

import pytest

from src.engine.board import Board
from src.engine.moves import pseudo_legal_moves
from src.engine.rules import (
    CheckInfo,
    Color,
    GameStatus,
    Position,
    check_info,
    derive_status,
    has_legal_move,
    is_checkmate,
    is_in_check,
    is_stalemate,
    legal_moves,
    valid_moves,
)

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR"
BACK_RANK_MATE = "R5k1/5ppp/8/8/8/8/8/6K1"
STALEMATE = "7k/5Q2/6K1/8/8/8/8/8"
PINNED_BISHOP = "4r1k1/8/8/8/8/8/4B3/4K3"

# positions with pieces of both colors all over the place
MIXED_POSITIONS = [
    "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR",
    "2kr1b1r/p1p1pppp/2p2n2/3q2B1/6Q1/2NP4/PPP2PPP/R4RK1",
    "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1",
    PINNED_BISHOP,
    FOOLS_MATE,
]


def sq(name: str) -> Position:
    return Position.from_algebraic(name)


# -- LEGAL MOVE FILTER ---
def test_pinned_piece_cannot_move() -> None:
    """The bishop on e2 shields its king from the rook on e8: every bishop move would expose the king"""
    board = Board.from_fen(PINNED_BISHOP)
    assert pseudo_legal_moves(board, sq("e2")) != []
    assert legal_moves(board, sq("e2")) == []


def test_check_for_check_flag() -> None:
    """Without the filter, valid_moves is just the pseudo-legal move set"""
    board = Board.from_fen(PINNED_BISHOP)
    assert valid_moves(board, sq("e2"), check_for_check=False) == pseudo_legal_moves(board, sq("e2"))
    assert valid_moves(board, sq("e2")) == []


def test_king_cannot_walk_into_check() -> None:
    """Rook on the 2nd rank covers d2, e2 and f2"""
    board = Board.from_fen("k7/8/8/8/8/8/r7/4K3")
    assert set(legal_moves(board, sq("e1"))) == {sq("d1"), sq("f1")}


def test_king_cannot_hide_behind_itself() -> None:
    """Stepping away along the line of the attack is still check (the king no longer blocks the ray once it moved)"""
    board = Board.from_fen(BACK_RANK_MATE)
    assert sq("h8") in pseudo_legal_moves(board, sq("g8"))
    assert sq("h8") not in legal_moves(board, sq("g8"))


def test_capturing_the_attacker_resolves_check() -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/4q3/4K3")
    assert is_in_check(board, Color.WHITE)
    # queen on e2 is protected by nothing: king takes it
    assert legal_moves(board, sq("e1")) == [sq("e2")]


def test_filter_does_not_touch_the_board() -> None:
    board = Board.from_fen(PINNED_BISHOP)
    legal_moves(board, sq("e1"))
    legal_moves(board, sq("e2"))
    assert board.to_fen() == PINNED_BISHOP


@pytest.mark.parametrize("position", [Position(9, 9), sq("e4")])
def test_no_legal_moves_from_empty_or_off_board(position: Position) -> None:
    assert legal_moves(Board.standard(), position) == []


@pytest.mark.parametrize("placement", MIXED_POSITIONS)
def test_legal_moves_never_leave_own_king_in_check(placement: str) -> None:
    board = Board.from_fen(placement)
    for color in Color:
        for origin in board.locate_color(color):
            for target in legal_moves(board, origin):
                after = board.clone()
                after.move_piece(origin, target)
                assert not is_in_check(after, color), f"{origin.to_algebraic()}{target.to_algebraic()}"


# -- CHECK ---
def test_no_check_in_starting_position() -> None:
    board = Board.standard()
    assert not is_in_check(board, Color.WHITE)
    assert not is_in_check(board, Color.BLACK)


def test_rook_gives_check_along_the_rank() -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/8/4K2r")
    assert is_in_check(board, Color.WHITE)
    assert not is_in_check(board, Color.BLACK)


def test_blocked_attack_is_no_check() -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/8/4KB1r")
    assert not is_in_check(board, Color.WHITE)


def test_pawn_gives_check_diagonally_only() -> None:
    diagonal = Board.from_fen("4k3/8/8/8/8/8/3p4/4K3")
    assert is_in_check(diagonal, Color.WHITE)
    straight = Board.from_fen("4k3/8/8/8/8/8/4p3/4K3")
    assert not is_in_check(straight, Color.WHITE)


@pytest.mark.parametrize("placement", MIXED_POSITIONS)
def test_check_means_an_attacker_reaches_the_king(placement: str) -> None:
    """In check <=> some opposing piece's pseudo-legal move set contains the king's square"""
    board = Board.from_fen(placement)
    for color in Color:
        king = board.find_king(color)
        attacked = any(
            king in pseudo_legal_moves(board, attacker)
            for attacker in board.locate_color(color.opponent)
        )
        assert is_in_check(board, color) == attacked


def test_missing_king_is_not_in_check(caplog: pytest.LogCaptureFixture) -> None:
    """Unreachable in normal play: default to 'not in check', but leave a trace in the logs"""
    board = Board.from_fen("4k3/8/8/8/8/8/8/R7")
    with caplog.at_level(logging.WARNING, logger="src.engine.rules"):
        assert not is_in_check(board, Color.WHITE)
    assert "No white king" in caplog.text


def test_check_info() -> None:
    board = Board.from_fen(FOOLS_MATE)
    assert check_info(board, Color.WHITE) == CheckInfo(in_check=True, king_position=sq("e1"))
    assert check_info(board, Color.BLACK) == CheckInfo(in_check=False, king_position=sq("e8"))
    assert CheckInfo.none() == CheckInfo(in_check=False, king_position=None)


# -- CHECKMATE / STALEMATE ---
def test_fools_mate_is_checkmate() -> None:
    board = Board.from_fen(FOOLS_MATE)
    assert is_checkmate(board, Color.WHITE)
    assert not is_stalemate(board, Color.WHITE)
    assert not has_legal_move(board, Color.WHITE)


def test_back_rank_mate() -> None:
    board = Board.from_fen(BACK_RANK_MATE)
    assert is_checkmate(board, Color.BLACK)


def test_check_is_not_always_mate() -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/8/4K2r")
    assert is_in_check(board, Color.WHITE)
    assert not is_checkmate(board, Color.WHITE)


def test_stalemate() -> None:
    board = Board.from_fen(STALEMATE)
    assert is_stalemate(board, Color.BLACK)
    assert not is_checkmate(board, Color.BLACK)
    assert not is_in_check(board, Color.BLACK)


def test_starting_position_is_neither() -> None:
    board = Board.standard()
    for color in Color:
        assert not is_checkmate(board, color)
        assert not is_stalemate(board, color)


@pytest.mark.parametrize("placement", MIXED_POSITIONS + [BACK_RANK_MATE, STALEMATE])
def test_terminal_states_follow_from_legal_moves(placement: str) -> None:
    """checkmate = check + no legal moves, stalemate = no check + no legal moves"""
    board = Board.from_fen(placement)
    for color in Color:
        no_moves = all(legal_moves(board, origin) == [] for origin in board.locate_color(color))
        in_check = is_in_check(board, color)
        assert is_checkmate(board, color) == (in_check and no_moves)
        assert is_stalemate(board, color) == (not in_check and no_moves)


@pytest.mark.parametrize(
    "placement, color, status",
    [
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR", Color.WHITE, GameStatus.PLAYING),
        ("4k3/8/8/8/8/8/8/4K2r", Color.WHITE, GameStatus.CHECK),
        (FOOLS_MATE, Color.WHITE, GameStatus.CHECKMATE),
        (STALEMATE, Color.BLACK, GameStatus.STALEMATE),
    ],
)
def test_derive_status(placement: str, color: Color, status: GameStatus) -> None:
    assert derive_status(Board.from_fen(placement), color) == status
