"""
Check / checkmate / stalemate detection and the legal move filter.

Two tiers of move generation:

1. `pseudo_legal_moves()` (src/engine/moves.py): the attack surface of a piece. Only movement rules.
2. `legal_moves()` / `valid_moves(check_for_check=True)`: pseudo-legal moves that do not leave your own king in check.

Check detection only needs tier 1. That is what stops the recursion:
legal moves depend on check detection, check detection never depends on legal moves.
Player-facing move lists should always come from tier 2.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.core.shared_types import Color, GameStatus
from src.engine.board import Board
from src.engine.moves import pseudo_legal_moves
from src.engine.position import Position

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInfo:
    """Derived after every move, never persisted on its own."""

    in_check: bool
    king_position: Optional[Position]

    @classmethod
    def none(cls) -> "CheckInfo":
        return cls(in_check=False, king_position=None)


def valid_moves(board: Board, position: Position, check_for_check: bool = True) -> list[Position]:
    """
    Destinations for the piece on `position`
    ----

    With `check_for_check` disabled this is just the pseudo-legal move set.
    Otherwise, every candidate is played on a copy of the board and dropped if it puts (or leaves) the mover's king in check.
    """
    candidates = pseudo_legal_moves(board, position)
    if not check_for_check or not candidates:
        return candidates

    color = board.piece(position).color
    return [
        target
        for target in candidates
        if not _is_putting_yourself_in_check(board, position, target, color)
    ]


def legal_moves(board: Board, position: Position) -> list[Position]:
    """Public, player-facing move list"""
    return valid_moves(board, position, check_for_check=True)


def _is_putting_yourself_in_check(
    board: Board, from_position: Position, to_position: Position, color: Color
) -> bool:
    """
    plan:
    1. Copy the board
    2. make the candidate move
    3. determine if king is in check on the new board
    """
    speculative = board.clone()
    speculative.move_piece(from_position, to_position)
    return is_in_check(speculative, color)


def is_in_check(board: Board, color: Color) -> bool:
    """Is any opposing piece able to reach the king's square (ignoring king safety of the opponent)?"""
    king_position = board.find_king(color)
    if king_position is None:
        # Should never happen for boards reached through actual play.
        _log.warning("No %s king on the board, treating it as not in check", color)
        return False

    for attacker_position in board.locate_color(color.opponent):
        if king_position in pseudo_legal_moves(board, attacker_position):
            return True
    return False


def has_legal_move(board: Board, color: Color) -> bool:
    """Stops at the first piece that can still move"""
    return any(legal_moves(board, position) for position in board.locate_color(color))


def is_checkmate(board: Board, color: Color) -> bool:
    return is_in_check(board, color) and not has_legal_move(board, color)


def is_stalemate(board: Board, color: Color) -> bool:
    return not is_in_check(board, color) and not has_legal_move(board, color)


def check_info(board: Board, color: Color) -> CheckInfo:
    return CheckInfo(
        in_check=is_in_check(board, color), king_position=board.find_king(color)
    )


def derive_status(board: Board, color: Color) -> GameStatus:
    """Status of the game, seen from the side that has to move next."""
    in_check = is_in_check(board, color)
    can_move = has_legal_move(board, color)
    if in_check and not can_move:
        return GameStatus.CHECKMATE
    if in_check:
        return GameStatus.CHECK
    if not can_move:
        return GameStatus.STALEMATE
    return GameStatus.PLAYING
