"""
Type definitions used across layers

The values double as the wire format of persisted snapshots and API payloads.
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    ROOK = "rook"
    KNIGHT = "knight"
    BISHOP = "bishop"
    QUEEN = "queen"
    KING = "king"


class GameStatus(StrEnum):
    PLAYING = "playing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    # NOTE: nothing inside the engine produces a draw (no repetition / 50 move rule yet). Only set by an external override.
    DRAW = "draw"


# Game can still be played in these states, every other status is terminal
ACTIVE_STATUSES: frozenset[GameStatus] = frozenset(
    {GameStatus.PLAYING, GameStatus.CHECK}
)
