"""Short algebraic notation (SAN-like) for the move list, ex. 'e4', 'Nf3', 'exd5', 'Qxf7#', 'e8=Q+'"""

import math

from src.core.shared_types import Color, PieceType
from src.engine.moves import Move

PIECE_LETTERS: dict[PieceType, str] = {
    PieceType.KING: "K",
    PieceType.QUEEN: "Q",
    PieceType.ROOK: "R",
    PieceType.BISHOP: "B",
    PieceType.KNIGHT: "N",
}


def move_to_algebraic(
    move: Move, is_check: bool = False, is_checkmate: bool = False
) -> str:
    """
    NOTE: no disambiguation when two identical pieces can reach the same square (the move record does not know about the other piece)
    """
    if move.is_castling:
        return "O-O" if move.to_position.x > move.from_position.x else "O-O-O"

    # Piece letter, pawns do not get one
    notation = PIECE_LETTERS.get(move.piece.type, "")

    if move.captured_piece is not None:
        # pawn captures are identified by the file the pawn came from
        if move.piece.type == PieceType.PAWN:
            notation += move.from_position.to_algebraic()[0]
        notation += "x"

    notation += move.to_position.to_algebraic()

    if move.is_promotion and move.promotion_piece is not None:
        notation += f"={PIECE_LETTERS[move.promotion_piece]}"

    if is_checkmate:
        notation += "#"
    elif is_check:
        notation += "+"
    return notation


def format_move_for_display(
    move: Move, move_number: int, is_check: bool = False, is_checkmate: bool = False
) -> str:
    """`move_number` counts half moves starting at 1. White's moves get the full move number in front: '1. e4', 'e5', '2. Nf3'"""
    algebraic = move_to_algebraic(move, is_check, is_checkmate)
    prefix = f"{math.ceil(move_number / 2)}. " if move.piece.color == Color.WHITE else ""
    return f"{prefix}{algebraic}"
