"""
FEN piece placement.

Only the first field of a FEN string is supported (the configuration of pieces on the board).
Turn order, castling rights and clocks are owned by the GameState instead.
"""

from src.engine.pieces import FEN_TO_PIECE
from src.engine.position import BOARD_DIMENSIONS


def is_valid_placement(placement: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_files, num_ranks = BOARD_DIMENSIONS
    rank_fens = placement.split("/")
    if len(rank_fens) != num_ranks:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            # make sure every character is valid
            if character.isdigit():
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if file_count != num_files:
            return False
    return True
