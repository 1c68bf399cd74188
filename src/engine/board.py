"""
The Board holds the configuration of pieces (an 8x8 grid of optional pieces).

The grid is indexed [y][x]: row 0 is black's back rank (8th rank), row 7 white's back rank (1st rank).
The engine treats boards as immutable by convention: speculative moves are always played on a clone.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import InvalidFENError
from src.core.shared_types import Color, PieceType
from src.engine.fen import is_valid_placement
from src.engine.pieces import BACK_RANK, Piece
from src.engine.position import BOARD_DIMENSIONS, Position

_log = logging.getLogger(__name__)

Grid = list[list[Optional[Piece]]]


@dataclass
class Board:
    grid: Grid

    # --- CREATION LOGIC ---
    @classmethod
    def empty(cls) -> Self:
        num_files, num_ranks = BOARD_DIMENSIONS
        return cls([[None] * num_files for _ in range(num_ranks)])

    @classmethod
    def standard(cls) -> Self:
        """Standard starting position: black on rows 0-1, white on rows 6-7"""
        board = cls.empty()
        for x, piece_type in enumerate(BACK_RANK):
            board.grid[0][x] = Piece(piece_type, Color.BLACK)
            board.grid[1][x] = Piece(PieceType.PAWN, Color.BLACK)
            board.grid[6][x] = Piece(PieceType.PAWN, Color.WHITE)
            board.grid[7][x] = Piece(piece_type, Color.WHITE)
        return board

    @classmethod
    def from_fen(cls, placement: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0 of the grid), starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.

        Conveniently, FEN lists the ranks in the same order as the rows of the grid.
        """
        if not is_valid_placement(placement):
            raise InvalidFENError(f"Cannot interpret supplied string as FEN: {placement}")

        board = cls.empty()
        for y, fen_one_rank in enumerate(placement.split("/")):
            x = 0
            for character in fen_one_rank:
                if character.isalpha():
                    # simple case: a letter directly denotes the piece that should be created
                    board.grid[y][x] = Piece.from_fen(character)
                    x += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    x += int(character)
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in self.grid)

    def _row_to_fen(self, row: list[Optional[Piece]]) -> str:
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def clone(self) -> Self:
        """Deep value copy. Pieces are frozen values, so copying every row is enough to make the clone independent."""
        return type(self)([list(row) for row in self.grid])

    # --- QUERIES ---
    def piece(self, position: Position) -> Optional[Piece]:
        """Off-board positions simply hold nothing"""
        if not position.is_within_bounds():
            return None
        return self.grid[position.y][position.x]

    def is_empty(self, position: Position) -> bool:
        return self.piece(position) is None

    def locate_color(self, color: Color) -> list[Position]:
        return [
            Position(x, y)
            for y, row in enumerate(self.grid)
            for x, piece in enumerate(row)
            if piece is not None and piece.color == color
        ]

    def find_king(self, color: Color) -> Optional[Position]:
        for position in self.locate_color(color):
            piece = self.piece(position)
            if piece is not None and piece.type == PieceType.KING:
                return position
        return None

    # --- UPDATES ---
    def place_piece(self, piece: Piece, position: Position) -> None:
        self.grid[position.y][position.x] = piece

    def remove_piece(self, position: Position) -> None:
        self.grid[position.y][position.x] = None

    def move_piece(self, from_position: Position, to_position: Position) -> Optional[Piece]:
        """Move whatever stands on `from_position` and return the piece that got captured (if any)."""
        piece_that_moved = self.piece(from_position)
        if piece_that_moved is None:
            _log.debug("No piece to move on %s", from_position.to_algebraic())
            return None

        captured = self.piece(to_position)
        self.remove_piece(from_position)
        self.place_piece(piece_that_moved.moved(), to_position)
        return captured

    def promote_piece(self, position: Position, to: PieceType) -> None:
        """Only pawns get promoted. Anything else on the square is left untouched."""
        piece = self.piece(position)
        if piece is None or piece.type != PieceType.PAWN:
            return
        self.place_piece(piece.promoted_to(to), position)
