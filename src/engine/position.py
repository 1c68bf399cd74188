"""
A position (square) on the board

(placed in its own module as multiple other modules need to import it)

Coordinates follow the layout of the board grid: x is the file index (a-file = 0),
y is the row index counted from black's side (row 0 = 8th rank, row 7 = 1st rank).
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Position:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        x = ord(sq[0]) - ord("a")
        y = BOARD_DIMENSIONS[1] - int(sq[1:])
        return cls(x, y)

    def to_algebraic(self) -> str:
        return f"{chr(self.x + ord('a'))}{BOARD_DIMENSIONS[1] - self.y}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_DIMENSIONS[0]) and (0 <= self.y < BOARD_DIMENSIONS[1])

    def offset(self, dx: int, dy: int) -> Position:
        """NOTE: result can be off the board, check with is_within_bounds()"""
        return Position(self.x + dx, self.y + dy)
