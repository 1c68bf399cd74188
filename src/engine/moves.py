"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the (pseudo-legal) move sets for each piece type.

Moves generated here only follow the movement shape of a piece. They are NOT checked for
king safety: that is the job of src/engine/rules.py, which builds the legal move set on top of this one.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from src.core.shared_types import Color, PieceType
from src.engine.pieces import PIECE_TO_FEN, Piece
from src.engine.position import BOARD_DIMENSIONS, Position


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, position: Position) -> Optional[Piece]: ...


Vector = tuple[int, int]

# White moves UP the board (towards row 0), black moves DOWN (towards row 7)
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_HOME_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: BOARD_DIMENSIONS[1] - 1}

STRAIGHTS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (1, 2),
    (2, 1),
    (2, -1),
    (1, -2),
    (-1, -2),
    (-2, -1),
    (-2, 1),
    (-1, 2),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


@dataclass
class Move:
    """
    Record of a move that has been played. Gets appended to the history of the game.

    `piece` is the snapshot of the moving piece BEFORE the move was made.
    Only `promotion_piece` is ever filled in afterwards (once the player picked a piece to promote into).

    NOTE: castling and en passant are not generated (yet), the flags are reserved for when they are.
    """

    from_position: Position
    to_position: Position
    piece: Piece
    captured_piece: Optional[Piece] = None
    is_promotion: bool = False
    promotion_piece: Optional[PieceType] = None
    is_castling: bool = False
    is_en_passant: bool = False

    def to_uci(self) -> str:
        """Coordinate notation, ex. 'e2e4' or 'e7e8q'"""
        piece_char = PIECE_TO_FEN[self.promotion_piece] if self.promotion_piece else ""
        return f"{self.from_position.to_algebraic()}{self.to_position.to_algebraic()}{piece_char}"


# --- MOVEMENT RULES ---
def raycasting_move(position: Position, board: Board, directions: list[Vector]) -> list[Position]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board. An enemy piece blocking the ray can be captured, a friendly one can not.
    """
    player_color = board.piece(position).color

    targets: list[Position] = []
    for dx, dy in directions:
        target = position.offset(dx, dy)
        while target.is_within_bounds():
            blocker = board.piece(target)
            if blocker is not None:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if blocker.color != player_color:
                    targets.append(target)
                break

            targets.append(target)
            target = target.offset(dx, dy)
    return targets


def single_step_move(position: Position, board: Board, deltas: list[Vector]) -> list[Position]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump a single step along a direction"""
    player_color = board.piece(position).color

    targets: list[Position] = []
    for dx, dy in deltas:
        target = position.offset(dx, dy)
        if not target.is_within_bounds():
            continue

        occupant = board.piece(target)
        if occupant is None or occupant.color != player_color:
            targets.append(target)
    return targets


def candidate_pawn_moves(position: Position, board: Board) -> list[Position]:
    """
    A pawn:
    - moves by a single square forward, only onto an empty square.
    - It can move by two in their first move (so when on their home row), if both squares are empty
    - takes diagonally, but only when there is an opponent's piece to take

    NOTE: En passant is not supported
    """
    color = board.piece(position).color
    direction = PAWN_DIRECTION[color]

    targets: list[Position] = []
    forward = position.offset(0, direction)
    if forward.is_within_bounds() and board.piece(forward) is None:
        targets.append(forward)

        two_forward = position.offset(0, 2 * direction)
        on_home_row = position.y == PAWN_HOME_ROW[color]
        if on_home_row and two_forward.is_within_bounds() and board.piece(two_forward) is None:
            targets.append(two_forward)

    for dx in (-1, 1):
        diagonal = position.offset(dx, direction)
        if not diagonal.is_within_bounds():
            continue
        occupant = board.piece(diagonal)
        if occupant is not None and occupant.color != color:
            targets.append(diagonal)
    return targets


def candidate_knight_moves(position: Position, board: Board) -> list[Position]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(position, board, KNIGHT_DELTAS)


def candidate_bishop_moves(position: Position, board: Board) -> list[Position]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(position, board, DIAGONALS)


def candidate_rook_moves(position: Position, board: Board) -> list[Position]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(position, board, STRAIGHTS)


def candidate_queen_moves(position: Position, board: Board) -> list[Position]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return candidate_rook_moves(position, board) + candidate_bishop_moves(position, board)


def candidate_king_moves(position: Position, board: Board) -> list[Position]:
    """
    The king can move by a single square at the time.

    NOTE: no castling.
    """
    return single_step_move(position, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Position, Board], list[Position]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def pseudo_legal_moves(board: Board, position: Position) -> list[Position]:
    """
    The 'attack surface' of the piece standing on the given position.
    ---

    Follows the movement rules only, king safety is ignored.
    Empty or off-board positions have no moves at all.
    """
    if not position.is_within_bounds():
        return []
    piece = board.piece(position)
    if piece is None:
        return []
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(position, board)


# -- PAWN PROMOTION --
def is_promotion_square(piece: Piece, to_position: Position) -> bool:
    """A pawn reaching the opponent's back rank must promote"""
    return piece.type == PieceType.PAWN and to_position.y == PROMOTION_ROW[piece.color]
