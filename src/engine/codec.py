"""
Plain structural encoding of boards, move history and timers.

This is the contract with anything that persists or transmits a game: nested lists / dicts of primitives,
camelCase keys (same shape the browser client stores).

Decoding is a validated step:
* `parse_*` raises a DecodeError when the payload does not have the expected shape.
* `decode_*` never raises: malformed data is replaced by a fresh standard board, an empty history or default timers.
"""

import logging
from typing import Annotated, Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from src.core.exceptions import DecodeError
from src.core.shared_types import Color, GameStatus, PieceType
from src.engine.board import Board
from src.engine.moves import Move
from src.engine.pieces import Piece
from src.engine.position import BOARD_DIMENSIONS, Position
from src.engine.timers import PlayerTimers

_log = logging.getLogger(__name__)

NUM_FILES, NUM_RANKS = BOARD_DIMENSIONS

T = TypeVar("T")


# --- RECORDS (shape of the payloads) ---
class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class PieceRecord(_Record):
    type: PieceType
    color: Color
    has_moved: bool = False

    @classmethod
    def from_piece(cls, piece: Piece) -> "PieceRecord":
        return cls(type=piece.type, color=piece.color, has_moved=piece.has_moved)

    def to_piece(self) -> Piece:
        return Piece(self.type, self.color, self.has_moved)


class PositionRecord(_Record):
    x: int = Field(ge=0, lt=NUM_FILES)
    y: int = Field(ge=0, lt=NUM_RANKS)

    @classmethod
    def from_position(cls, position: Position) -> "PositionRecord":
        return cls(x=position.x, y=position.y)

    def to_position(self) -> Position:
        return Position(self.x, self.y)


class MoveRecord(_Record):
    from_: PositionRecord = Field(alias="from")
    to: PositionRecord
    piece: PieceRecord
    captured_piece: Optional[PieceRecord] = None
    is_promotion: bool = False
    promotion_piece: Optional[PieceType] = None
    is_castling: bool = False
    is_en_passant: bool = False

    @classmethod
    def from_move(cls, move: Move) -> "MoveRecord":
        return cls(
            from_=PositionRecord.from_position(move.from_position),
            to=PositionRecord.from_position(move.to_position),
            piece=PieceRecord.from_piece(move.piece),
            captured_piece=(
                PieceRecord.from_piece(move.captured_piece)
                if move.captured_piece is not None
                else None
            ),
            is_promotion=move.is_promotion,
            promotion_piece=move.promotion_piece,
            is_castling=move.is_castling,
            is_en_passant=move.is_en_passant,
        )

    def to_move(self) -> Move:
        return Move(
            from_position=self.from_.to_position(),
            to_position=self.to.to_position(),
            piece=self.piece.to_piece(),
            captured_piece=(
                self.captured_piece.to_piece()
                if self.captured_piece is not None
                else None
            ),
            is_promotion=self.is_promotion,
            promotion_piece=self.promotion_piece,
            is_castling=self.is_castling,
            is_en_passant=self.is_en_passant,
        )


class TimersRecord(_Record):
    white: int = Field(ge=0)
    black: int = Field(ge=0)
    start_time: Optional[float] = None


RowRecord = Annotated[
    list[Optional[PieceRecord]], Field(min_length=NUM_FILES, max_length=NUM_FILES)
]
BoardRecord = Annotated[
    list[RowRecord], Field(min_length=NUM_RANKS, max_length=NUM_RANKS)
]

BOARD_ADAPTER: TypeAdapter[list[list[Optional[PieceRecord]]]] = TypeAdapter(BoardRecord)
HISTORY_ADAPTER: TypeAdapter[list[MoveRecord]] = TypeAdapter(list[MoveRecord])
TIMERS_ADAPTER: TypeAdapter[TimersRecord] = TypeAdapter(TimersRecord)


def _dump(record: BaseModel) -> dict[str, Any]:
    """Leave out defaults: an unmoved piece is just {"type": ..., "color": ...}"""
    return record.model_dump(mode="json", by_alias=True, exclude_defaults=True)


def _validate(adapter: TypeAdapter[T], raw: Any, what: str) -> T:
    """Payloads may arrive as already-decoded structures or as JSON text"""
    try:
        if isinstance(raw, (str, bytes, bytearray)):
            return adapter.validate_json(raw)
        return adapter.validate_python(raw)
    except ValidationError as exc:
        raise DecodeError(
            f"Malformed {what} payload ({exc.error_count()} errors): {exc}"
        ) from exc


# --- BOARD ---
def encode_board(board: Board) -> list[list[Optional[dict[str, Any]]]]:
    return [
        [_dump(PieceRecord.from_piece(piece)) if piece is not None else None for piece in row]
        for row in board.grid
    ]


def parse_board(raw: Any) -> Board:
    rows = _validate(BOARD_ADAPTER, raw, "board")
    return Board(
        [[record.to_piece() if record is not None else None for record in row] for row in rows]
    )


def decode_board(raw: Any) -> Board:
    try:
        return parse_board(raw)
    except DecodeError as exc:
        _log.warning("Falling back to the standard starting board. %s", exc)
        return Board.standard()


# --- HISTORY ---
def encode_history(history: list[Move]) -> list[dict[str, Any]]:
    return [_dump(MoveRecord.from_move(move)) for move in history]


def parse_history(raw: Any) -> list[Move]:
    return [record.to_move() for record in _validate(HISTORY_ADAPTER, raw, "history")]


def decode_history(raw: Any) -> list[Move]:
    try:
        return parse_history(raw)
    except DecodeError as exc:
        _log.warning("Falling back to an empty move history. %s", exc)
        return []


# --- TIMERS ---
def encode_timers(timers: PlayerTimers) -> dict[str, Any]:
    record = TimersRecord(
        white=timers.white, black=timers.black, start_time=timers.start_time
    )
    # NOTE: keep startTime, even when null, so the payload always has all three keys
    return record.model_dump(mode="json", by_alias=True)


def parse_timers(raw: Any) -> PlayerTimers:
    if raw is None:
        raise DecodeError("Missing timers payload")
    record = _validate(TIMERS_ADAPTER, raw, "timers")
    return PlayerTimers(record.white, record.black, record.start_time)


def decode_timers(raw: Any) -> PlayerTimers:
    try:
        return parse_timers(raw)
    except DecodeError as exc:
        _log.warning("Falling back to default timers. %s", exc)
        return PlayerTimers.default()


# --- SCALARS ---
def decode_color(raw: Any, default: Color = Color.WHITE) -> Color:
    try:
        return Color(raw)
    except ValueError:
        _log.warning("Unknown color %r, using %s", raw, default)
        return default


def decode_status(raw: Any, default: GameStatus = GameStatus.PLAYING) -> GameStatus:
    try:
        return GameStatus(raw)
    except ValueError:
        _log.warning("Unknown game status %r, using %s", raw, default)
        return default
