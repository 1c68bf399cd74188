"""Requests and Response models"""

from typing import Any, Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.room_id import is_valid_room_id, normalize_room_id
from src.core.shared_types import Color, GameStatus, PieceType

AlgebraicSquare = str


def _validate_room_id(value: str) -> str:
    room_id = normalize_room_id(value)
    if not is_valid_room_id(room_id):
        raise InvalidRequestError(
            f"Room id must be 6 letters / digits, got: {value!r}"
        )
    return room_id


def _validate_square(value: str) -> str:
    def _is_algebraic_notation(value: str) -> bool:
        if len(value) != 2:
            return False

        file_character, rank_character = value[0], value[1]
        return file_character in "abcdefgh" and rank_character in "12345678"

    square = value.strip().lower()
    if not _is_algebraic_notation(square):
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
    return square


# --- REQUEST MODELS ---
class RoomRequest(BaseModel):
    """Anything addressed to an existing room"""

    room_id: str

    @field_validator("room_id")
    @classmethod
    def validate_room_id(cls, value: str) -> str:
        return _validate_room_id(value)


class CreateGameRequest(BaseModel):
    # A room id gets generated if none was requested
    room_id: Optional[str] = None

    @field_validator("room_id")
    @classmethod
    def validate_room_id(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return _validate_room_id(value)


class GetGameRequest(RoomRequest):
    pass


class DeleteGameRequest(RoomRequest):
    pass


class RestartRequest(RoomRequest):
    pass


class LegalMovesRequest(RoomRequest):
    square: AlgebraicSquare

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class MoveRequest(RoomRequest):
    from_square: AlgebraicSquare
    to_square: AlgebraicSquare
    # Optional: the piece to promote into, when the move reaches the back rank
    promote_to: Optional[PieceType] = None

    @field_validator("from_square", "to_square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class PromotionRequest(RoomRequest):
    square: AlgebraicSquare
    piece_type: PieceType

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    room_id: str
    board: list[list[Optional[dict[str, Any]]]]
    current_player: Color
    game_status: GameStatus
    history: list[dict[str, Any]]
    move_list: list[str]
    timers: dict[str, Any]
    in_check: bool
    king_square: Optional[AlgebraicSquare]
    pending_promotion: Optional[AlgebraicSquare]
    winner: Optional[Color]


class LegalMovesResponse(BaseModel):
    room_id: str
    square: AlgebraicSquare
    legal_moves: list[AlgebraicSquare]
