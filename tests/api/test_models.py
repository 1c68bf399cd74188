import pytest
from pydantic import ValidationError

from src.api.models import (
    CreateGameRequest,
    GetGameRequest,
    LegalMovesRequest,
    MoveRequest,
    PromotionRequest,
)
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import PieceType


# -- Validation - room ids --
@pytest.mark.parametrize("room_id, expected", [("ABC123", "ABC123"), (" abc123 ", "ABC123")])
def test_room_id_is_normalized(room_id: str, expected: str) -> None:
    """Whatever the user typed gets upper cased and stripped before it reaches the service."""
    assert GetGameRequest(room_id=room_id).room_id == expected


@pytest.mark.parametrize(
    "room_id",
    [
        "ABC12",  # too short
        "ABC1234",  # too long
        "ABC-12",  # not alphanumeric
        "",
    ],
)
def test_invalid_room_id(room_id: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = GetGameRequest(room_id=room_id)


def test_room_id_is_optional_when_creating() -> None:
    """Should be able to not supply a room id, and validator just returns None."""
    assert CreateGameRequest().room_id is None
    assert CreateGameRequest(room_id=None).room_id is None
    assert CreateGameRequest(room_id="   ").room_id is None
    assert CreateGameRequest(room_id="xyz789").room_id == "XYZ789"


def test_invalid_room_id_when_creating() -> None:
    with pytest.raises(InvalidRequestError):
        _ = CreateGameRequest(room_id="lobby")


# -- Validation - MoveRequest --
def test_valid_square_names() -> None:
    """Test that MoveRequest accepts correctly written squares in algebraic notation."""
    request = MoveRequest(room_id="ABC123", from_square="e2", to_square="E4")
    assert request.from_square == "e2"
    assert request.to_square == "e4"
    assert request.promote_to is None


@pytest.mark.parametrize(
    "square",
    [
        "nonsense",  # anything more than two characters.
        "11",  # First character is not a letter
        "aa",  # second character is not a number
        "i1",  # off the board
        "a9",  # off the board
    ],
)
def test_invalid_from_square(square: str) -> None:
    """Test that an exception is raised when using invalid square name."""
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(room_id="ABC123", from_square=square, to_square="e2")


@pytest.mark.parametrize("square", ["nonsense", "11", "aa"])
def test_invalid_to_square(square: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(room_id="ABC123", from_square="e2", to_square=square)


def test_move_with_promotion() -> None:
    request = MoveRequest(room_id="ABC123", from_square="e7", to_square="e8", promote_to="queen")
    assert request.promote_to == PieceType.QUEEN


def test_unknown_promotion_piece() -> None:
    with pytest.raises(ValidationError):
        _ = MoveRequest(room_id="ABC123", from_square="e7", to_square="e8", promote_to="dragon")


# -- Validation - other requests --
def test_legal_moves_request() -> None:
    assert LegalMovesRequest(room_id="ABC123", square="G1").square == "g1"
    with pytest.raises(InvalidRequestError):
        _ = LegalMovesRequest(room_id="ABC123", square="z0")


def test_promotion_request() -> None:
    request = PromotionRequest(room_id="abc123", square="a1", piece_type=PieceType.KNIGHT)
    assert request.room_id == "ABC123"
    assert request.piece_type == PieceType.KNIGHT
