"""Unit tests for src/app.py"""

from src.app import build_service
from src.api.models import CreateGameRequest, GetGameRequest
from src.services.game_service import GameService


def test_build_service() -> None:
    """Wire all layers together on an in-memory database"""
    service = build_service("sqlite://")
    assert isinstance(service, GameService)

    created = service.create_game(CreateGameRequest(room_id="ABC123"))
    fetched = service.get_game(GetGameRequest(room_id="ABC123"))
    assert fetched == created
