"""Protocol repository (can implement later for other storage backends)"""

from typing import Protocol

from src.core.models import GameSnapshot


class GameRepository(Protocol):
    """Persistence layer orchestration. Games are keyed by their room id."""

    def get_game(self, room_id: str) -> GameSnapshot | None:
        """Get game by room ID, if record exists."""
        ...

    def create_game(self, game: GameSnapshot) -> GameSnapshot:
        """Store new game and return the stored data."""
        ...

    def update_game(self, room_id: str, game: GameSnapshot) -> GameSnapshot | None:
        """Add new info to existing record."""
        ...

    def delete_game(self, room_id: str) -> GameSnapshot | None:
        """Remove a game's record."""
        ...
