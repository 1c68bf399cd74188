"""Implementation of (Game)Repository using SQLAlchemy"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.exceptions import RoomExistsError
from src.core.models import GameSnapshot
from src.db.schema import DBGame

_log = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, room_id: str) -> GameSnapshot | None:
        """Get game by room ID, if record exists."""
        game_db = self._fetch_game(room_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameSnapshot) -> GameSnapshot:
        """Store new game and return the stored data."""
        if self._fetch_game(game.room_id) is not None:
            raise RoomExistsError(f"Room {game.room_id!r} already exists.")

        game_db = DBGame(
            id=game.room_id,
            board_state=game.board_state,
            history=game.history,
            timers=game.timers,
            current_player=game.current_player,
            game_status=game.game_status,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        _log.info("Created room %s", game.room_id)
        return self._to_model(game_db)

    def update_game(self, room_id: str, game: GameSnapshot) -> GameSnapshot | None:
        """Add new info to existing record."""
        game_db = self._fetch_game(room_id)
        if not game_db:
            return None
        game_db.board_state = game.board_state
        game_db.history = game.history
        game_db.timers = game.timers
        game_db.current_player = game.current_player
        game_db.game_status = game.game_status
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, room_id: str) -> GameSnapshot | None:
        """Remove a game's record."""
        game_db = self._fetch_game(room_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        _log.info("Deleted room %s", room_id)
        return game_model

    def _fetch_game(self, room_id: str) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == room_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameSnapshot:
        """Convert SQLAlchemy model to data transfer model."""
        return GameSnapshot(
            room_id=game_db.id,
            board_state=game_db.board_state,
            history=game_db.history,
            timers=game_db.timers,
            current_player=game_db.current_player,
            game_status=game_db.game_status,
        )
