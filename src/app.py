"""Wiring of the layers: database session -> repository -> service."""

from src.core.config import DATABASE_URL, configure_logging
from src.db.database import build_engine, build_session_factory
from src.db.sql_repository import SQLGameRepository
from src.services.game_service import GameService


def build_service(database_url: str = DATABASE_URL) -> GameService:
    """Initialize once at process start and hand the service to whoever handles requests."""
    configure_logging()
    session_factory = build_session_factory(build_engine(database_url))
    return GameService(SQLGameRepository(session_factory()))
