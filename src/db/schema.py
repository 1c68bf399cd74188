"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.core.config import ROOM_ID_LENGTH


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    """Game played in a room. Payload columns hold the plain structures produced by src/engine/codec.py"""

    __tablename__ = "chess_rooms"
    id: Mapped[str] = mapped_column(String(ROOM_ID_LENGTH), primary_key=True)
    board_state: Mapped[list[Any]] = mapped_column(JSON)
    history: Mapped[list[Any]] = mapped_column(JSON, default=list)
    timers: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    current_player: Mapped[str]
    game_status: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    last_active: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
