"""
Application settings.

Defaults can be overridden through environment variables (handy for tests / deployment).
"""

import logging
import os

DATABASE_URL = os.environ.get("CHESS_DATABASE_URL", "sqlite:///./chess_rooms.db")
SQL_ECHO = os.environ.get("CHESS_SQL_ECHO", "false").lower() in {"1", "true", "yes"}
LOG_LEVEL = os.environ.get("CHESS_LOG_LEVEL", "INFO").upper()

# 10 minutes per player
DEFAULT_TIMER_SECONDS = 600
ROOM_ID_LENGTH = 6

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """Set up the root logger once, at process start."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
