"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the domain layer (GameState) and db layer (repository) send / receive this model to / from the Service.
(Decouples the data model specific to the DB layer from the one used in the domain layer)
"""

from dataclasses import dataclass
from typing import Any

# Type aliases to make GameSnapshot easier to read. Payloads are the plain structures produced by src/engine/codec.py
BoardPayload = Any
HistoryPayload = Any
TimersPayload = Any


@dataclass
class GameSnapshot:
    """Transport-safe representation of the game played in a room."""

    room_id: str
    board_state: BoardPayload
    history: HistoryPayload
    timers: TimersPayload
    current_player: str
    game_status: str
