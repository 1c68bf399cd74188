"""
Room identifiers: opaque, 6 character, upper case alphanumeric strings.

Callers normalise whatever a user typed before it reaches the service.
"""

import random
import string
from typing import Optional

from src.core.config import ROOM_ID_LENGTH

ROOM_ID_ALPHABET = string.ascii_uppercase + string.digits


def generate_room_id(rng: Optional[random.Random] = None) -> str:
    rng = rng or random.SystemRandom()
    return "".join(rng.choice(ROOM_ID_ALPHABET) for _ in range(ROOM_ID_LENGTH))


def normalize_room_id(raw: str) -> str:
    """' abc123 ' -> 'ABC123'"""
    return raw.strip().upper()


def is_valid_room_id(value: str) -> bool:
    return len(value) == ROOM_ID_LENGTH and all(
        character in ROOM_ID_ALPHABET for character in value
    )
