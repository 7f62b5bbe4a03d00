"""Utility helpers for the models package."""

from __future__ import annotations

import random
import time
import uuid
from typing import Optional

ACCESS_CODE_LETTERS = "ABCDEFGHJKLMNPQRSTUVWXYZ"

TICKET_SUFFIX_MIN = 1000
TICKET_SUFFIX_MAX = 9999


def new_identifier() -> str:
    """Return a fresh random UUID4 string."""
    return str(uuid.uuid4())


def now_millis() -> int:
    """Return the current time as integer milliseconds since the epoch."""
    return int(time.time() * 1000)


def format_ticket_number(position: int, suffix: int) -> str:
    """Format a ticket label such as ``#001-4821``.

    ``position`` is the 1-based place of the order in the ledger and is padded
    to at least three digits. ``suffix`` must be a four digit number.
    """
    if position < 1:
        raise ValueError("position must be 1 or greater")
    if not TICKET_SUFFIX_MIN <= suffix <= TICKET_SUFFIX_MAX:
        raise ValueError("suffix must be a four digit number")
    return f"#{position:03d}-{suffix}"


def random_ticket_suffix(rng: Optional[random.Random] = None) -> int:
    """Draw the random half of a ticket number uniformly from [1000, 9999]."""
    source = rng or random
    return source.randint(TICKET_SUFFIX_MIN, TICKET_SUFFIX_MAX)


def generate_access_code(rng: Optional[random.Random] = None) -> str:
    """Return an exhibitor access code such as ``AB-123``.

    Two letters from an alphabet without the easily confused ``I`` and ``O``,
    followed by a three digit number in [100, 999].
    """
    source = rng or random
    prefix = source.choice(ACCESS_CODE_LETTERS) + source.choice(ACCESS_CODE_LETTERS)
    return f"{prefix}-{source.randint(100, 999)}"
