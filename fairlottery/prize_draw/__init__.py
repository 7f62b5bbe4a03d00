"""Utilities for the prize draw subsystem."""

from .eligibility import eligible, remaining_chances
from .engine import DrawingEngine, DrawResult, DrawState
from .messages import congratulation_message

__all__ = [
    "DrawResult",
    "DrawState",
    "DrawingEngine",
    "congratulation_message",
    "eligible",
    "remaining_chances",
]
