"""Candidate selection for prize drawings."""

from __future__ import annotations

from typing import Iterable

from ..models import Order


def eligible(orders: Iterable[Order]) -> list[Order]:
    """Return the orders that have not won yet, in ledger order."""
    return [order for order in orders if not order.is_winner]


def remaining_chances(orders: Iterable[Order]) -> int:
    """Count the tickets still taking part in drawings."""
    return sum(1 for order in orders if not order.is_winner)


__all__ = ["eligible", "remaining_chances"]
