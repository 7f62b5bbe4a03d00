"""Ledger entries and their JSON representation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional


def parse_order_value(value: Any) -> float:
    """Return ``value`` as a non-negative finite float.

    Numbers and numeric strings (as typed into a form, with either ``.`` or
    ``,`` as the decimal separator) are accepted.

    Raises
    ------
    ValueError
        If the value is not numeric, is not finite, or is negative.
    """
    if isinstance(value, bool):
        raise ValueError("order value must be a number")
    if isinstance(value, str):
        text = value.strip().replace(",", ".")
        if not text:
            raise ValueError("order value must not be empty")
        try:
            number = float(text)
        except ValueError as exc:
            raise ValueError(f"order value {value!r} is not a number") from exc
    elif isinstance(value, (int, float)):
        number = float(value)
    else:
        raise ValueError("order value must be a number")
    if not math.isfinite(number):
        raise ValueError("order value must be finite")
    if number < 0:
        raise ValueError("order value must not be negative")
    return number


@dataclass
class Order:
    """A client order registered at the fair; each one is one raffle ticket.

    Attributes
    ----------
    id : str
        Globally unique identifier assigned at creation.
    client_name : str
        Name of the ordering client.
    order_value : float
        Non-negative order amount.
    ticket_number : str
        Human readable ticket label, unique within the ledger.
    created_at : int
        Creation time in milliseconds since the epoch.
    is_winner : bool
        Whether the ticket has already won. Only ever goes from ``False`` to
        ``True``.
    created_by : Optional[str]
        Display name of the exhibitor that registered the order.
    exhibitor_id : Optional[str]
        Id of the exhibitor account that registered the order.
    """

    id: str
    client_name: str
    order_value: float
    ticket_number: str
    created_at: int
    is_winner: bool = False
    created_by: Optional[str] = None
    exhibitor_id: Optional[str] = None

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "clientName": self.client_name,
            "orderValue": self.order_value,
            "ticketNumber": self.ticket_number,
            "createdAt": self.created_at,
            "isWinner": self.is_winner,
        }
        if self.created_by is not None:
            data["createdBy"] = self.created_by
        if self.exhibitor_id is not None:
            data["exhibitorId"] = self.exhibitor_id
        return data

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Order":
        """Build an :class:`Order` from its stored JSON object.

        Raises
        ------
        ValueError
            If a required key is missing or holds a value of the wrong type.
        """
        if not isinstance(data, Mapping):
            raise ValueError("order entry must be a JSON object")
        try:
            order_id = data["id"]
            client_name = data["clientName"]
            ticket_number = data["ticketNumber"]
            created_at = data["createdAt"]
            raw_value = data["orderValue"]
        except KeyError as exc:
            raise ValueError(f"order entry is missing {exc.args[0]!r}") from exc

        if not isinstance(order_id, str) or not order_id:
            raise ValueError("order id must be a non-empty string")
        if not isinstance(client_name, str):
            raise ValueError("clientName must be a string")
        if not isinstance(ticket_number, str):
            raise ValueError("ticketNumber must be a string")
        if isinstance(created_at, bool) or not isinstance(created_at, (int, float)):
            raise ValueError("createdAt must be a number")
        is_winner = data.get("isWinner", False)
        if not isinstance(is_winner, bool):
            raise ValueError("isWinner must be a boolean")
        created_by = data.get("createdBy")
        exhibitor_id = data.get("exhibitorId")
        if created_by is not None and not isinstance(created_by, str):
            raise ValueError("createdBy must be a string")
        if exhibitor_id is not None and not isinstance(exhibitor_id, str):
            raise ValueError("exhibitorId must be a string")

        return cls(
            id=order_id,
            client_name=client_name,
            order_value=parse_order_value(raw_value),
            ticket_number=ticket_number,
            created_at=int(created_at),
            is_winner=is_winner,
            created_by=created_by,
            exhibitor_id=exhibitor_id,
        )


__all__ = ["Order", "parse_order_value"]
