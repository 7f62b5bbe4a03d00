"""The append-only order ledger that hands out raffle tickets."""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Optional, Union

from .auth import Role, UserSession
from .exceptions import InvalidOrder, NotFound
from .models import Order, parse_order_value
from .models.utils import (
    format_ticket_number,
    new_identifier,
    now_millis,
    random_ticket_suffix,
)
from .state import AppState
from .storage.backup import write_backup
from .storage.gateway import PersistenceGateway

logger = logging.getLogger(__name__)

BackupSink = Callable[[dict[str, Any]], Any]


class OrderLedger:
    """Owns the list of orders held in :class:`AppState`.

    Every mutation is written through to the durable store before the
    in-memory list changes, so memory and storage never disagree after a
    call returns.
    """

    def __init__(
        self,
        state: AppState,
        gateway: PersistenceGateway,
        *,
        rng: Optional[random.Random] = None,
        backup_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        """Create a ledger over ``state``.

        Parameters
        ----------
        state : AppState
            Shared application state whose ``orders`` list this ledger owns.
        gateway : PersistenceGateway
            Gateway used to persist the orders record after each mutation.
        rng : Optional[random.Random], default: None
            Random source for ticket suffixes. The module-level generator is
            used when omitted.
        backup_dir : Optional[str | Path], default: None
            Directory where :meth:`clear` writes its automatic backup when no
            explicit sink is passed.
        """

        self._state = state
        self._gateway = gateway
        self._rng = rng
        self._backup_dir = backup_dir

    def list(self) -> list[Order]:
        """Return every order in insertion order."""
        return list(self._state.orders)

    def __len__(self) -> int:
        return len(self._state.orders)

    def get(self, order_id: str) -> Order:
        """Return the order with ``order_id``.

        Raises
        ------
        NotFound
            If no order has that id.
        """
        for order in self._state.orders:
            if order.id == order_id:
                return order
        raise NotFound(f"Order {order_id!r} does not exist")

    def orders_for_exhibitor(self, exhibitor_id: str) -> list[Order]:
        """Return the orders registered by one exhibitor, newest first."""
        own = [o for o in self._state.orders if o.exhibitor_id == exhibitor_id]
        return sorted(own, key=lambda o: o.created_at, reverse=True)

    def _next_ticket_number(self) -> str:
        position = len(self._state.orders) + 1
        taken = {order.ticket_number for order in self._state.orders}
        # Positions restart after a clear and imported labels are arbitrary.
        while True:
            ticket = format_ticket_number(position, random_ticket_suffix(self._rng))
            if ticket not in taken:
                return ticket

    def append(
        self,
        client_name: str,
        order_value: Any,
        attribution: Optional[UserSession] = None,
    ) -> Order:
        """Register a new order and return it with its ticket number.

        Parameters
        ----------
        client_name : str
            Name of the ordering client; must not be blank.
        order_value : Any
            Non-negative amount, as a number or numeric string.
        attribution : Optional[UserSession], default: None
            Session that registered the order. Only exhibitor sessions are
            recorded on the order.

        Returns
        -------
        Order
            The appended order.

        Raises
        ------
        InvalidOrder
            If the name is blank or the value is not a non-negative number.
        """
        if not isinstance(client_name, str) or not client_name.strip():
            raise InvalidOrder("Client name is required")
        try:
            value = parse_order_value(order_value)
        except ValueError as exc:
            raise InvalidOrder(str(exc)) from exc

        created_by = None
        exhibitor_id = None
        if attribution is not None and attribution.role is Role.EXHIBITOR:
            created_by = attribution.name
            exhibitor_id = attribution.exhibitor_id

        order = Order(
            id=new_identifier(),
            client_name=client_name.strip(),
            order_value=value,
            ticket_number=self._next_ticket_number(),
            created_at=now_millis(),
            is_winner=False,
            created_by=created_by,
            exhibitor_id=exhibitor_id,
        )
        updated = [*self._state.orders, order]
        self._gateway.save_orders(updated)
        self._state.orders = updated
        logger.info(f"Registered order {order.id} with ticket {order.ticket_number}")
        return order

    def mark_winner(self, order_id: str) -> Order:
        """Flag the order with ``order_id`` as a winner.

        Calling this again for the same order is a no-op.

        Raises
        ------
        NotFound
            If no order has that id.
        """
        current = self.get(order_id)
        if current.is_winner:
            logger.debug(f"Order {order_id} is already a winner")
            return current

        winner = replace(current, is_winner=True)
        updated = [winner if o.id == order_id else o for o in self._state.orders]
        self._gateway.save_orders(updated)
        self._state.orders = updated
        logger.info(f"Order {order_id} marked as winner ({winner.ticket_number})")
        return winner

    def _default_sink(self, document: dict[str, Any]) -> Path:
        if self._backup_dir is None:
            from .config import get_settings

            return write_backup(document, get_settings().backup_dir)
        return write_backup(document, self._backup_dir)

    def clear(self, backup_sink: Optional[BackupSink] = None) -> dict[str, Any]:
        """Remove every order after exporting a safety backup.

        The backup document is handed to ``backup_sink`` (or written to the
        backup directory) before anything is deleted. If that step fails the
        ledger is left untouched.

        Returns
        -------
        dict
            The backup document exported before clearing.
        """
        document = self._gateway.export_snapshot(self._state)
        sink = backup_sink or self._default_sink
        sink(document)

        removed = len(self._state.orders)
        self._gateway.save_orders([])
        self._state.orders = []
        logger.warning(f"Cleared {removed} orders from the ledger")
        return document


__all__ = ["OrderLedger"]
