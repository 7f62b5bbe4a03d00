"""In-memory application state shared by the ledger, registry and auth code."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .config import DEFAULT_ADMIN_PASSWORD
from .models import ExhibitorAccount, Order

if TYPE_CHECKING:
    from .storage.gateway import PersistenceGateway


@dataclass
class AppState:
    """Holder for everything the durable store keeps.

    One instance is created at startup from :meth:`PersistenceGateway.load_all`
    and passed by reference to every component that reads or mutates it.
    Components persist their own record right after each mutation, so there
    is nothing to flush on shutdown.
    """

    orders: list[Order] = field(default_factory=list)
    exhibitors: list[ExhibitorAccount] = field(default_factory=list)
    admin_credential: str = DEFAULT_ADMIN_PASSWORD

    @classmethod
    def load(cls, gateway: "PersistenceGateway") -> "AppState":
        loaded = gateway.load_all()
        return cls(
            orders=loaded.orders,
            exhibitors=loaded.exhibitors,
            admin_credential=loaded.admin_credential,
        )
