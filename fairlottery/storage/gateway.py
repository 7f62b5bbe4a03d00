"""Durable load/save of the application state and backup import/export."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..config import (
    ADMIN_PASSWORD_KEY,
    DEFAULT_ADMIN_PASSWORD,
    EXHIBITORS_KEY,
    ORDERS_KEY,
)
from ..models import ExhibitorAccount, Order, StorageRecord
from ..state import AppState
from .backup import build_snapshot, parse_snapshot

logger = logging.getLogger(__name__)


@dataclass
class LoadedState:
    """Values read by :meth:`PersistenceGateway.load_all`."""

    orders: list[Order]
    exhibitors: list[ExhibitorAccount]
    admin_credential: str


@dataclass(frozen=True)
class ImportResult:
    """Summary of a successful backup import.

    The counts describe the state after the import; the ``*_replaced`` flags
    tell which values the document actually carried.
    """

    timestamp: Optional[int]
    order_count: int
    exhibitor_count: int
    orders_replaced: bool
    exhibitors_replaced: bool
    credential_replaced: bool


class PersistenceGateway:
    """Reads and writes the three named records of the durable store.

    Each ``save_*`` call overwrites its whole record inside its own
    transaction, so a reader never sees a partially written value.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        *,
        default_admin_password: str = DEFAULT_ADMIN_PASSWORD,
    ) -> None:
        """Create a gateway bound to a SQLAlchemy session factory.

        Parameters
        ----------
        session_factory : sessionmaker
            Factory producing sessions against the durable store.
        default_admin_password : str, default: ``"admin123"``
            Credential substituted when no admin password record exists.
        """

        self._session_factory = session_factory
        self._default_admin_password = default_admin_password

    # -------- loading --------
    def _read(self, key: str) -> Any:
        try:
            with self._session_factory() as session:
                record = StorageRecord.get_by_key(session, key)
                return None if record is None else record.value
        except SQLAlchemyError as exc:
            logger.warning(f"Could not read record {key!r}, using default: {exc}")
            return None
        except ValueError as exc:
            # Stored text that is not valid JSON fails in the result processor.
            logger.warning(f"Record {key!r} is not valid JSON, using default: {exc}")
            return None

    @staticmethod
    def _parse_entries(raw: Any, key: str, parser) -> list:
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning(f"Record {key!r} is not a list, using an empty one")
            return []
        entries = []
        for position, item in enumerate(raw):
            try:
                entries.append(parser(item))
            except ValueError as exc:
                logger.warning(f"Skipping malformed entry {position} in {key!r}: {exc}")
        return entries

    def load_all(self) -> LoadedState:
        """Read orders, exhibitors and the admin credential.

        A missing or unreadable record is replaced with its default (empty
        list or the default admin password); this method never raises.
        """

        orders = self._parse_entries(self._read(ORDERS_KEY), ORDERS_KEY, Order.from_json)
        exhibitors = self._parse_entries(
            self._read(EXHIBITORS_KEY), EXHIBITORS_KEY, ExhibitorAccount.from_json
        )
        credential = self._read(ADMIN_PASSWORD_KEY)
        if not isinstance(credential, str) or not credential:
            credential = self._default_admin_password

        logger.info(
            f"Loaded {len(orders)} orders and {len(exhibitors)} exhibitors from storage"
        )
        return LoadedState(
            orders=orders, exhibitors=exhibitors, admin_credential=credential
        )

    # -------- saving --------
    @staticmethod
    def _put_orders(session: Session, orders: Iterable[Order]) -> None:
        StorageRecord.put(session, ORDERS_KEY, [order.to_json() for order in orders])

    @staticmethod
    def _put_exhibitors(session: Session, exhibitors: Iterable[ExhibitorAccount]) -> None:
        StorageRecord.put(
            session, EXHIBITORS_KEY, [account.to_json() for account in exhibitors]
        )

    def save_orders(self, orders: Iterable[Order]) -> None:
        with self._session_factory.begin() as session:
            self._put_orders(session, orders)

    def save_exhibitors(self, exhibitors: Iterable[ExhibitorAccount]) -> None:
        with self._session_factory.begin() as session:
            self._put_exhibitors(session, exhibitors)

    def save_credential(self, secret: str) -> None:
        with self._session_factory.begin() as session:
            StorageRecord.put(session, ADMIN_PASSWORD_KEY, secret)

    def save_all(self, state: AppState) -> None:
        """Persist all three records in a single transaction."""
        with self._session_factory.begin() as session:
            self._put_orders(session, state.orders)
            self._put_exhibitors(session, state.exhibitors)
            StorageRecord.put(session, ADMIN_PASSWORD_KEY, state.admin_credential)

    # -------- backup --------
    def export_snapshot(
        self, state: AppState, *, timestamp: Optional[int] = None
    ) -> dict[str, Any]:
        """Return a portable backup document of ``state``."""
        document = build_snapshot(
            state.orders,
            state.exhibitors,
            state.admin_credential,
            timestamp=timestamp,
        )
        logger.info(
            f"Exported snapshot with {len(state.orders)} orders and "
            f"{len(state.exhibitors)} exhibitors"
        )
        return document

    def import_snapshot(self, state: AppState, document: Any) -> ImportResult:
        """Replace ``state`` with the content of a backup document.

        The document is fully validated before anything changes. On success
        the orders, the exhibitors and the admin credential are each replaced
        wholesale (not merged) when the document carries them; an absent
        value keeps the current one. All three records are re-persisted.

        Raises
        ------
        InvalidBackup
            If the document fails validation. ``state`` is left untouched.
        """

        snapshot = parse_snapshot(document)
        replacement = AppState(
            orders=list(state.orders) if snapshot.orders is None else snapshot.orders,
            exhibitors=(
                list(state.exhibitors)
                if snapshot.exhibitors is None
                else snapshot.exhibitors
            ),
            admin_credential=snapshot.admin_password or state.admin_credential,
        )
        # Memory changes only after all three records are stored.
        self.save_all(replacement)
        state.orders = replacement.orders
        state.exhibitors = replacement.exhibitors
        state.admin_credential = replacement.admin_credential

        logger.info(
            f"Imported snapshot with {len(state.orders)} orders and "
            f"{len(state.exhibitors)} exhibitors"
        )
        return ImportResult(
            timestamp=snapshot.timestamp,
            order_count=len(replacement.orders),
            exhibitor_count=len(replacement.exhibitors),
            orders_replaced=snapshot.orders is not None,
            exhibitors_replaced=snapshot.exhibitors is not None,
            credential_replaced=snapshot.admin_password is not None,
        )


__all__ = ["ImportResult", "LoadedState", "PersistenceGateway"]
