"""Exhibitor accounts and their access codes."""

from __future__ import annotations

import logging
import random
from typing import Optional

from .exceptions import NotFound
from .models import ExhibitorAccount
from .models.utils import generate_access_code, new_identifier
from .state import AppState
from .storage.gateway import PersistenceGateway

logger = logging.getLogger(__name__)


class AccountRegistry:
    """Creates, removes and looks up exhibitor accounts in :class:`AppState`."""

    def __init__(
        self,
        state: AppState,
        gateway: PersistenceGateway,
        *,
        rng: Optional[random.Random] = None,
        max_attempts: int = 32,
    ) -> None:
        self._state = state
        self._gateway = gateway
        self._rng = rng
        self._max_attempts = max_attempts

    def list(self) -> list[ExhibitorAccount]:
        return list(self._state.exhibitors)

    def get(self, exhibitor_id: str) -> ExhibitorAccount:
        """Return the account with ``exhibitor_id`` or raise :class:`NotFound`."""
        for account in self._state.exhibitors:
            if account.id == exhibitor_id:
                return account
        raise NotFound(f"Exhibitor {exhibitor_id!r} does not exist")

    def find_by_access_code(self, access_code: str) -> Optional[ExhibitorAccount]:
        """Return the account whose code equals ``access_code`` exactly.

        Surrounding whitespace is ignored and matching is case-sensitive.
        """
        code = access_code.strip()
        if not code:
            return None
        for account in self._state.exhibitors:
            if account.access_code == code:
                return account
        return None

    def _unique_access_code(self) -> str:
        taken = {account.access_code for account in self._state.exhibitors}
        for _ in range(self._max_attempts):
            candidate = generate_access_code(self._rng)
            if candidate not in taken:
                return candidate
        raise RuntimeError(
            "Unable to generate a unique access code after multiple attempts"
        )

    def add(self, name: str) -> ExhibitorAccount:
        """Create an exhibitor account with a fresh access code.

        Raises
        ------
        ValueError
            If ``name`` is blank.
        RuntimeError
            If no unused access code could be generated.
        """
        if not name or not name.strip():
            raise ValueError("Exhibitor name is required")
        account = ExhibitorAccount(
            id=new_identifier(),
            name=name.strip(),
            access_code=self._unique_access_code(),
        )
        updated = [*self._state.exhibitors, account]
        self._gateway.save_exhibitors(updated)
        self._state.exhibitors = updated
        logger.info(f"Added exhibitor {account.id} ({account.name})")
        return account

    def remove(self, exhibitor_id: str) -> ExhibitorAccount:
        """Delete an exhibitor account. Its orders keep their back-reference.

        Raises
        ------
        NotFound
            If no account has that id.
        """
        account = self.get(exhibitor_id)
        updated = [a for a in self._state.exhibitors if a.id != exhibitor_id]
        self._gateway.save_exhibitors(updated)
        self._state.exhibitors = updated
        logger.info(f"Removed exhibitor {exhibitor_id}")
        return account


__all__ = ["AccountRegistry"]
