"""Admin and exhibitor login, plus role checks for gated operations."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .config import MIN_ADMIN_PASSWORD_LENGTH, SUPERUSER_SECRET
from .exceptions import AuthenticationError, InvalidCredential
from .models import ExhibitorAccount
from .state import AppState

if TYPE_CHECKING:
    from .accounts import AccountRegistry
    from .storage.gateway import PersistenceGateway

logger = logging.getLogger(__name__)


class Role(enum.Enum):
    ADMIN = "ADMIN"
    EXHIBITOR = "EXHIBITOR"
    SUPERUSER = "SUPERUSER"


@dataclass(frozen=True)
class UserSession:
    """The logged-in identity. ``exhibitor_id`` is set only for exhibitors."""

    role: Role
    name: str
    exhibitor_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.role is Role.EXHIBITOR:
            if not self.exhibitor_id:
                raise ValueError("exhibitor sessions require an exhibitor_id")
        elif self.exhibitor_id is not None:
            raise ValueError(f"{self.role.value} sessions cannot carry an exhibitor_id")

    @classmethod
    def admin(cls) -> "UserSession":
        return cls(role=Role.ADMIN, name="Administrator")

    @classmethod
    def superuser(cls) -> "UserSession":
        return cls(role=Role.SUPERUSER, name="SuperUser")

    @classmethod
    def exhibitor(cls, account: ExhibitorAccount) -> "UserSession":
        return cls(role=Role.EXHIBITOR, name=account.name, exhibitor_id=account.id)


def can_administer(session: Optional[UserSession]) -> bool:
    """Whether ``session`` may manage exhibitors, backups and drawings."""
    if session is None:
        return False
    if session.role is Role.ADMIN or session.role is Role.SUPERUSER:
        return True
    if session.role is Role.EXHIBITOR:
        return False
    raise ValueError(f"Unhandled role {session.role!r}")


def can_register_orders(session: Optional[UserSession]) -> bool:
    """Whether ``session`` may open the exhibitor order form."""
    if session is None:
        return False
    if session.role is Role.EXHIBITOR:
        return True
    if session.role is Role.ADMIN or session.role is Role.SUPERUSER:
        return False
    raise ValueError(f"Unhandled role {session.role!r}")


def login_admin(state: AppState, secret: str) -> UserSession:
    """Log in with the stored admin password or the fixed superuser secret.

    Raises
    ------
    AuthenticationError
        If ``secret`` matches neither.
    """
    if secret == state.admin_credential:
        logger.info("Administrator logged in")
        return UserSession.admin()
    if secret == SUPERUSER_SECRET:
        logger.info("Superuser logged in")
        return UserSession.superuser()
    logger.warning("Rejected administrator login attempt")
    raise AuthenticationError("Nieprawidłowe hasło administratora.")


def login_exhibitor(registry: "AccountRegistry", access_code: str) -> UserSession:
    """Log in an exhibitor by exact (case-sensitive) access code.

    Raises
    ------
    AuthenticationError
        If no exhibitor owns ``access_code``.
    """
    account = registry.find_by_access_code(access_code)
    if account is None:
        logger.warning("Rejected exhibitor login attempt")
        raise AuthenticationError(
            "Nieprawidłowy kod dostępu. Sprawdź dane otrzymane od administratora."
        )
    logger.info(f"Exhibitor {account.id} logged in")
    return UserSession.exhibitor(account)


def change_admin_password(
    state: AppState,
    gateway: "PersistenceGateway",
    new_password: str,
    confirmation: str,
) -> None:
    """Replace the admin password and persist it.

    The superuser secret is a constant and is not affected.

    Raises
    ------
    InvalidCredential
        If the password is shorter than five characters or the confirmation
        differs.
    """
    if len(new_password) < MIN_ADMIN_PASSWORD_LENGTH:
        raise InvalidCredential("Hasło musi mieć min. 5 znaków.")
    if new_password != confirmation:
        raise InvalidCredential("Hasła nie są identyczne.")
    gateway.save_credential(new_password)
    state.admin_credential = new_password
    logger.info("Administrator password changed")


__all__ = [
    "Role",
    "UserSession",
    "can_administer",
    "can_register_orders",
    "change_admin_password",
    "login_admin",
    "login_exhibitor",
]
