"""Exceptions raised by the order ledger, drawing and backup code."""

from __future__ import annotations


class FairLotteryError(Exception):
    """Base class for all recoverable, user-facing failures."""


class InvalidOrder(FairLotteryError, ValueError):
    """Raised when an order cannot be registered from the supplied input."""


class NotFound(FairLotteryError, LookupError):
    """Raised when an order or exhibitor id does not exist."""


class NoCandidates(FairLotteryError, ValueError):
    """Raised when a drawing is attempted without eligible orders."""


class DrawInProgress(FairLotteryError, RuntimeError):
    """Raised when a drawing is triggered while another one is still spinning."""


class InvalidBackup(FairLotteryError, ValueError):
    """Raised when a backup document fails validation."""


class AuthenticationError(FairLotteryError):
    """Raised when a password or access code does not match."""


class InvalidCredential(FairLotteryError, ValueError):
    """Raised when a new admin password does not satisfy the rules."""


__all__ = [
    "AuthenticationError",
    "DrawInProgress",
    "FairLotteryError",
    "InvalidBackup",
    "InvalidCredential",
    "InvalidOrder",
    "NoCandidates",
    "NotFound",
]
