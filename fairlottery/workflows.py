"""High level operations combining the ledger, the drawing engine and backups."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union, cast

from .ledger import BackupSink, OrderLedger
from .models import Order
from .prize_draw.eligibility import eligible, remaining_chances
from .prize_draw.engine import DrawingEngine, DrawResult
from .prize_draw.messages import congratulation_message
from .state import AppState
from .storage.backup import read_backup, write_backup
from .storage.gateway import ImportResult, PersistenceGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawOutcome:
    """Everything the lottery screen needs after a drawing.

    Attributes
    ----------
    winner : Order
        The winning order as stored after the commit (``is_winner`` is set).
    result : DrawResult
        The engine's selection record.
    message : str
        Congratulation message for the winner.
    remaining : int
        Tickets still eligible for the next drawing.
    """

    winner: Order
    result: DrawResult
    message: str
    remaining: int


def run_drawing(
    ledger: OrderLedger,
    engine: DrawingEngine,
    *,
    rng: Optional[random.Random] = None,
) -> DrawOutcome:
    """Draw one winner among the non-winning orders and record the win.

    The workflow performs the following steps:

    1. Derive the candidate list with :func:`eligible`.
    2. Let the engine select a winner (this refuses to run while another
       drawing is spinning, or when there are no candidates).
    3. Settle the drawing and mark the winner in the ledger exactly once.

    Parameters
    ----------
    ledger : OrderLedger
        Ledger providing candidates and receiving the winner flag.
    engine : DrawingEngine
        Engine making the random selection.
    rng : Optional[random.Random], default: None
        Random source for the congratulation template.

    Raises
    ------
    NoCandidates
        If every order has already won or the ledger is empty.
    DrawInProgress
        If the engine has an unsettled selection.
    """

    candidates = eligible(ledger.list())
    selected = engine.select(candidates)
    result = cast(DrawResult, engine.last_result)
    engine.settle()

    winner = ledger.mark_winner(selected.id)
    return DrawOutcome(
        winner=winner,
        result=result,
        message=congratulation_message(winner, rng),
        remaining=remaining_chances(ledger.list()),
    )


def clear_orders(
    ledger: OrderLedger,
    *,
    confirmed: bool,
    backup_sink: Optional[BackupSink] = None,
) -> dict[str, Any]:
    """Delete every order once the operator has confirmed it.

    An automatic backup is always exported first (see :meth:`OrderLedger.clear`).

    Raises
    ------
    ValueError
        If ``confirmed`` is false. Nothing is changed.
    """
    if not confirmed:
        raise ValueError("Clearing all orders requires explicit confirmation")
    return ledger.clear(backup_sink)


def export_backup(
    gateway: PersistenceGateway,
    state: AppState,
    directory: Union[str, Path],
) -> Path:
    """Write a backup document of ``state`` into ``directory``."""
    document = gateway.export_snapshot(state)
    return write_backup(document, directory)


def import_backup(
    gateway: PersistenceGateway,
    state: AppState,
    path: Union[str, Path],
) -> ImportResult:
    """Restore ``state`` from the backup file at ``path``.

    Raises
    ------
    InvalidBackup
        If the file cannot be read or its content fails validation. ``state``
        is not modified in that case.
    """
    document = read_backup(path)
    result = gateway.import_snapshot(state, document)
    logger.info(f"Restored backup from {path}")
    return result


__all__ = [
    "DrawOutcome",
    "clear_orders",
    "export_backup",
    "import_backup",
    "run_drawing",
]
