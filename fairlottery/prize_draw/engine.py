"""Uniform random winner selection with a single-flight guard."""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from ..exceptions import DrawInProgress, NoCandidates
from ..models import Order

logger = logging.getLogger(__name__)


class DrawState(enum.Enum):
    IDLE = "idle"
    SPINNING = "spinning"
    SETTLED = "settled"


@dataclass(frozen=True)
class DrawResult:
    """Value object describing one selection made by the engine.

    Attributes
    ----------
    winner : Order
        The selected candidate, as it was when selected.
    index : int
        Position of ``winner`` within the candidate list.
    candidate_count : int
        Number of candidates the selection was made from.
    """

    winner: Order
    index: int
    candidate_count: int


class DrawingEngine:
    """Picks one winner per drawing, uniformly among the given candidates.

    The engine moves through ``IDLE -> SPINNING -> SETTLED``. The winner is
    fixed the moment :meth:`select` is called; the ``SPINNING`` phase only
    covers the presentation delay and ends with :meth:`settle`. A new
    :meth:`select` is refused while a previous result is still spinning.

    The engine never touches the ledger. Committing the winner with
    ``OrderLedger.mark_winner`` is the caller's job.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        """Create an engine.

        Parameters
        ----------
        rng : Optional[random.Random], default: None
            Uniform random source. A fresh, runtime-seeded
            :class:`random.Random` is used when omitted.
        """

        self._rng = rng or random.Random()
        self._state = DrawState.IDLE
        self._pending: Optional[DrawResult] = None

    @property
    def state(self) -> DrawState:
        return self._state

    @property
    def is_spinning(self) -> bool:
        return self._state is DrawState.SPINNING

    @property
    def last_result(self) -> Optional[DrawResult]:
        """The most recent selection, or ``None`` before the first one."""
        return self._pending

    def select_index(self, count: int) -> int:
        """Draw an index uniformly from ``[0, count)``.

        Raises
        ------
        NoCandidates
            If ``count`` is zero or negative.
        """
        if count <= 0:
            raise NoCandidates("No eligible tickets to draw from")
        return self._rng.randrange(count)

    def select(self, candidates: Sequence[Order]) -> Order:
        """Select a winner among ``candidates`` and enter ``SPINNING``.

        Each call is an independent uniform sample over the current list.

        Raises
        ------
        DrawInProgress
            If a previous selection has not been settled yet.
        NoCandidates
            If ``candidates`` is empty. The engine state is not changed.
        """
        if self._state is DrawState.SPINNING:
            raise DrawInProgress("A drawing is already in progress")
        index = self.select_index(len(candidates))
        winner = candidates[index]
        self._pending = DrawResult(
            winner=winner, index=index, candidate_count=len(candidates)
        )
        self._state = DrawState.SPINNING
        logger.info(
            f"Selected ticket {winner.ticket_number} "
            f"(index {index} of {len(candidates)} candidates)"
        )
        return winner

    def settle(self) -> Order:
        """Finish the current drawing and return its winner.

        Raises
        ------
        RuntimeError
            If no drawing is spinning.
        """
        if self._state is not DrawState.SPINNING or self._pending is None:
            raise RuntimeError("No drawing is in progress")
        self._state = DrawState.SETTLED
        return self._pending.winner

    def reset(self) -> None:
        """Return to ``IDLE``, discarding any unsettled selection."""
        if self._state is DrawState.SPINNING:
            logger.warning("Discarding an unsettled drawing")
        self._state = DrawState.IDLE
        self._pending = None


__all__ = ["DrawResult", "DrawState", "DrawingEngine"]
