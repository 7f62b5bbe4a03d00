"""Wiring of settings, storage and the core components for one process."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .accounts import AccountRegistry
from .config import Settings, get_settings
from .db.engine import create_schema, get_sessionmaker, make_engine
from .ledger import OrderLedger
from .prize_draw.engine import DrawingEngine
from .state import AppState
from .storage.gateway import PersistenceGateway

logger = logging.getLogger(__name__)


@dataclass
class FairLottery:
    """All long-lived components, sharing one :class:`AppState`."""

    state: AppState
    gateway: PersistenceGateway
    ledger: OrderLedger
    accounts: AccountRegistry
    engine: DrawingEngine
    backup_dir: Path

    @classmethod
    def build(
        cls,
        gateway: PersistenceGateway,
        backup_dir: Path,
        *,
        rng: Optional[random.Random] = None,
    ) -> "FairLottery":
        """Load the state through ``gateway`` and construct the components."""
        state = AppState.load(gateway)
        return cls(
            state=state,
            gateway=gateway,
            ledger=OrderLedger(state, gateway, rng=rng, backup_dir=backup_dir),
            accounts=AccountRegistry(state, gateway, rng=rng),
            engine=DrawingEngine(rng=rng),
            backup_dir=backup_dir,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> "FairLottery":
        """Open the configured database, creating its table if needed."""
        settings = settings or get_settings()
        engine = make_engine(settings.database_url)
        create_schema(engine)
        gateway = PersistenceGateway(
            get_sessionmaker(engine),
            default_admin_password=settings.default_admin_password,
        )
        logger.info(f"Opened store {engine.url.render_as_string(hide_password=True)}")
        return cls.build(gateway, settings.backup_dir, rng=rng)

    @classmethod
    def open(
        cls,
        database_url: str,
        backup_dir: Path,
        *,
        rng: Optional[random.Random] = None,
    ) -> "FairLottery":
        """Open an explicit database URL (handy for tests and scripts)."""
        settings = get_settings()
        return cls.from_settings(
            Settings(
                database_url=database_url,
                backup_dir=Path(backup_dir),
                default_admin_password=settings.default_admin_password,
                log_level=settings.log_level,
            ),
            rng=rng,
        )


__all__ = ["FairLottery"]
