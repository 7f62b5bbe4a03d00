"""Runtime settings loaded from the environment (and an optional ``.env``)."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .db.utils import resolve_sqlite_url

# Project root directory (repo root)
ROOT_DIR = Path(__file__).resolve().parents[1]

SYSTEM_NAME = "TARGI HASta"
BACKUP_VERSION = "1.0"
SUPERUSER_SECRET = "root.hasta"
DEFAULT_ADMIN_PASSWORD = "admin123"
MIN_ADMIN_PASSWORD_LENGTH = 5

ORDERS_KEY = "fairLotteryData"
EXHIBITORS_KEY = "fairLotteryExhibitors"
ADMIN_PASSWORD_KEY = "fairLotteryAdminPass"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one process."""

    database_url: str
    backup_dir: Path
    default_admin_password: str
    log_level: str


def _resolve_dir(value: str) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = ROOT_DIR / path
    return path.resolve()


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Read :class:`Settings` from environment variables.

    Parameters
    ----------
    env_file : Optional[Path], default: None
        Explicit ``.env`` file to load. When omitted python-dotenv searches
        upwards from the working directory.
    """
    load_dotenv(env_file)
    return Settings(
        database_url=resolve_sqlite_url(
            os.getenv("DB_URL", "sqlite:///./dev.db"), ROOT_DIR
        ),
        backup_dir=_resolve_dir(os.getenv("FAIRLOTTERY_BACKUP_DIR", "./backups")),
        default_admin_password=os.getenv(
            "FAIRLOTTERY_DEFAULT_ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD
        ),
        log_level=os.getenv("FAIRLOTTERY_LOG_LEVEL", "INFO").upper(),
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("fairlottery")
    logger.setLevel(level or get_settings().log_level)
    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    return logger
