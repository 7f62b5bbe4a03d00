"""Durable storage and backup documents."""

from .backup import (
    Snapshot,
    backup_filename,
    build_snapshot,
    parse_snapshot,
    read_backup,
    write_backup,
)
from .gateway import ImportResult, LoadedState, PersistenceGateway

__all__ = [
    "ImportResult",
    "LoadedState",
    "PersistenceGateway",
    "Snapshot",
    "backup_filename",
    "build_snapshot",
    "parse_snapshot",
    "read_backup",
    "write_backup",
]
