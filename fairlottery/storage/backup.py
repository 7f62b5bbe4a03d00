"""Portable backup documents: building, validating and file I/O."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from ..config import BACKUP_VERSION, SYSTEM_NAME
from ..exceptions import InvalidBackup
from ..models import ExhibitorAccount, Order
from ..models.utils import now_millis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Validated content of a backup document.

    Attributes
    ----------
    timestamp : Optional[int]
        Export time in epoch milliseconds, when the document carries one.
    orders : Optional[list[Order]]
        Every order in ledger order; ``None`` when the document omits the list.
    exhibitors : Optional[list[ExhibitorAccount]]
        Every exhibitor account; ``None`` when the document omits the list.
    admin_password : Optional[str]
        Admin credential at export time; ``None`` when the document omits it.
    """

    timestamp: Optional[int]
    orders: Optional[list[Order]]
    exhibitors: Optional[list[ExhibitorAccount]]
    admin_password: Optional[str]


def build_snapshot(
    orders: Iterable[Order],
    exhibitors: Iterable[ExhibitorAccount],
    admin_password: str,
    *,
    timestamp: Optional[int] = None,
) -> dict[str, Any]:
    """Serialize the full application state into a backup document."""

    return {
        "timestamp": timestamp if timestamp is not None else now_millis(),
        "version": BACKUP_VERSION,
        "systemName": SYSTEM_NAME,
        "data": {
            "orders": [order.to_json() for order in orders],
            "exhibitors": [account.to_json() for account in exhibitors],
            "adminPassword": admin_password,
        },
    }


def _parse_list(raw: Any, label: str, parser) -> Optional[list]:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise InvalidBackup(f"backup {label} must be a list")
    parsed = []
    for position, entry in enumerate(raw):
        try:
            parsed.append(parser(entry))
        except ValueError as exc:
            raise InvalidBackup(f"backup {label}[{position}] is invalid: {exc}") from exc
    return parsed


def parse_snapshot(document: Any) -> Snapshot:
    """Validate a backup document and return its content.

    The document is accepted only when ``systemName`` equals the product tag
    and a ``data`` object is present. Every order and exhibitor entry is
    parsed up front so callers can apply the result all-or-nothing.

    Raises
    ------
    InvalidBackup
        If the tag, the payload, or any entry inside it is malformed.
    """
    if not isinstance(document, Mapping):
        raise InvalidBackup("backup document must be a JSON object")
    if document.get("systemName") != SYSTEM_NAME:
        raise InvalidBackup("backup document was not produced by this system")
    data = document.get("data")
    if not isinstance(data, Mapping):
        raise InvalidBackup("backup document has no data payload")

    orders = _parse_list(data.get("orders"), "orders", Order.from_json)
    exhibitors = _parse_list(
        data.get("exhibitors"), "exhibitors", ExhibitorAccount.from_json
    )

    if orders is not None:
        order_ids = [order.id for order in orders]
        if len(set(order_ids)) != len(order_ids):
            raise InvalidBackup("backup orders contain duplicate ids")
        tickets = [order.ticket_number for order in orders]
        if len(set(tickets)) != len(tickets):
            raise InvalidBackup("backup orders contain duplicate ticket numbers")

    admin_password = data.get("adminPassword")
    if admin_password is not None and not isinstance(admin_password, str):
        raise InvalidBackup("backup adminPassword must be a string")
    if admin_password == "":
        admin_password = None

    timestamp = document.get("timestamp")
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        timestamp = None

    return Snapshot(
        timestamp=int(timestamp) if timestamp is not None else None,
        orders=orders,
        exhibitors=exhibitors,
        admin_password=admin_password,
    )


def dumps_document(document: Mapping[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def loads_document(text: Union[str, bytes]) -> Any:
    """Decode a backup file's text, mapping JSON errors to :class:`InvalidBackup`."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidBackup(f"backup file is not valid JSON: {exc}") from exc


def backup_filename(timestamp: Optional[int] = None) -> str:
    """Return the timestamped file name used for exported backups."""
    millis = timestamp if timestamp is not None else now_millis()
    moment = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    return f"targi_hasta_backup_{moment.strftime('%Y-%m-%dT%H-%M-%S')}.json"


def write_backup(document: Mapping[str, Any], directory: Union[str, Path]) -> Path:
    """Write ``document`` into ``directory`` and return the created file path.

    Existing files are never overwritten. When the timestamped name is taken
    (two backups within one second) a ``_2``, ``_3``... suffix is appended.
    """
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    name = backup_filename(document.get("timestamp"))
    stem, suffix = name[: -len(".json")], ".json"
    text = dumps_document(document)

    path = target_dir / name
    attempt = 1
    while True:
        try:
            with open(path, "x", encoding="utf-8") as fh:
                fh.write(text)
            break
        except FileExistsError:
            attempt += 1
            path = target_dir / f"{stem}_{attempt}{suffix}"
    logger.info(f"Backup written to {path}")
    return path


def read_backup(path: Union[str, Path]) -> Any:
    """Read and decode the backup document stored at ``path``."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise InvalidBackup(f"cannot read backup file {path}: {exc}") from exc
    return loads_document(raw)


__all__ = [
    "Snapshot",
    "backup_filename",
    "build_snapshot",
    "dumps_document",
    "loads_document",
    "parse_snapshot",
    "read_backup",
    "write_backup",
]
