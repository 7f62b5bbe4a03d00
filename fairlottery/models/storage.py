from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import DateTime, JSON, String, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from .base import Base


class StorageRecord(Base):
    """A named durable slot holding one JSON value.

    The application keeps exactly three of these (orders, exhibitors and the
    admin password). Every write replaces ``value`` wholesale.
    """

    __tablename__ = "storage_records"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return f"<StorageRecord(key={self.key!r}, updated_at={self.updated_at})>"

    @classmethod
    def get_by_key(cls, session: Session, key: str) -> Optional["StorageRecord"]:
        """Return the record stored under ``key`` if it exists."""

        return session.scalar(select(cls).where(cls.key == key))

    @classmethod
    def put(cls, session: Session, key: str, value: Any) -> "StorageRecord":
        """Insert or overwrite the record stored under ``key``."""

        record = cls.get_by_key(session, key)
        if record is None:
            record = cls(key=key, value=value)
            session.add(record)
        else:
            record.value = value
            record.updated_at = datetime.now(timezone.utc)
        return record
