"""Schema drift detection between the ORM metadata and a live database."""

from __future__ import annotations

from alembic.autogenerate import api as ag_api
from alembic.runtime.migration import MigrationContext
from sqlalchemy.engine import Engine

from ..models import Base


def detect_schema_drift(engine: Engine) -> list:
    """Return the alembic operations needed to bring ``engine`` up to date.

    An empty list means the database matches :data:`Base.metadata`.

    Raises
    ------
    RuntimeError
        If alembic does not produce an upgrade operation container.
    """
    with engine.connect() as connection:
        context = MigrationContext.configure(
            connection=connection,
            opts={
                "compare_type": True,
                "compare_server_default": True,
                "render_as_batch": connection.dialect.name == "sqlite",
            },
        )
        migration = ag_api.produce_migrations(context, Base.metadata)
    upgrade_ops = migration.upgrade_ops
    if upgrade_ops is None:
        raise RuntimeError("alembic did not produce upgrade operations")
    if upgrade_ops.is_empty():
        return []
    return list(upgrade_ops.ops or [])


__all__ = ["detect_schema_drift"]
