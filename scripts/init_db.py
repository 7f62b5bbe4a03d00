from __future__ import annotations

from sqlalchemy import inspect

from fairlottery.config import configure_logging
from fairlottery.db.engine import create_schema, make_engine


def print_tables(engine) -> None:
    """Inspect the configured database and print all table names."""
    insp = inspect(engine)
    print("Current tables:", ", ".join(sorted(insp.get_table_names())))


def main() -> None:
    """Create the storage table if missing and report the resulting schema."""
    configure_logging()
    engine = make_engine()
    create_schema(engine)
    print_tables(engine)


if __name__ == "__main__":
    main()
