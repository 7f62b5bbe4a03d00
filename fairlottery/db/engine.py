from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ..config import get_settings


def make_engine(database_url: Optional[str] = None, echo: bool = False):
    url = database_url or get_settings().database_url
    engine = create_engine(
        url,
        echo=echo,
        future=True,
    )
    return engine


def get_sessionmaker(engine):
    return sessionmaker(
        bind=engine,
        # Records are plain JSON payloads, keep them readable after commit.
        expire_on_commit=False,
        future=True,
    )


def create_schema(engine) -> None:
    """Create every table known to the ORM metadata if it does not exist yet."""
    from ..models import Base

    Base.metadata.create_all(engine)
