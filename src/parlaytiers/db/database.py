"""Database helpers for the parlay engine."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from parlaytiers.config import get_settings
from parlaytiers.db.models import Base

settings = get_settings()
engine = create_engine(str(settings.database_url), future=True, echo=False)
SessionLocal = sessionmaker(bind=engine, class_=Session, expire_on_commit=False, autoflush=False)

__all__ = ["engine", "SessionLocal", "get_session", "init_db"]


def init_db() -> None:
    Base.metadata.create_all(bind=engine)


@contextmanager
def get_session(factory: sessionmaker = SessionLocal) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
