"""Engine and session factory for the remote (SQL) backend.

Nothing here reads configuration: callers pass the database URL they were
given, so each backend instance owns its engine.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    url = (database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the remote backend.")
    return create_engine(url, future=True, pool_pre_ping=True)


def build_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    session: Session = factory()
    try:
        yield session
    finally:
        session.close()
