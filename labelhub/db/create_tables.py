"""Utility script to create the remote backend schema."""
from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from labelhub.core.config import get_settings

from .session import Base, build_engine
from . import models  # noqa: F401  # ensure models are imported for metadata

logger = logging.getLogger(__name__)


def create_all(engine: Engine | None = None) -> None:
    """Create the four tables on ``engine`` (default: the configured DATABASE_URL)."""
    engine = engine or build_engine(get_settings().database_url)
    Base.metadata.create_all(bind=engine)
    logger.info("Created tables: %s", ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        create_all()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
