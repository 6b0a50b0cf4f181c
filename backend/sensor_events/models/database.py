"""Database engine, session factory, and table bootstrap for SQLAlchemy."""

import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

logger = logging.getLogger(__name__)


class ClimateBase(DeclarativeBase):
    """Metadata for the humidity/temperature schema."""


class TelemetryBase(DeclarativeBase):
    """Metadata for the LDR/distance/servo schema."""


# Both variants name their table "events", so each gets its own metadata
_METADATA = {
    "climate": ClimateBase.metadata,
    "telemetry": TelemetryBase.metadata,
}


def make_engine(database_url: str) -> Engine:
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False},  # SQLite needs this for multi-thread
        echo=False,
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for FastAPI endpoints."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_database(engine: Engine, variant: str, fail_fast: bool = False) -> bool:
    """Create the events table for ``variant`` if it does not exist.

    Failures are logged and reported through the return value. With
    ``fail_fast`` they are raised instead so the process refuses to start.
    """
    # Models must be imported so they register with their metadata
    from . import climate_event  # noqa: F401
    from . import telemetry_event  # noqa: F401

    try:
        with engine.connect() as conn:
            # WAL lets readers proceed while a request is writing
            conn.execute(text("PRAGMA journal_mode=WAL"))
            conn.commit()
    except SQLAlchemyError as e:
        logger.error("Error opening database: %s", e)
        if fail_fast:
            raise
        return False
    logger.info("Connected to the SQLite database.")

    try:
        _METADATA[variant].create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error("Error creating table: %s", e)
        if fail_fast:
            raise
        return False
    return True
