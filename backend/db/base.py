"""Database configuration and session management."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from backend.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


def create_db_engine(database_url: str) -> Engine:
    """Create the database engine for ``database_url``."""
    if not database_url:
        raise ValueError("DATABASE_URL not configured")
    if database_url.startswith("sqlite"):
        # Route handlers run in FastAPI's threadpool
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(
        database_url,
        pool_pre_ping=True,  # Test connections before use
        pool_recycle=300,  # Recycle connections after 5 minutes
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine):
    """Initialize database tables."""
    from backend.db import tables  # noqa: F401

    Base.metadata.create_all(bind=engine)


@contextmanager
def store_call(action: str) -> Iterator[None]:
    """Translate database failures inside the block into StoreUnavailableError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception("Store %s failed", action)
        raise StoreUnavailableError() from e
