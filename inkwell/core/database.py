"""Database engine, session management and store-error translation."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from inkwell.core.config import settings
from inkwell.core.errors import StoreUnavailable

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False


@contextmanager
def store_operation(db: Session, operation: str) -> Iterator[None]:
    """
    Roll back and raise StoreUnavailable when the block hits a database error.

    Domain exceptions raised inside the block pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Store error during %s: %s", operation, e)
        raise StoreUnavailable(operation) from e
