"""SQLAlchemy engine, session factory and transaction helpers."""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bloodconnect.core.config import settings

logger = logging.getLogger(__name__)


def get_engine(url: str = None):
    url = url or settings.DATABASE_URL
    if url.startswith("sqlite"):
        # SQLite connections are shared across FastAPI's threadpool
        return create_engine(url, connect_args={"check_same_thread": False}, echo=False)
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
    )


engine = get_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def init_db(bind=None) -> None:
    """Create tables if they do not exist."""
    from bloodconnect import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Commit everything done inside the block as one unit, or roll all of it back.

    Usage:
        with transaction(db):
            db.add(a)
            db.add(b)
    """
    try:
        yield db
        db.commit()
    except Exception:
        logger.error("Transaction failed, rolling back", exc_info=True)
        db.rollback()
        raise
