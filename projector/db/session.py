import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from projector.core.config import settings
from projector.core.exceptions import StoreError

logger = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = settings.database_url

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {},
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def store_guard(db: Session, action: str) -> Iterator[None]:
    """
    Turn any SQLAlchemy failure inside the block into a StoreError,
    rolling the session back first.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Store failure while trying to %s", action)
        raise StoreError(f"Could not {action}.") from exc
