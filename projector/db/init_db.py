"""
Database initialization helpers.

Models are imported so their tables get registered on Base.metadata.
"""

import logging

from sqlalchemy.engine import Engine

from projector.db.session import engine as default_engine
from projector.models.base import Base
from projector.models import project, user  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine = default_engine) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready (%s)", ", ".join(sorted(Base.metadata.tables)))
