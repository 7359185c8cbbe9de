# File: projector/models/base.py

import uuid

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.
    """
    pass


def new_id() -> str:
    """Opaque identifier assigned to new rows."""
    return uuid.uuid4().hex
