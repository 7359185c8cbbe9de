# File: projector/api/deps.py

from collections.abc import Generator
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from projector.db.session import SessionLocal
from projector.models.user import User
from projector.services.auth_service import user_from_token

# auto_error=False so a missing header goes through our 401 handler
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the requester from the ``Authorization: Bearer <token>`` header.
    """
    token = credentials.credentials if credentials else None
    return user_from_token(db, token)
