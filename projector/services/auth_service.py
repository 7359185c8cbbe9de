# File: projector/services/auth_service.py

"""
Authentication service.

  - User registration (unique e-mail, hashed password)
  - Credential check for login
  - Lookup of the user behind a bearer token
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from projector.core.exceptions import AuthenticationError, ConflictError, StoreError
from projector.core.security import decode_access_token, hash_password, verify_password
from projector.db.session import store_guard
from projector.models.user import User
from projector.schemas.user import UserCreate

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    with store_guard(db, "look up user"):
        return db.scalars(select(User).where(User.email == email)).first()


def register_user(db: Session, payload: UserCreate) -> User:
    if get_user_by_email(db, payload.email) is not None:
        raise ConflictError(f"A user with e-mail '{payload.email}' already exists.")

    user = User(email=payload.email, hashed_password=hash_password(payload.password))
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError as exc:
        # lost a race with a concurrent signup for the same address
        db.rollback()
        raise ConflictError(f"A user with e-mail '{payload.email}' already exists.") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Store failure while registering %s", payload.email)
        raise StoreError("Could not register user.") from exc

    logger.info("Registered user %s", user.id)
    return user


def authenticate_user(
    db: Session,
    *,
    email: str,
    password: str,
) -> User:
    """
    Look up a user by e-mail and verify the password.

    Raises AuthenticationError without saying which half was wrong.
    """
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        logger.info("Failed login for %s", email)
        raise AuthenticationError("Incorrect e-mail or password.")
    return user


def user_from_token(db: Session, token: Optional[str]) -> User:
    if not token:
        raise AuthenticationError("Not authenticated.")

    user_id = decode_access_token(token)
    if user_id is None:
        raise AuthenticationError("Invalid or expired token.")

    with store_guard(db, "look up user"):
        user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("Token refers to an unknown user.")
    return user
