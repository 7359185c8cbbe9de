# File: projector/api/v1/routes_auth.py

"""
Auth API routes.

Registration, login (returns a bearer token) and a "who am I" lookup
used by the client to learn its own user id.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from projector.api.deps import get_current_user, get_db
from projector.core.security import create_access_token
from projector.models.user import User
from projector.schemas.user import Token, UserCreate, UserLogin, UserRead
from projector.services.auth_service import authenticate_user, register_user

router = APIRouter()


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="User registration",
)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    return register_user(db, payload)


@router.post("/login", response_model=Token, summary="User login")
def login(payload: UserLogin, db: Session = Depends(get_db)):
    """
    Exchange e-mail and password for an access token.
    """
    user = authenticate_user(db, email=payload.email, password=payload.password)
    return Token(access_token=create_access_token(user.id))


@router.get("/me", response_model=UserRead, summary="Current user")
def me(current_user: User = Depends(get_current_user)):
    return current_user
