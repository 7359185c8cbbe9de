# File: projector/schemas/user.py

from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    email: EmailStr


class UserCreate(UserBase):
    password: str = Field(min_length=8, max_length=128)


class UserLogin(UserBase):
    password: str


class UserRead(UserBase):
    id: str

    class Config:
        from_attributes = True  # Pydantic v2: replaces orm_mode


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
