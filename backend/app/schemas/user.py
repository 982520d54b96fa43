"""Pydantic schemas for Users and authentication."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import Field

from app.schemas.common import CamelModel


class UserCreate(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6)
    avatar: Optional[str] = None


class LoginRequest(CamelModel):
    email: str
    password: str


class UserOut(CamelModel):
    user_id: str
    first_name: str
    last_name: str
    email: str
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None


class TokenOut(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
