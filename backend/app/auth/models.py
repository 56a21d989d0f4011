"""Authentication schemas."""
from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str


class Account(BaseModel):
    """Entry of the fixed login list; ``password`` holds a bcrypt hash."""
    username: str
    password: str = Field(repr=False)
    role: str


class TokenData(BaseModel):
    username: str
    role: Optional[str] = None
