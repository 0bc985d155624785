"""Authentication schemas."""
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from writespace.schemas.base import CamelModel, UTCDateTime


class SignupRequest(BaseModel):
    """Signup request schema."""
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    """Login request schema."""
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    """Login response with JWT token."""
    access_token: str
    token_type: str = "bearer"


class UserResponse(CamelModel):
    """User information response."""
    id: int
    name: str
    email: str
    created_at: UTCDateTime


class TokenPayload(BaseModel):
    """JWT token payload."""
    sub: int  # user_id, encoded as a string in the token
    exp: datetime
