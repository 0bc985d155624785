"""Pydantic schemas for request/response models."""
from writespace.schemas.auth import (
    SignupRequest,
    LoginRequest,
    LoginResponse,
    UserResponse,
    TokenPayload,
)
from writespace.schemas.post import (
    PostCreate,
    PostUpdate,
    PostResponse,
    PostStats,
)
from writespace.schemas.suggestion import AISuggestionRequest

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "LoginResponse",
    "UserResponse",
    "TokenPayload",
    "PostCreate",
    "PostUpdate",
    "PostResponse",
    "PostStats",
    "AISuggestionRequest",
]
