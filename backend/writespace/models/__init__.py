"""SQLAlchemy models."""
from writespace.models.user import User
from writespace.models.post import Post, PostStatus

__all__ = ["User", "Post", "PostStatus"]
