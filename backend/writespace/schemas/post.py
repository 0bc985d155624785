"""Post schemas."""
import math
from typing import Optional, List, Literal
from pydantic import Field, computed_field, field_validator
from writespace.schemas.base import CamelModel, UTCDateTime


PostStatusType = Literal["draft", "published"]
PostSortType = Literal["newest", "oldest", "popular"]

WORDS_PER_MINUTE = 200


class PostCreate(CamelModel):
    """Schema for creating a post."""
    title: str = Field(min_length=1)
    excerpt: Optional[str] = None
    content: str = Field(min_length=1)
    category: str = Field(min_length=1)
    tags: List[str] = []
    status: PostStatusType = "draft"


class PostUpdate(CamelModel):
    """
    Patch for an existing post.

    Only the fields listed here can change. Fields left out of the request
    are untouched; ``excerpt`` may be cleared with an explicit null.
    """
    title: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = None
    content: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    tags: Optional[List[str]] = None
    status: Optional[PostStatusType] = None

    @field_validator("title", "content", "category", "tags", "status")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value


class PostResponse(CamelModel):
    """Post response schema."""
    id: int
    title: str
    excerpt: Optional[str] = None
    content: str
    category: str
    tags: List[str] = []
    author_id: int
    status: PostStatusType
    views: int
    published_at: Optional[UTCDateTime] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime

    @computed_field(alias="readTimeMinutes")
    @property
    def read_time_minutes(self) -> int:
        return read_time_minutes(self.content)


class PostStats(CamelModel):
    """Per-author dashboard counters."""
    total: int
    published: int
    drafts: int
    total_views: int


def read_time_minutes(content: str) -> int:
    """Estimated reading time at 200 words per minute."""
    words = len(content.split())
    if words == 0:
        return 0
    return max(1, math.ceil(words / WORDS_PER_MINUTE))
