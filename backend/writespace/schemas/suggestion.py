"""AI writing suggestion schemas."""
from typing import Optional
from pydantic import BaseModel, Field


class AISuggestionRequest(BaseModel):
    """Content to review."""
    content: str = Field(min_length=1)
    title: Optional[str] = None
