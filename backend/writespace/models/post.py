"""Post model."""
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from writespace.database import Base, utcnow
import enum


class PostStatus(str, enum.Enum):
    """Post lifecycle status values."""
    DRAFT = "draft"
    PUBLISHED = "published"


class Post(Base):
    """Blog post authored by a user."""

    __tablename__ = "posts"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    excerpt = Column(Text, nullable=True)
    content = Column(Text, nullable=False)
    category = Column(String(100), nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    # No foreign key: a post may reference an author that does not exist
    author_id = Column(Integer, nullable=False, index=True)
    status = Column(
        String(20),
        nullable=False,
        default=PostStatus.DRAFT.value,
    )
    views = Column(Integer, nullable=False, default=0)
    published_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    @property
    def is_published(self) -> bool:
        return self.status == PostStatus.PUBLISHED.value

    def __repr__(self):
        return f"<Post(id={self.id}, status={self.status})>"
