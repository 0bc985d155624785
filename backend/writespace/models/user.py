"""User model."""
from sqlalchemy import Column, Integer, String, DateTime
from writespace.database import Base, utcnow


class User(Base):
    """Registered author."""

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    # Uniqueness is checked at signup, not by the schema
    email = Column(String(255), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
