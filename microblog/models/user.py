"""User model."""
from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from microblog.core.timeutils import utcnow
from microblog.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    bio = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Deletes cascade in the database; passive_deletes keeps the ORM out of it
    posts = relationship("Post", back_populates="user", passive_deletes=True)
    replies = relationship("Reply", back_populates="user", passive_deletes=True)
    likes = relationship("Like", back_populates="user", passive_deletes=True)
