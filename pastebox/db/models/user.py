from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from pastebox.db.base import Base
from pastebox.db.types import UTCDateTime


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(UTCDateTime, nullable=False)

    # Relationships
    favorites = relationship("Favorite", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
