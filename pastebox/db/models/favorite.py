from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from pastebox.db.base import Base
from pastebox.db.types import UTCDateTime


class Favorite(Base):
    __tablename__ = "favorites"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(2048), nullable=False)
    title = Column(String(512), nullable=False)
    created_at = Column(UTCDateTime, nullable=False)

    # Relationships
    user = relationship("User", back_populates="favorites")
