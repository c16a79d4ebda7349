from sqlalchemy import Column, Integer, String, Text

from pastebox.db.base import Base
from pastebox.db.types import UTCDateTime


class Document(Base):
    __tablename__ = "documents"

    id = Column(String(32), primary_key=True)
    content = Column(Text, nullable=False)
    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False)
    expires_at = Column(UTCDateTime, nullable=True, index=True)
    password_hash = Column(String(255), nullable=True)
    password_set_at = Column(UTCDateTime, nullable=True)
    view_count = Column(Integer, nullable=False, default=0, server_default="0")
    last_accessed_at = Column(UTCDateTime, nullable=True)
