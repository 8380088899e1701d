from sqlalchemy import Column, Integer, String, Text, DateTime, func
from blog.db.base import Base

class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    content = Column(Text, nullable=False)
    user = Column(String(64), nullable=False)
    # Local storage paths, never the remote source URL
    avatar_url = Column(String, nullable=True)
    thumbnail_url = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
