"""SitemapLog model for indexer submission attempts."""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class SitemapLog(Base):
    """Model untuk log submission sitemap ke search engine."""
    
    __tablename__ = "sitemap_logs"
    
    id = Column(Integer, primary_key=True, index=True)
    action = Column(String(50), nullable=False)  # submit_indexnow, submit_google
    status = Column(String(20), nullable=False)  # success, error
    url_count = Column(Integer, nullable=True)
    submitted_to = Column(String(100), nullable=False)  # bing,yandex / google
    error_message = Column(Text, nullable=True)
    
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
