"""CategoryRedirect model for old -> new URL mappings."""

from sqlalchemy import Column, Integer, String, TIMESTAMP, Boolean
from sqlalchemy.sql import func
from ..database import Base


PERMANENT_REDIRECT = 301
TEMPORARY_REDIRECT = 302


class CategoryRedirect(Base):
    """Model untuk redirect URL lama ke URL baru.

    Rows are append-only: they are deactivated, never deleted.
    """
    
    __tablename__ = "category_redirects"
    
    id = Column(Integer, primary_key=True, index=True)
    old_url = Column(String(1000), nullable=False, unique=True, index=True)
    new_url = Column(String(1000), nullable=False)
    redirect_type = Column(Integer, nullable=False, default=PERMANENT_REDIRECT)  # 301 / 302
    
    # Usage analytics
    hit_count = Column(Integer, nullable=False, default=0)
    last_used = Column(TIMESTAMP, nullable=True)
    
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())
