"""Content model for marketplace listings."""

import uuid
from sqlalchemy import Column, String, Text, TIMESTAMP, Boolean, Index
from sqlalchemy.sql import func
from ..database import Base


class Content(Base):
    """Model untuk item marketplace (EA, indicator, source code, ...)."""
    
    __tablename__ = "content"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(500), nullable=False)
    slug = Column(String(200), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    
    # Either a legacy flat category value or a Category.id after migration
    category = Column(String(200), nullable=False, index=True)
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    # Soft delete
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    deleted_at = Column(TIMESTAMP, nullable=True)
    
    __table_args__ = (
        Index('idx_content_category_deleted', 'category', 'is_deleted'),
    )
