"""Category model for the hierarchical content taxonomy."""

import uuid
from enum import Enum
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, Boolean, Index, Enum as SQLEnum
from sqlalchemy.sql import func
from ..database import Base


class CategoryType(str, Enum):
    """Position of a category in the tree."""
    MAIN = "main"
    SUB = "sub"
    LEAF = "leaf"


class Category(Base):
    """Model untuk node pada taxonomy kategori (parent-pointer)."""
    
    __tablename__ = "categories"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    slug = Column(String(200), nullable=False, unique=True, index=True)  # xauusd-scalping
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    
    # Not a foreign key: parent data comes from an external admin process and may be corrupt
    parent_id = Column(String(36), nullable=True, index=True)
    category_type = Column(
        SQLEnum(CategoryType, name="category_type"),
        nullable=False,
        default=CategoryType.LEAF,
    )
    
    # Breadcrumb left for the legacy -> nested migration
    old_slug = Column(String(200), nullable=True, index=True)
    
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    sort_order = Column(Integer, default=0, nullable=False)
    
    # Denormalized counters maintained by this service
    content_count = Column(Integer, default=0, nullable=False)
    view_count = Column(Integer, default=0, nullable=False)
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    __table_args__ = (
        Index('idx_category_parent_sort', 'parent_id', 'sort_order'),
    )
