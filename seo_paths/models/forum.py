"""Forum thread and reply models."""

import uuid
from sqlalchemy import Column, String, Text, TIMESTAMP, ForeignKey, Index, Boolean
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class ForumThread(Base):
    """Model untuk thread forum diskusi."""
    
    __tablename__ = "forum_threads"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(500), nullable=False)
    slug = Column(String(200), nullable=False, unique=True, index=True)
    body = Column(Text, nullable=True)
    category_id = Column(String(36), nullable=False, index=True)
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    # Soft delete
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    deleted_at = Column(TIMESTAMP, nullable=True)
    
    __table_args__ = (
        Index('idx_thread_category_created', 'category_id', 'created_at'),
    )
    
    # Relationships
    replies = relationship(
        "ForumReply",
        back_populates="thread",
        cascade="all, delete-orphan",
        order_by="ForumReply.created_at.asc()"
    )


class ForumReply(Base):
    """Model untuk reply pada thread."""
    
    __tablename__ = "forum_replies"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    thread_id = Column(
        String(36),
        ForeignKey("forum_threads.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    slug = Column(String(200), nullable=False, unique=True, index=True)
    body = Column(Text, nullable=False)
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    
    # Relationships
    thread = relationship("ForumThread", back_populates="replies")
