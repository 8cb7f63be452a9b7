"""Broker model (read-only here; profiles feed the sitemap)."""

import uuid
from sqlalchemy import Column, String, TIMESTAMP
from sqlalchemy.sql import func
from ..database import Base


class Broker(Base):
    __tablename__ = "brokers"
    
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    slug = Column(String(200), nullable=False, unique=True, index=True)
    
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
