"""Pydantic schemas for slug generation."""

from enum import Enum
from pydantic import BaseModel, Field


class EntityClass(str, Enum):
    """Entity classes that own a slug namespace."""
    CONTENT = "content"
    THREAD = "thread"
    REPLY = "reply"


class SlugRequest(BaseModel):
    """Request a unique slug for a new entity."""
    title: str = Field(..., max_length=500, description="Human readable title")
    entity_class: EntityClass = Field(..., description="content, thread or reply")


class SlugResponse(BaseModel):
    """Generated slug."""
    slug: str
    entity_class: EntityClass
