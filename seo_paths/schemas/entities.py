"""Pydantic schemas for content, forum and profile entities.

These entities are owned by external collaborators; the schemas exist so the
CRUD helpers can create rows for seeding and tests.
"""

from typing import Optional
from pydantic import BaseModel, Field


class ContentCreate(BaseModel):
    id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=500)
    slug: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: str = Field(..., min_length=1, max_length=200, description="Legacy value or category id")
    is_deleted: bool = False


class ContentUpdate(BaseModel):
    title: Optional[str] = None
    category: Optional[str] = None
    is_deleted: Optional[bool] = None


class ForumThreadCreate(BaseModel):
    id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=500)
    slug: str = Field(..., min_length=1, max_length=200)
    body: Optional[str] = None
    category_id: str
    is_deleted: bool = False


class ForumThreadUpdate(BaseModel):
    title: Optional[str] = None
    category_id: Optional[str] = None
    is_deleted: Optional[bool] = None


class ForumReplyCreate(BaseModel):
    id: Optional[str] = None
    thread_id: str
    slug: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1)


class ForumReplyUpdate(BaseModel):
    body: Optional[str] = None
    is_deleted: Optional[bool] = None


class UserCreate(BaseModel):
    id: Optional[str] = None
    username: str = Field(..., min_length=1, max_length=100)
    is_active: bool = True


class UserUpdate(BaseModel):
    is_active: Optional[bool] = None


class BrokerCreate(BaseModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200)


class BrokerUpdate(BaseModel):
    name: Optional[str] = None
