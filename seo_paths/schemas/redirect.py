"""Pydantic schemas for CategoryRedirect."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class RedirectBase(BaseModel):
    """Base schema for CategoryRedirect."""
    old_url: str = Field(..., min_length=1, max_length=1000, description="Previously indexed URL path")
    new_url: str = Field(..., min_length=1, max_length=1000, description="Current URL path")


class RedirectCreate(RedirectBase):
    """Schema for registering a redirect."""
    redirect_type: int = Field(301, description="301 permanent or 302 temporary")


class RedirectUpdate(BaseModel):
    """Schema for explicitly changing a redirect target."""
    new_url: str = Field(..., min_length=1, max_length=1000)
    redirect_type: Optional[int] = Field(None, description="301 permanent or 302 temporary")


class RedirectResponse(RedirectBase):
    """Schema for CategoryRedirect response."""
    id: int
    redirect_type: int
    hit_count: int
    last_used: Optional[datetime] = None
    is_active: bool
    created_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True


class RedirectRegisterResponse(BaseModel):
    """Result of an idempotent registration."""
    old_url: str
    new_url: str
    created: bool = Field(..., description="False when a mapping already existed")


class RedirectResolveResponse(BaseModel):
    """Resolved redirect target."""
    old_url: str
    location: str = Field(..., description="Target URL with the original query string")
    status_code: int


class RedirectListResponse(BaseModel):
    """Response for listing redirects."""
    redirects: List[RedirectResponse]
