"""Pydantic schemas for sitemap assembly and indexer submission."""

from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class SitemapEntry(BaseModel):
    """One URL in the site inventory."""
    loc: str = Field(..., description="Absolute URL")
    lastmod: date
    entity_type: str = Field(..., description="home, static, category, thread, content, user, broker")
    resolved: bool = Field(True, description="False when the entity's category path could not be resolved")


class SitemapBuild(BaseModel):
    """Result of a sitemap build."""
    entries: List[SitemapEntry]
    unresolved_count: int = 0

    @property
    def urls(self) -> List[str]:
        """Absolute URLs of every resolved entry."""
        return [entry.loc for entry in self.entries if entry.resolved]


class IndexerNotifyResult(BaseModel):
    """Outcome of one indexer notification."""
    target: str
    success: bool
    url_count: Optional[int] = None
    error: Optional[str] = None


class SitemapSubmitResponse(BaseModel):
    """Response for a sitemap submission."""
    url_count: int
    results: List[IndexerNotifyResult]


class SitemapLogCreate(BaseModel):
    action: str
    status: str
    submitted_to: str
    url_count: Optional[int] = None
    error_message: Optional[str] = None


class SitemapLogResponse(SitemapLogCreate):
    id: int
    created_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True


class SitemapLogListResponse(BaseModel):
    logs: List[SitemapLogResponse]
