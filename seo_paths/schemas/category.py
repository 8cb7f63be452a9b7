"""Pydantic schemas for Category."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from seo_paths.models.category import CategoryType


class CategoryBase(BaseModel):
    """Base schema for Category."""
    slug: str = Field(..., min_length=1, max_length=200, description="URL slug, unique")
    name: str = Field(..., min_length=1, max_length=200, description="Display name")
    description: Optional[str] = Field(None, description="Category description")
    parent_id: Optional[str] = Field(None, description="Parent category id, null for a root")
    category_type: CategoryType = Field(CategoryType.LEAF, description="main, sub or leaf")
    old_slug: Optional[str] = Field(None, max_length=200, description="Slug in the legacy flat scheme")
    sort_order: int = Field(0, description="Sort order among siblings")


class CategoryCreate(CategoryBase):
    """Schema for creating a category (used by seeding and tests)."""
    id: Optional[str] = None
    is_active: bool = True


class CategoryUpdate(BaseModel):
    """Schema for updating a category."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    parent_id: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class CategoryResponse(CategoryBase):
    """Schema for Category response."""
    id: str
    is_active: bool
    content_count: int
    view_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True


class CategoryTreeNode(CategoryResponse):
    """Main category with its direct children."""
    children: List[CategoryResponse] = []


class CategoryTreeResponse(BaseModel):
    """Response for the category tree."""
    categories: List[CategoryTreeNode]


class CategoryListResponse(BaseModel):
    """Response for listing categories."""
    categories: List[CategoryResponse]


class CategoryPathResponse(BaseModel):
    """Resolved hierarchical path for a category."""
    category_id: str
    path: str = Field(..., description="Slugs joined by '/', root first")
    segments: List[str]
    url: str = Field(..., description="Site-relative category URL")
    cycle_detected: bool = False
    dangling_parent: bool = False


class CategorySlugPathResponse(BaseModel):
    """Hierarchical path of a category addressed by its own slug."""
    slug: str
    path: str
    url: str


class CategoryUrlResponse(BaseModel):
    """Category a `/category/...` URL points at, plus the trailing entity slug if any."""
    category: CategoryResponse
    content_slug: Optional[str] = Field(None, description="Thread or content slug after the category path")


class Breadcrumb(BaseModel):
    """One breadcrumb entry."""
    name: str
    slug: str
    url: str


class BreadcrumbListResponse(BaseModel):
    """Breadcrumbs from root to leaf."""
    breadcrumbs: List[Breadcrumb]
