"""Slug generation endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from seo_paths.api.deps import get_db
from seo_paths.schemas.slug import SlugRequest, SlugResponse
from seo_paths.services.slug_generator import slug_generator

router = APIRouter(
    prefix="/slugs",
    tags=["Slugs"],
)


@router.post(
    "",
    response_model=SlugResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate unique slug",
    description="""
    Generate a URL slug for a new entity, unique within its entity class.

    Collisions get sequential suffixes: `title`, `title-1`, `title-2`, ...
    The slug is not reserved; the caller creates the entity with it.
    """,
)
def generate_slug(
    slug_in: SlugRequest,
    db: Session = Depends(get_db),
) -> SlugResponse:
    """Generate a unique slug."""
    slug = slug_generator.generate_slug(db, slug_in.title, slug_in.entity_class)
    return SlugResponse(slug=slug, entity_class=slug_in.entity_class)
