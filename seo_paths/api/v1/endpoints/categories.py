"""Category path endpoints."""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from seo_paths.api.deps import get_db
from seo_paths.core.exceptions import CategoryNotFoundException
from seo_paths.crud import crud_category
from seo_paths.schemas.category import (
    BreadcrumbListResponse,
    CategoryListResponse,
    CategoryPathResponse,
    CategoryResponse,
    CategorySlugPathResponse,
    CategoryTreeNode,
    CategoryTreeResponse,
    CategoryUrlResponse,
)
from seo_paths.services.path_resolver import path_resolver

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
)


@router.get(
    "/tree",
    response_model=CategoryTreeResponse,
    status_code=status.HTTP_200_OK,
    summary="Get category tree",
    description="""
    Main categories (no parent) with their direct children, ordered by sort order.
    """,
)
def get_category_tree(
    active_only: bool = Query(True, description="Only include active categories"),
    db: Session = Depends(get_db),
) -> CategoryTreeResponse:
    """Get main categories with their children."""
    categories = crud_category.get_all_active(db) if active_only else crud_category.get_all(db)
    children_by_parent: dict[str, list] = {}
    for category in categories:
        if category.parent_id:
            children_by_parent.setdefault(category.parent_id, []).append(category)

    nodes = []
    for category in categories:
        if category.parent_id:
            continue
        node = CategoryTreeNode.model_validate(category)
        node.children = [
            CategoryResponse.model_validate(child)
            for child in children_by_parent.get(category.id, [])
        ]
        nodes.append(node)
    return CategoryTreeResponse(categories=nodes)


@router.get(
    "/popular",
    response_model=CategoryListResponse,
    status_code=status.HTTP_200_OK,
    summary="Get popular categories",
)
def get_popular_categories(
    limit: int = Query(10, ge=1, le=100, description="Maximum number of categories"),
    db: Session = Depends(get_db),
) -> CategoryListResponse:
    """Active categories by view count."""
    categories = crud_category.get_popular(db, limit=limit)
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in categories]
    )


@router.post(
    "/path-cache/clear",
    status_code=status.HTTP_200_OK,
    summary="Clear category path cache",
    description="""
    Drop every cached category path. Call after bulk category restructuring.
    """,
)
def clear_path_cache() -> dict:
    """Clear the path resolver cache."""
    removed = path_resolver.clear_cache()
    return {"cleared": removed}


@router.get(
    "/by-path/{path:path}",
    response_model=CategoryResponse,
    status_code=status.HTTP_200_OK,
    summary="Locate category by hierarchical path",
    description="""
    Resolve a path like `trading-strategies/scalping-m1-m15/xauusd-scalping`.

    Only the last segment is looked up unless `strict=true`, in which case the
    whole ancestor chain must match.
    """,
)
def locate_category_by_path(
    path: str,
    strict: bool = Query(False, description="Validate intermediate segments"),
    db: Session = Depends(get_db),
) -> CategoryResponse:
    """Locate a category from its path."""
    category = path_resolver.locate_by_path(db, path, strict=strict)
    if category is None:
        raise CategoryNotFoundException(detail=f"No category at path '{path}'")
    return CategoryResponse.model_validate(category)


@router.get(
    "/by-url",
    response_model=CategoryUrlResponse,
    status_code=status.HTTP_200_OK,
    summary="Resolve a category URL",
    description="""
    Split a URL like `/category/trading-strategies/scalping-m1-m15/my-thread` into
    the category it lives under and the trailing thread/content slug.

    A trailing segment that is itself a category slug is treated as a subcategory
    page (`content_slug` is null).
    """,
)
def locate_category_by_url(
    url: str = Query(..., min_length=1, description="Site-relative `/category/...` URL"),
    db: Session = Depends(get_db),
) -> CategoryUrlResponse:
    """Locate the category and entity slug of a hierarchical URL."""
    located = path_resolver.locate_by_url(db, url)
    if located is None:
        raise CategoryNotFoundException(detail=f"No category for URL '{url}'")
    category, content_slug = located
    return CategoryUrlResponse(
        category=CategoryResponse.model_validate(category),
        content_slug=content_slug,
    )


@router.get(
    "/by-slug/{slug}/path",
    response_model=CategorySlugPathResponse,
    status_code=status.HTTP_200_OK,
    summary="Resolve category path by slug",
)
def get_category_path_by_slug(
    slug: str,
    db: Session = Depends(get_db),
) -> CategorySlugPathResponse:
    """Resolve the root-first path of the category with this slug."""
    path = path_resolver.resolve_path_by_slug(db, slug)
    if not path:
        raise CategoryNotFoundException()
    return CategorySlugPathResponse(slug=slug, path=path, url=path_resolver.path_url(path))


@router.get(
    "/{category_id}/path",
    response_model=CategoryPathResponse,
    status_code=status.HTTP_200_OK,
    summary="Resolve category path",
)
def get_category_path(
    category_id: str,
    db: Session = Depends(get_db),
) -> CategoryPathResponse:
    """Resolve the root-first path of a category."""
    resolved = path_resolver.resolve(db, category_id)
    if not resolved.found:
        raise CategoryNotFoundException()

    return CategoryPathResponse(
        category_id=category_id,
        path=resolved.path,
        segments=resolved.segments,
        url=path_resolver.path_url(resolved.path),
        cycle_detected=resolved.cycle_detected,
        dangling_parent=resolved.dangling_parent,
    )


@router.get(
    "/{category_id}/breadcrumbs",
    response_model=BreadcrumbListResponse,
    status_code=status.HTTP_200_OK,
    summary="Get category breadcrumbs",
)
def get_category_breadcrumbs(
    category_id: str,
    db: Session = Depends(get_db),
) -> BreadcrumbListResponse:
    """Breadcrumbs from root to this category."""
    breadcrumbs = path_resolver.breadcrumbs(db, category_id)
    if not breadcrumbs:
        raise CategoryNotFoundException()
    return BreadcrumbListResponse(breadcrumbs=breadcrumbs)


@router.get(
    "/{category_id}/children",
    response_model=CategoryListResponse,
    status_code=status.HTTP_200_OK,
    summary="Get child categories",
)
def get_child_categories(
    category_id: str,
    db: Session = Depends(get_db),
) -> CategoryListResponse:
    """Active direct children of a category."""
    if crud_category.get(db, category_id) is None:
        raise CategoryNotFoundException()
    children = crud_category.get_children(db, parent_id=category_id)
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in children]
    )


@router.post(
    "/{category_id}/views",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Track category view",
)
def track_category_view(
    category_id: str,
    db: Session = Depends(get_db),
) -> None:
    """Increment the view counter of a category."""
    if not crud_category.increment_view_count(db, category_id=category_id):
        raise CategoryNotFoundException()
