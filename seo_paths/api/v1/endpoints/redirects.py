"""Redirect registry endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from seo_paths.api.deps import get_db
from seo_paths.core.exceptions import InvalidRedirectTypeException, RedirectNotFoundException
from seo_paths.schemas.redirect import (
    RedirectCreate,
    RedirectListResponse,
    RedirectRegisterResponse,
    RedirectResolveResponse,
    RedirectResponse,
    RedirectUpdate,
)
from seo_paths.services.redirect_registry import (
    VALID_REDIRECT_TYPES,
    normalize_url_path,
    redirect_registry,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/redirects",
    tags=["Redirects"],
)


@router.get(
    "/resolve",
    response_model=RedirectResolveResponse,
    status_code=status.HTTP_200_OK,
    summary="Resolve redirect",
    description="""
    Look up the active redirect for an old URL. A successful lookup increments
    the hit count. Query parameters of `url` are carried over to the target.

    Returns 404 when there is no usable redirect (never a homepage fallback).
    """,
)
def resolve_redirect(
    url: str = Query(..., min_length=1, description="Old URL path, optionally with query string"),
    db: Session = Depends(get_db),
) -> RedirectResolveResponse:
    """Resolve an old URL."""
    resolved = redirect_registry.resolve_redirect(db, url)
    if resolved is None:
        raise RedirectNotFoundException()
    return RedirectResolveResponse(
        old_url=normalize_url_path(url),
        location=resolved.location,
        status_code=resolved.status_code,
    )


@router.post(
    "",
    response_model=RedirectRegisterResponse,
    status_code=status.HTTP_200_OK,
    summary="Register redirect",
    description="""
    Register `old_url -> new_url` if `old_url` has no mapping yet. Registering
    an existing old URL is a no-op (`created: false`); use PUT to retarget.
    """,
)
def register_redirect(
    redirect_in: RedirectCreate,
    db: Session = Depends(get_db),
) -> RedirectRegisterResponse:
    """Register a redirect idempotently."""
    if redirect_in.redirect_type not in VALID_REDIRECT_TYPES:
        raise InvalidRedirectTypeException()
    try:
        created = redirect_registry.register_redirect(
            db,
            redirect_in.old_url,
            redirect_in.new_url,
            redirect_type=redirect_in.redirect_type,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return RedirectRegisterResponse(
        old_url=normalize_url_path(redirect_in.old_url),
        new_url=redirect_in.new_url.strip(),
        created=created,
    )


@router.get(
    "/top",
    response_model=RedirectListResponse,
    status_code=status.HTTP_200_OK,
    summary="Most used redirects",
)
def get_top_redirects(
    limit: int = Query(20, ge=1, le=200),
    db: Session = Depends(get_db),
) -> RedirectListResponse:
    """Redirects ordered by hit count."""
    redirects = redirect_registry.top_redirects(db, limit=limit)
    return RedirectListResponse(
        redirects=[RedirectResponse.model_validate(r) for r in redirects]
    )


@router.put(
    "/{redirect_id}",
    response_model=RedirectResponse,
    status_code=status.HTTP_200_OK,
    summary="Retarget redirect",
)
def update_redirect(
    redirect_id: int,
    redirect_in: RedirectUpdate,
    db: Session = Depends(get_db),
) -> RedirectResponse:
    """Explicitly change the target of an existing redirect."""
    try:
        redirect = redirect_registry.update_target(
            db, redirect_id, redirect_in.new_url, redirect_type=redirect_in.redirect_type
        )
    except ValueError:
        raise InvalidRedirectTypeException()
    if redirect is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Redirect not found")
    return RedirectResponse.model_validate(redirect)


@router.post(
    "/{redirect_id}/deactivate",
    response_model=RedirectResponse,
    status_code=status.HTTP_200_OK,
    summary="Deactivate redirect",
)
def deactivate_redirect(
    redirect_id: int,
    db: Session = Depends(get_db),
) -> RedirectResponse:
    """Stop serving a redirect (the row is kept)."""
    redirect = redirect_registry.deactivate(db, redirect_id)
    if redirect is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Redirect not found")
    return RedirectResponse.model_validate(redirect)
