"""Sitemap endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from seo_paths.api.deps import get_db
from seo_paths.crud import crud_sitemap_log
from seo_paths.schemas.sitemap import (
    SitemapLogListResponse,
    SitemapLogResponse,
    SitemapSubmitResponse,
)
from seo_paths.services.indexer_notifier import indexer_notifier
from seo_paths.services.sitemap_assembler import sitemap_assembler

XML_MEDIA_TYPE = "application/xml"

# Served at the site root
public_router = APIRouter(tags=["Sitemap"])

router = APIRouter(
    prefix="/sitemap",
    tags=["Sitemap"],
)


@public_router.get("/sitemap.xml", summary="Sitemap", response_class=Response)
def get_sitemap(db: Session = Depends(get_db)) -> Response:
    """Single `<urlset>`, or a `<sitemapindex>` when the site needs several files."""
    documents = sitemap_assembler.render_sitemaps(sitemap_assembler.build_sitemap(db))
    if len(documents) == 1:
        return Response(content=documents[0], media_type=XML_MEDIA_TYPE)
    return Response(
        content=sitemap_assembler.render_sitemap_index(len(documents)),
        media_type=XML_MEDIA_TYPE,
    )


@public_router.get("/sitemap-{number}.xml", summary="Sitemap chunk", response_class=Response)
def get_sitemap_chunk(number: int, db: Session = Depends(get_db)) -> Response:
    """One numbered `<urlset>` chunk (1-based)."""
    documents = sitemap_assembler.render_sitemaps(sitemap_assembler.build_sitemap(db))
    if number < 1 or number > len(documents):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sitemap not found")
    return Response(content=documents[number - 1], media_type=XML_MEDIA_TYPE)


@router.post(
    "/submit",
    response_model=SitemapSubmitResponse,
    status_code=status.HTTP_200_OK,
    summary="Notify search engines",
    description="""
    Build the sitemap and notify IndexNow and Google. Failures are reported per
    target and logged; they never fail the request.
    """,
)
def submit_sitemap(db: Session = Depends(get_db)) -> SitemapSubmitResponse:
    """Build the sitemap and notify indexers."""
    build = sitemap_assembler.build_sitemap(db)
    urls = build.urls
    results = indexer_notifier.notify_indexers(
        db, urls, sitemap_url=sitemap_assembler.sitemap_url()
    )
    return SitemapSubmitResponse(url_count=len(urls), results=results)


@router.get(
    "/logs",
    response_model=SitemapLogListResponse,
    status_code=status.HTTP_200_OK,
    summary="Submission log",
)
def get_sitemap_logs(
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
) -> SitemapLogListResponse:
    """Most recent indexer submission attempts."""
    logs = crud_sitemap_log.get_recent(db, limit=limit)
    return SitemapLogListResponse(logs=[SitemapLogResponse.model_validate(log) for log in logs])
