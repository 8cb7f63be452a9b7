"""API v1 router aggregator."""

from fastapi import APIRouter

from seo_paths.api.v1.endpoints import categories, slugs, redirects, migrations, sitemap

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(categories.router)
api_router.include_router(slugs.router)
api_router.include_router(redirects.router)
api_router.include_router(migrations.router)
api_router.include_router(sitemap.router)

__all__ = ["api_router"]
