"""Legacy category migration endpoints."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from seo_paths.api.deps import get_db
from seo_paths.schemas.migration import MigrationResult
from seo_paths.services.migration_engine import migration_engine

router = APIRouter(
    prefix="/migrations",
    tags=["Migrations"],
)


@router.post(
    "/content-categories",
    response_model=MigrationResult,
    status_code=status.HTTP_200_OK,
    summary="Migrate content categories",
    description="""
    Move content from legacy flat category values into the category tree.

    Safe to run repeatedly: already migrated items are skipped. Unmapped items
    are reported as failed and do not stop the run.
    """,
)
def migrate_content_categories(
    dry_run: bool = Query(False, description="Compute outcomes without writing"),
    db: Session = Depends(get_db),
) -> MigrationResult:
    """Run the content category migration."""
    return migration_engine.run_migration(db, dry_run=dry_run)
