"""CRUD operations for SitemapLog."""

from typing import List, Optional
from sqlalchemy import select, desc
from sqlalchemy.orm import Session

from seo_paths.crud.base import CRUDBase
from seo_paths.models.sitemap_log import SitemapLog
from seo_paths.schemas.sitemap import SitemapLogCreate


class CRUDSitemapLog(CRUDBase[SitemapLog, SitemapLogCreate, SitemapLogCreate]):
    """CRUD operations for SitemapLog."""
    
    def log(
        self,
        db: Session,
        *,
        action: str,
        status: str,
        submitted_to: str,
        url_count: Optional[int] = None,
        error_message: Optional[str] = None
    ) -> SitemapLog:
        """Record one submission attempt."""
        return self.create(
            db,
            obj_in={
                "action": action,
                "status": status,
                "submitted_to": submitted_to,
                "url_count": url_count,
                "error_message": error_message,
            },
        )
    
    def get_recent(self, db: Session, *, limit: int = 50) -> List[SitemapLog]:
        """Get most recent submission attempts."""
        stmt = select(SitemapLog).order_by(desc(SitemapLog.id)).limit(limit)
        return list(db.scalars(stmt).all())


# Singleton instance
crud_sitemap_log = CRUDSitemapLog(SitemapLog)
