"""CRUD operations for Content."""

from datetime import datetime
from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session

from seo_paths.crud.base import CRUDBase
from seo_paths.models.content import Content
from seo_paths.schemas.entities import ContentCreate, ContentUpdate


class CRUDContent(CRUDBase[Content, ContentCreate, ContentUpdate]):
    """CRUD operations for Content."""
    
    def get_all(self, db: Session) -> List[Content]:
        """Get all content, including soft-deleted rows."""
        stmt = select(Content).order_by(Content.created_at, Content.id)
        return list(db.scalars(stmt).all())
    
    def get_live(self, db: Session) -> List[Content]:
        """Get non-deleted content."""
        stmt = (
            select(Content)
            .where(Content.is_deleted == False)
            .order_by(Content.created_at, Content.id)
        )
        return list(db.scalars(stmt).all())
    
    def reassign_category(self, db: Session, *, content: Content, category_id: str) -> Content:
        """Point a content item at a new category."""
        content.category = category_id
        content.updated_at = datetime.utcnow()
        try:
            db.add(content)
            db.commit()
            db.refresh(content)
        except Exception:
            db.rollback()
            raise
        return content


# Singleton instance
crud_content = CRUDContent(Content)
